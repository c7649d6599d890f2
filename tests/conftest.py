"""Pytest fixtures for Lodestar tests."""

from pathlib import Path

import pytest

from lodestar.models.mock import MockModel
from lodestar.workspace.roots import Workspace

# Minimal PNG header; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56


def _write(root: Path, rel: str, content: str | bytes) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """A small project tree.

    ws/
        README.md
        assets/logo.png
        lib/format.py
        src/app.ts
        src/utils/format.ts
        src/utils/format.test.ts
        node_modules/pkg/format.js   (excluded by default)
        .git/config                  (excluded by default)
    """
    root = tmp_path / "ws"
    _write(root, "README.md", "# Demo\n\nA demo project.\n")
    _write(root, "assets/logo.png", PNG_BYTES)
    _write(root, "lib/format.py", "def fmt(x):\n    return str(x)\n")
    _write(root, "src/app.ts", "import { fmt } from './utils/format';\n")
    _write(root, "src/utils/format.ts", "export const fmt = (x: unknown) => String(x);\n")
    _write(root, "src/utils/format.test.ts", "test('fmt', () => {});\n")
    _write(root, "node_modules/pkg/format.js", "module.exports = {};\n")
    _write(root, ".git/config", "[core]\n")
    return root


@pytest.fixture
def workspace(workspace_dir: Path) -> Workspace:
    """Single-root workspace over workspace_dir."""
    return Workspace.from_paths([workspace_dir])


@pytest.fixture
def mock_model() -> MockModel:
    """Create a mock model for testing."""
    return MockModel(responses=["Done."])
