"""Editor context bridge.

Carries the editor state a front-end knows and the core does not: open
workspace folders, the focused file and its language, the selection,
cursor position, and recently opened files. It seeds the workspace roots
and the "Current workspace context" section of the system prompt.

Context can be provided via:
- Environment variable: LODESTAR_IDE_CONTEXT (path to JSON file)
- CLI option: --ide-context <path>
- Direct construction in code

Example JSON format:
{
    "workspace_folders": ["/path/to/workspace"],
    "focused_file": "/path/to/workspace/src/app.ts",
    "language": "typescript",
    "selection": "const x = 1;",
    "cursor_position": [10, 5],
    "open_files": ["src/app.ts", "src/util.ts"]
}
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class EditorContext:
    """Editor state supplied by the front-end."""

    workspace_folders: list[str] = field(default_factory=list)
    """Workspace folders (multi-root), in editor order."""

    focused_file: str | None = None
    """Currently focused file path."""

    language: str | None = None
    """Language id of the focused file."""

    selection: str | None = None
    """Selected text content."""

    cursor_position: tuple[int, int] | None = None
    """Cursor position as (line, column), 0-indexed."""

    open_files: list[str] = field(default_factory=list)
    """Recently opened files, most recent first."""

    @classmethod
    def from_json(cls, data: dict) -> EditorContext:
        """Parse from JSON sent by the editor extension."""
        return cls(
            workspace_folders=list(data.get("workspace_folders", [])),
            focused_file=data.get("focused_file"),
            language=data.get("language"),
            selection=data.get("selection"),
            cursor_position=tuple(data["cursor_position"]) if data.get("cursor_position") else None,
            open_files=list(data.get("open_files", [])),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> EditorContext:
        """Load from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, encoding="utf-8") as f:
            return cls.from_json(json.load(f))

    @classmethod
    def from_env(cls) -> EditorContext | None:
        """Load from the LODESTAR_IDE_CONTEXT environment variable, if valid."""
        path = os.environ.get("LODESTAR_IDE_CONTEXT")
        if not path:
            return None

        try:
            return cls.from_file(path)
        except (FileNotFoundError, json.JSONDecodeError):
            return None

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "workspace_folders": self.workspace_folders,
            "focused_file": self.focused_file,
            "language": self.language,
            "selection": self.selection,
            "cursor_position": list(self.cursor_position) if self.cursor_position else None,
            "open_files": self.open_files,
        }

    def has_selection(self) -> bool:
        """Check if there's non-blank selected text."""
        return bool(self.selection and self.selection.strip())

    def describe(self, max_recent: int = 5) -> str:
        """Render the workspace context section of the system prompt."""
        if not self.workspace_folders:
            return "No workspace folder open"

        first = Path(self.workspace_folders[0])
        lines = [f"Workspace: {first.name}", f"Path: {first}"]

        if self.focused_file:
            language = self.language or "text"
            lines.append("")
            lines.append(f"Active file: {Path(self.focused_file).name} ({language})")
            if self.has_selection():
                lines.append(f"Selected text:\n```{language}\n{self.selection}\n```")
            if self.cursor_position:
                line, column = self.cursor_position
                lines.append(f"Cursor position: Line {line + 1}, Column {column + 1}")

        recent = self.open_files[:max_recent]
        if recent:
            lines.append("")
            lines.append("Recently opened files:")
            lines.extend(f"- {f}" for f in recent)

        return "\n".join(lines) + "\n"
