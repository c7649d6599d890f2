"""Tests for workspace roots and strict path resolution."""

import os
from pathlib import Path

import pytest

from lodestar.context.ide import EditorContext
from lodestar.foundation.errors import ErrorCode, NoWorkspaceError, PathNotFoundError
from lodestar.workspace.resolver import PathResolver
from lodestar.workspace.roots import Workspace


class TestWorkspace:
    """Tests for the Workspace root set."""

    def test_from_paths_dedupes_in_order(self, tmp_path: Path) -> None:
        a, b = tmp_path / "a", tmp_path / "b"
        ws = Workspace.from_paths([b, a, b])
        assert ws.roots == (b, a)

    def test_from_editor(self, tmp_path: Path) -> None:
        ctx = EditorContext(workspace_folders=[str(tmp_path)])
        ws = Workspace.from_editor(ctx)
        assert ws.roots == (tmp_path,)
        assert ws.name == tmp_path.name

    def test_require_open(self) -> None:
        with pytest.raises(NoWorkspaceError) as exc_info:
            Workspace().require_open()
        assert exc_info.value.code == ErrorCode.WORKSPACE_NOT_OPEN

    def test_relative_path_inside_root(self, workspace: Workspace, workspace_dir: Path) -> None:
        path = workspace_dir / "src" / "utils" / "format.ts"
        assert workspace.relative_path(path) == "src/utils/format.ts"

    def test_relative_path_outside_roots(self, workspace: Workspace, tmp_path: Path) -> None:
        outside = str(tmp_path / "elsewhere.txt")
        assert workspace.relative_path(outside) == outside

    def test_root_for(self, tmp_path: Path) -> None:
        a, b = tmp_path / "a", tmp_path / "b"
        ws = Workspace.from_paths([a, b])
        assert ws.root_for(b / "x" / "y.ts") == b
        assert ws.root_for(tmp_path / "c.ts") is None


class TestPathResolver:
    """Tests for PathResolver.resolve()."""

    @pytest.mark.asyncio
    async def test_absolute_path_returned_unchanged(self) -> None:
        """Absolute paths are not checked, even without a workspace."""
        absolute = os.path.abspath(os.path.join(os.sep, "nowhere", "x.ts"))
        assert await PathResolver(Workspace()).resolve(absolute) == absolute

    @pytest.mark.asyncio
    async def test_relative_under_root(self, workspace: Workspace, workspace_dir: Path) -> None:
        resolved = await PathResolver(workspace).resolve("src/app.ts")
        assert resolved == str(workspace_dir / "src" / "app.ts")

    @pytest.mark.asyncio
    async def test_second_root(self, tmp_path: Path) -> None:
        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        (second / "lib").mkdir(parents=True)
        (second / "lib" / "only.py").write_text("pass\n")

        resolved = await PathResolver(Workspace.from_paths([first, second])).resolve("lib/only.py")

        assert resolved == str(second / "lib" / "only.py")

    @pytest.mark.asyncio
    async def test_first_root_wins(self, tmp_path: Path) -> None:
        first, second = tmp_path / "first", tmp_path / "second"
        for root in (first, second):
            root.mkdir()
            (root / "same.ts").write_text("x")

        resolved = await PathResolver(Workspace.from_paths([first, second])).resolve("same.ts")

        assert resolved == str(first / "same.ts")

    @pytest.mark.asyncio
    async def test_relative_without_workspace(self) -> None:
        with pytest.raises(NoWorkspaceError):
            await PathResolver(Workspace()).resolve("src/app.ts")

    @pytest.mark.asyncio
    async def test_missing_raises_path_not_found(self, workspace: Workspace) -> None:
        with pytest.raises(PathNotFoundError) as exc_info:
            await PathResolver(workspace).resolve("src/missing.ts")

        assert exc_info.value.token == "src/missing.ts"
        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_fallback_is_case_insensitive(self, workspace: Workspace, workspace_dir: Path) -> None:
        resolved = await PathResolver(workspace).resolve("readme.md")
        assert os.path.samefile(resolved, workspace_dir / "README.md")

    @pytest.mark.asyncio
    async def test_partial_name_is_not_resolved(self, workspace: Workspace) -> None:
        """Strict resolution never guesses; ranking handles partial names."""
        with pytest.raises(PathNotFoundError):
            await PathResolver(workspace).resolve("readme")

    @pytest.mark.asyncio
    async def test_fallback_skips_excluded_trees(self, workspace: Workspace) -> None:
        with pytest.raises(PathNotFoundError):
            await PathResolver(workspace).resolve("pkg/format.js")


class TestRootContainment:
    """Resolution never leaves the open roots."""

    @pytest.fixture
    def secret(self, workspace_dir: Path) -> Path:
        path = workspace_dir.parent / "secret.txt"
        path.write_text("TOP SECRET\n")
        return path

    @pytest.mark.asyncio
    async def test_parent_reference_is_not_found(self, workspace: Workspace, secret: Path) -> None:
        with pytest.raises(PathNotFoundError):
            await PathResolver(workspace).resolve("../secret.txt")

    @pytest.mark.asyncio
    async def test_escape_through_subdirectory(self, workspace: Workspace, secret: Path) -> None:
        with pytest.raises(PathNotFoundError):
            await PathResolver(workspace).resolve("src/../../secret.txt")

    @pytest.mark.asyncio
    async def test_root_itself_is_not_a_file(self, workspace: Workspace) -> None:
        with pytest.raises(PathNotFoundError):
            await PathResolver(workspace).resolve(".")

    @pytest.mark.asyncio
    async def test_dot_segments_inside_root_are_normalized(
        self, workspace: Workspace, workspace_dir: Path,
    ) -> None:
        resolved = await PathResolver(workspace).resolve("src/utils/../app.ts")
        assert resolved == str(workspace_dir / "src" / "app.ts")

    @pytest.mark.asyncio
    async def test_resolved_paths_stay_under_a_root(self, workspace: Workspace) -> None:
        resolver = PathResolver(workspace)
        for token in ("README.md", "src/app.ts", "./lib/format.py", "readme.md"):
            assert workspace.root_for(await resolver.resolve(token)) is not None


class TestUnreadableRoots:
    """Permission errors while checking a root do not escape resolve()."""

    @pytest.mark.asyncio
    async def test_permission_error_on_existence_check(
        self, workspace: Workspace, workspace_dir: Path, monkeypatch,
    ) -> None:
        real_exists = Path.exists

        def exists(self, *args, **kwargs):
            if "locked" in self.parts:
                raise PermissionError(13, "Permission denied", str(self))
            return real_exists(self, *args, **kwargs)

        monkeypatch.setattr(Path, "exists", exists)
        resolver = PathResolver(workspace)

        with pytest.raises(PathNotFoundError):
            await resolver.resolve("locked/x.ts")
        assert await resolver.resolve("src/app.ts") == str(workspace_dir / "src" / "app.ts")
