"""Multi-root workspace.

A workspace is an ordered set of absolute root directories. Searches run
against the union of all roots; resolution tries roots in order. Nothing
here ever writes to a root.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from lodestar.foundation.errors import NoWorkspaceError

if TYPE_CHECKING:
    from lodestar.context.ide import EditorContext


@dataclass(frozen=True, slots=True)
class Workspace:
    """Ordered, de-duplicated workspace roots."""

    roots: tuple[Path, ...] = ()

    @classmethod
    def from_paths(cls, paths: Iterable[str | Path]) -> Workspace:
        """Build a workspace from root paths, keeping first-seen order.

        Paths are made absolute (and ``~`` expanded) but symlinks are left
        alone so relative paths match what the user sees.
        """
        seen: dict[Path, None] = {}
        for p in paths:
            root = Path(os.path.abspath(Path(p).expanduser()))
            seen.setdefault(root, None)
        return cls(roots=tuple(seen))

    @classmethod
    def from_editor(cls, ctx: EditorContext) -> Workspace:
        """Build a workspace from the editor's open folders."""
        return cls.from_paths(ctx.workspace_folders)

    @property
    def is_open(self) -> bool:
        """Whether at least one root is open."""
        return bool(self.roots)

    @property
    def name(self) -> str | None:
        """Display name of the first root."""
        return self.roots[0].name if self.roots else None

    def require_open(self) -> None:
        """Raise NoWorkspaceError when no root is open."""
        if not self.roots:
            raise NoWorkspaceError()

    def root_for(self, path: str | Path) -> Path | None:
        """Return the first root containing path, or None."""
        target = Path(os.path.abspath(path))
        for root in self.roots:
            if target == root or target.is_relative_to(root):
                return root
        return None

    def relative_path(self, path: str | Path) -> str:
        """Path relative to its containing root, with POSIX separators.

        Paths outside every root are returned as given (absolute).
        """
        target = Path(os.path.abspath(path))
        root = self.root_for(target)
        if root is None:
            return str(path)
        return target.relative_to(root).as_posix()
