"""Deterministic resolution of one file reference to one absolute path.

Resolution order:
1. Absolute paths are returned unchanged (existence is checked at read time)
2. ``root/token`` for each workspace root, in root order; a token that
   normalizes to a path outside the root is never accepted
3. Fallback search for the token's file name anywhere in the workspace,
   accepting only a hit whose root-relative path equals the token
   (case-insensitive)

Anything else is PathNotFoundError. Partial or fuzzy references belong to
FileFinder, which surfaces ranked candidates instead of picking silently.
"""

from __future__ import annotations

import asyncio
import logging
import os
import posixpath
from pathlib import Path

from lodestar.foundation.errors import PathNotFoundError
from lodestar.foundation.types.config import SearchConfig
from lodestar.workspace.roots import Workspace
from lodestar.workspace.search import search

logger = logging.getLogger(__name__)


def _normalize_token(token: str) -> str:
    return token.replace("\\", "/")


class PathResolver:
    """Resolves reference tokens against the workspace roots."""

    def __init__(self, workspace: Workspace, search_config: SearchConfig | None = None):
        self.workspace = workspace
        self.search_config = search_config or SearchConfig()

    async def resolve(self, token: str) -> str:
        """Resolve token to an absolute path.

        Args:
            token: Absolute path, or path relative to some workspace root

        Returns:
            Absolute path string

        Raises:
            NoWorkspaceError: Token is relative and no root is open
            PathNotFoundError: Nothing matches after the fallback search
        """
        if os.path.isabs(token):
            return token

        self.workspace.require_open()

        for root in self.workspace.roots:
            candidate = Path(os.path.normpath(root / token))
            if candidate == root or not candidate.is_relative_to(root):
                logger.debug("Ignoring %r under %s: escapes the root", token, root)
                continue
            # Unreadable counts as missing
            if await asyncio.to_thread(os.path.exists, candidate):
                logger.debug("Resolved %r under root %s", token, root)
                return str(candidate)

        found = await self._fallback(token)
        if found is not None:
            return found

        raise PathNotFoundError(token)

    async def _fallback(self, token: str) -> str | None:
        """Search by file name and accept only an exact relative-path hit."""
        wanted = _normalize_token(token).lower()
        basename = posixpath.basename(wanted.rstrip("/"))
        if not basename:
            return None

        hits = await search(
            self.workspace,
            f"**/{basename}",
            self.search_config.exclude_glob,
            limit=None,
        )
        for hit in hits:
            if hit.relative_path.lower() == wanted:
                logger.debug("Resolved %r by fallback search: %s", token, hit.absolute_path)
                return hit.absolute_path
        return None
