"""Ranked file lookup for live suggestions and ambiguous mentions."""

from __future__ import annotations

import logging

from lodestar.foundation.types.config import SearchConfig
from lodestar.workspace.ranking import rank
from lodestar.workspace.roots import Workspace
from lodestar.workspace.search import FileCandidate, search_candidates

logger = logging.getLogger(__name__)


class FileFinder:
    """Search + rank over a workspace. Nothing is cached between calls."""

    def __init__(self, workspace: Workspace, search_config: SearchConfig | None = None):
        self.workspace = workspace
        self.config = search_config or SearchConfig()

    async def candidates(self, query: str, limit: int | None = None) -> list[FileCandidate]:
        """Ranked, unique candidates for query, truncated to limit after ranking."""
        hits = await search_candidates(
            self.workspace,
            query,
            exclude_glob=self.config.exclude_glob,
            pattern_limit=self.config.pattern_limit,
        )
        return rank(hits, query, limit)

    async def suggest(self, query: str) -> list[FileCandidate]:
        """Candidates for an as-you-type suggestion list."""
        return await self.candidates(query, self.config.suggestion_limit)

    async def best_match(self, token: str) -> FileCandidate | None:
        """Top-ranked candidate for a partial reference, or None."""
        ranked = await self.candidates(token, self.config.mention_limit)
        if not ranked:
            return None
        if len(ranked) > 1:
            logger.debug(
                "Mention %r is ambiguous, picked %s over %d other(s)",
                token, ranked[0].relative_path, len(ranked) - 1,
            )
        return ranked[0]
