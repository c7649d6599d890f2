"""Workspace roots, file search, ranking and path resolution.

Example:
    >>> from lodestar.workspace import FileFinder, PathResolver, Workspace
    >>> ws = Workspace.from_paths(["/src/app", "/src/lib"])
    >>> path = await PathResolver(ws).resolve("src/index.ts")
    >>> suggestions = await FileFinder(ws).suggest("index")
"""

from lodestar.workspace.finder import FileFinder
from lodestar.workspace.ranking import dedupe, rank, score_candidate
from lodestar.workspace.resolver import PathResolver
from lodestar.workspace.roots import Workspace
from lodestar.workspace.search import (
    SEARCH_PATTERNS,
    FileCandidate,
    SearchPattern,
    SearchQuery,
    compile_glob,
    search,
    search_candidates,
)

__all__ = [
    "Workspace",
    "FileCandidate",
    "SearchPattern",
    "SearchQuery",
    "SEARCH_PATTERNS",
    "compile_glob",
    "search",
    "search_candidates",
    "dedupe",
    "rank",
    "score_candidate",
    "PathResolver",
    "FileFinder",
]
