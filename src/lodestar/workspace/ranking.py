"""Deduplication and relevance ranking of search candidates."""

from __future__ import annotations

import dataclasses
import posixpath
from collections.abc import Iterable

from lodestar.context.constants import (
    COMMON_SOURCE_EXTENSIONS,
    SCORE_COMMON_EXTENSION,
    SCORE_DIRECTORY_CONTAINS,
    SCORE_EXACT_PATH,
    SCORE_NAME_CONTAINS,
    SCORE_NAME_EXACT,
    SCORE_NAME_PREFIX,
    SCORE_PATH_CONTAINS,
)
from lodestar.workspace.search import FileCandidate


def dedupe(candidates: Iterable[FileCandidate]) -> list[FileCandidate]:
    """Collapse candidates by absolute path, keeping the first-seen instance."""
    unique: dict[str, FileCandidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.absolute_path, candidate)
    return list(unique.values())


def _query_basename(query: str) -> str:
    trimmed = query.rstrip("/")
    return posixpath.basename(trimmed) if trimmed else query


def score_candidate(candidate: FileCandidate, query: str) -> int:
    """Additive relevance score of candidate for query (case-insensitive)."""
    q = query.replace("\\", "/").lower()
    base = _query_basename(q)
    path = candidate.relative_path.lower()
    name = candidate.name.lower()
    directory = candidate.directory.lower()

    score = 0
    if path == q:
        score += SCORE_EXACT_PATH
    if q in path:
        score += SCORE_PATH_CONTAINS
    if q in directory:
        score += SCORE_DIRECTORY_CONTAINS
    if name == base:
        score += SCORE_NAME_EXACT
    if name.startswith(base):
        score += SCORE_NAME_PREFIX
    if base in name:
        score += SCORE_NAME_CONTAINS
    if candidate.extension in COMMON_SOURCE_EXTENSIONS:
        score += SCORE_COMMON_EXTENSION
    return score


def _sort_key(candidate: FileCandidate) -> tuple[int, int, str, str]:
    # Same relative path under two roots: absolute path settles it
    return (
        -candidate.score,
        len(candidate.relative_path),
        candidate.relative_path,
        candidate.absolute_path,
    )


def rank(
    candidates: Iterable[FileCandidate],
    query: str,
    limit: int | None = None,
) -> list[FileCandidate]:
    """Deduplicate, score and order candidates for query.

    Order: score descending, then shorter relative path, then lexicographic
    relative path. Truncation to ``limit`` happens after ordering.
    """
    scored = [
        dataclasses.replace(c, score=score_candidate(c, query))
        for c in dedupe(candidates)
    ]
    scored.sort(key=_sort_key)
    return scored if limit is None else scored[:limit]
