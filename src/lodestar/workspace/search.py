"""Pattern-based file search over a multi-root workspace.

Globs follow editor conventions and are matched against each file's path
relative to its root, case-insensitively:

    **/      any number of leading directories (including none)
    **       anything, across directories
    *        anything within one path segment
    ?        one character within a path segment
    {a,b}    alternation

A resolution query fans out into a fixed family of patterns (see
SEARCH_PATTERNS). Their hits are concatenated in pattern order and left
undeduplicated; ranking.rank() collapses and orders them.
"""

from __future__ import annotations

import asyncio
import logging
import os
import posixpath
import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lodestar.context.constants import IMAGE_EXTENSIONS
from lodestar.workspace.roots import Workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """An unverified search hit. ``absolute_path`` is its identity."""

    relative_path: str
    """Path relative to its workspace root (POSIX separators)."""

    absolute_path: str
    """Absolute filesystem path."""

    name: str
    """File name with extension."""

    directory: str
    """Directory part of relative_path ("." for top-level files)."""

    extension: str
    """Lower-cased extension including the dot ("" when none)."""

    score: int = 0
    """Relevance score; set by ranking.rank()."""

    @property
    def is_image(self) -> bool:
        """Whether the extension belongs to the image set."""
        return self.extension in IMAGE_EXTENSIONS

    @classmethod
    def from_path(cls, root: Path, relative_path: str) -> FileCandidate:
        """Build a candidate from a root and a POSIX relative path."""
        name = posixpath.basename(relative_path)
        return cls(
            relative_path=relative_path,
            absolute_path=str(root.joinpath(*relative_path.split("/"))),
            name=name,
            directory=posixpath.dirname(relative_path) or ".",
            extension=posixpath.splitext(name)[1].lower(),
        )

    def to_record(self) -> dict[str, str]:
        """Suggestion record shape: {path, fullPath, name, directory}."""
        return {
            "path": self.relative_path,
            "fullPath": self.absolute_path,
            "name": self.name,
            "directory": self.directory,
        }


# =============================================================================
# Glob translation
# =============================================================================


def _split_alternatives(body: str) -> list[str]:
    """Split a brace body on top-level commas."""
    parts, depth, current = [], 0, []
    for ch in body:
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        current.append(ch)
    parts.append("".join(current))
    return parts


def _matching_brace(glob: str, start: int) -> int:
    """Index of the brace closing the one at start, or -1."""
    depth = 0
    for i in range(start, len(glob)):
        if glob[i] == "{":
            depth += 1
        elif glob[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _translate(glob: str) -> str:
    out: list[str] = []
    i, n = 0, len(glob)
    while i < n:
        ch = glob[i]
        if glob.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif glob.startswith("/**", i) and i + 3 == n:
            out.append("(?:/.*)?")
            i += 3
        elif glob.startswith("**", i):
            out.append(".*")
            i += 2
        elif ch == "*":
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "{" and (end := _matching_brace(glob, i)) != -1:
            alternatives = _split_alternatives(glob[i + 1:end])
            out.append("(?:" + "|".join(_translate(a) for a in alternatives) + ")")
            i = end + 1
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


@lru_cache(maxsize=256)
def compile_glob(glob: str) -> re.Pattern[str]:
    """Compile a workspace glob into a case-insensitive full-match regex."""
    return re.compile(_translate(glob), re.IGNORECASE | re.DOTALL)


def _is_excluded_dir(exclude: re.Pattern[str] | None, rel_dir: str) -> bool:
    # "**/x/**" matches "a/x/" once the walk reaches a/x
    return exclude is not None and exclude.fullmatch(rel_dir + "/") is not None


# =============================================================================
# Search
# =============================================================================


def _walk_matches(
    roots: tuple[Path, ...],
    pattern: re.Pattern[str],
    exclude: re.Pattern[str] | None,
    limit: int | None,
) -> list[FileCandidate]:
    """Walk roots in order (sorted, deterministic) collecting matches."""
    hits: list[FileCandidate] = []
    for root in roots:
        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = Path(dirpath).relative_to(root).as_posix()
            prefix = "" if rel_dir == "." else rel_dir + "/"

            dirnames[:] = sorted(
                d for d in dirnames if not _is_excluded_dir(exclude, prefix + d)
            )
            for filename in sorted(filenames):
                rel = prefix + filename
                if exclude is not None and exclude.fullmatch(rel):
                    continue
                if pattern.fullmatch(rel):
                    hits.append(FileCandidate.from_path(root, rel))
                    if limit is not None and len(hits) >= limit:
                        return hits
    return hits


async def search(
    workspace: Workspace,
    pattern: str,
    exclude_glob: str | None = None,
    limit: int | None = None,
) -> list[FileCandidate]:
    """Find files whose root-relative path matches pattern.

    Never raises: an empty workspace or unreadable directories simply
    yield fewer results.

    Args:
        workspace: Roots to search, in order
        pattern: Include glob
        exclude_glob: Glob of paths (and trees) to skip
        limit: Maximum hits across all roots (None = unlimited)

    Returns:
        Unranked candidates in walk order.
    """
    if not workspace.is_open:
        return []

    exclude = compile_glob(exclude_glob) if exclude_glob else None
    return await asyncio.to_thread(
        _walk_matches, workspace.roots, compile_glob(pattern), exclude, limit,
    )


# =============================================================================
# Resolution query pattern family
# =============================================================================


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """A normalized query: lower-cased POSIX path plus its final segment."""

    raw: str
    path: str
    filename: str

    @classmethod
    def parse(cls, raw: str) -> SearchQuery:
        path = raw.replace("\\", "/").lower()
        return cls(raw=raw, path=path, filename=path.split("/")[-1])


@dataclass(frozen=True, slots=True)
class SearchPattern:
    """One named glob generator in the resolution pattern family."""

    name: str
    build: Callable[[SearchQuery], str]


SEARCH_PATTERNS: tuple[SearchPattern, ...] = (
    SearchPattern("exact_path", lambda q: f"**/{q.path}"),
    SearchPattern("filename", lambda q: f"**/{q.filename}"),
    SearchPattern("filename_substring", lambda q: f"**/*{q.filename}*"),
    SearchPattern("filename_any_extension", lambda q: f"**/{q.filename}.*"),
    SearchPattern("filename_substring_any_extension", lambda q: f"**/*{q.filename}.*"),
)


async def search_candidates(
    workspace: Workspace,
    query: str,
    *,
    exclude_glob: str | None = None,
    pattern_limit: int | None = 20,
    patterns: tuple[SearchPattern, ...] = SEARCH_PATTERNS,
) -> list[FileCandidate]:
    """Run the pattern family for query and concatenate the hits.

    The searches run concurrently; results are concatenated in the fixed
    pattern order regardless of completion order. Duplicates are kept.
    """
    if not workspace.is_open:
        return []

    parsed = SearchQuery.parse(query)
    results = await asyncio.gather(*[
        search(workspace, p.build(parsed), exclude_glob, pattern_limit)
        for p in patterns
    ])

    hits = [c for batch in results for c in batch]
    logger.debug(
        "Search %r: %s",
        query,
        ", ".join(f"{p.name}={len(r)}" for p, r in zip(patterns, results)),
    )
    return hits
