"""Context assembly: prompt + attached files + resolved @mentions.

Flow for one request:
1. Resolve every mention token (strict resolver, then ranked lookup)
2. Union explicit attachments and resolved mentions by absolute path,
   attachments first, in order
3. Read every unique file concurrently
4. Render the prompt followed by one fenced block per readable file

Failures are per file: a token that resolves to nothing, or a file that
cannot be read, is left out and the rest of the request proceeds.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field

from lodestar.context.reader import ContentReader, language_for
from lodestar.foundation.errors import LodestarError, PathNotFoundError
from lodestar.foundation.types.config import SearchConfig
from lodestar.workspace.finder import FileFinder
from lodestar.workspace.resolver import PathResolver
from lodestar.workspace.roots import Workspace

logger = logging.getLogger(__name__)

# One file failing to resolve or read only drops that file
_PER_FILE_ERRORS = (LodestarError, OSError)

REFERENCED_FILES_HEADER = "=== Referenced Files ==="


@dataclass(frozen=True, slots=True)
class AttachedFileContent:
    """One readable file in a context block."""

    relative_path: str
    """Path shown in the block header (absolute if outside every root)."""

    absolute_path: str
    """Canonical identity of the file."""

    content: str
    """Text content, or a metadata summary for images."""

    language: str
    """Fence language tag derived from the extension."""

    def render(self) -> str:
        return (
            f"\n// File: {self.relative_path}\n"
            f"// Language: {self.language}\n"
            f"```{self.language}\n"
            f"{self.content}\n"
            "```\n"
        )


@dataclass(frozen=True, slots=True)
class ContextBlock:
    """The prompt plus the files that go with it."""

    prompt: str
    """Original prompt text, unmodified."""

    files: tuple[AttachedFileContent, ...] = ()
    """Readable files, attachments first, each path at most once."""

    dropped_mentions: tuple[str, ...] = field(default=())
    """Mention tokens that resolved to nothing."""

    @property
    def referenced_files(self) -> list[str]:
        """Absolute paths of the files in the block, in order."""
        return [f.absolute_path for f in self.files]

    def render(self) -> str:
        """Serialize to the literal payload sent to the model."""
        if not self.files:
            return self.prompt
        parts = [self.prompt, f"\n\n{REFERENCED_FILES_HEADER}\n"]
        parts.extend(f.render() for f in self.files)
        return "".join(parts)


def _canonical(path: str) -> str:
    return os.path.normpath(path)


class ContextAssembler:
    """Builds a ContextBlock from a prompt, attachments and mention tokens.

    Example:
        assembler = ContextAssembler(Workspace.from_paths(["/ws"]))
        block = await assembler.assemble("@readme summarize this", [], ["readme"])
        block.referenced_files  # ['/ws/README.md']
    """

    def __init__(
        self,
        workspace: Workspace,
        search_config: SearchConfig | None = None,
        reader: ContentReader | None = None,
    ):
        self.workspace = workspace
        self.search_config = search_config or SearchConfig()
        self.resolver = PathResolver(workspace, self.search_config)
        self.finder = FileFinder(workspace, self.search_config)
        self.reader = reader or ContentReader()

    async def resolve_mention(self, token: str) -> str | None:
        """Resolve a mention token to an absolute path, or None if nothing fits.

        Exact paths win; otherwise the token is treated as a partial name
        and the top-ranked candidate is taken.
        """
        try:
            return await self.resolver.resolve(token)
        except PathNotFoundError:
            pass

        best = await self.finder.best_match(token)
        if best is None:
            return None
        logger.debug("Mention %r matched %s by ranking", token, best.relative_path)
        return best.absolute_path

    async def _resolve_all(
        self,
        attached_paths: list[str],
        mention_tokens: list[str],
    ) -> tuple[list[str], list[str]]:
        """Resolve attachments and mentions; return (unique paths, dropped tokens)."""
        attached = await asyncio.gather(
            *[self.resolver.resolve(p) for p in attached_paths],
            return_exceptions=True,
        )
        mentioned = await asyncio.gather(
            *[self.resolve_mention(t) for t in mention_tokens],
            return_exceptions=True,
        )

        paths: dict[str, str] = {}
        for raw, result in zip(attached_paths, attached):
            if isinstance(result, _PER_FILE_ERRORS):
                logger.debug("Attachment %r skipped: %s", raw, result)
                continue
            if isinstance(result, BaseException):
                raise result
            paths.setdefault(_canonical(result), result)

        dropped: list[str] = []
        for token, result in zip(mention_tokens, mentioned):
            if isinstance(result, _PER_FILE_ERRORS) or result is None:
                logger.debug("Dropped mention %r: %s", token, result or "no match")
                dropped.append(token)
                continue
            if isinstance(result, BaseException):
                raise result
            paths.setdefault(_canonical(result), result)

        return list(paths.values()), dropped

    async def _load(self, path: str) -> AttachedFileContent:
        content = await self.reader.read(path)
        return AttachedFileContent(
            relative_path=self.workspace.relative_path(path),
            absolute_path=path,
            content=content,
            language=language_for(path),
        )

    async def assemble(
        self,
        prompt: str,
        attached_paths: list[str] | None = None,
        mention_tokens: list[str] | None = None,
    ) -> ContextBlock:
        """Resolve, read and collect everything the prompt refers to.

        Args:
            prompt: Original prompt text
            attached_paths: Explicitly attached files (absolute or root-relative)
            mention_tokens: Tokens from extract_mentions(prompt)

        Returns:
            ContextBlock with every readable file, attachments first
        """
        paths, dropped = await self._resolve_all(attached_paths or [], mention_tokens or [])

        loaded = await asyncio.gather(*[self._load(p) for p in paths], return_exceptions=True)

        files: list[AttachedFileContent] = []
        for path, result in zip(paths, loaded):
            if isinstance(result, _PER_FILE_ERRORS):
                logger.debug("Excluded %s: %s", path, result)
                continue
            if isinstance(result, BaseException):
                raise result
            files.append(result)

        logger.debug(
            "Assembled context: %d file(s), %d dropped mention(s)", len(files), len(dropped),
        )
        return ContextBlock(prompt=prompt, files=tuple(files), dropped_mentions=tuple(dropped))
