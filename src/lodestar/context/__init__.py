"""Prompt context: @mentions, file content and context assembly.

This package provides:
- extract_mentions: @file tokens found in prompt text
- ContentReader: file content (or image summary) for a resolved path
- ContextAssembler: prompt + attachments + mentions as one ContextBlock
- EditorContext: editor state from the front-end

Example:
    >>> from lodestar.context import extract_mentions
    >>> extract_mentions("fix @a.ts and @a.ts again")
    ['a.ts']
"""

from lodestar.context.ide import EditorContext
from lodestar.context.reader import ContentReader, format_file_size, image_summary, language_for
from lodestar.context.reference import extract_mentions, has_mentions

# NOTE: the assembler is NOT imported at package level to avoid circular
# imports with lodestar.workspace (which imports context.constants).
# Import it directly: from lodestar.context.assembler import ContextAssembler

__all__ = [
    "EditorContext",
    "ContentReader",
    "format_file_size",
    "image_summary",
    "language_for",
    "extract_mentions",
    "has_mentions",
    "AttachedFileContent",
    "ContextAssembler",
    "ContextBlock",
]


def __getattr__(name: str):
    """Lazy import to avoid circular dependency."""
    if name in ("AttachedFileContent", "ContextAssembler", "ContextBlock"):
        from lodestar.context import assembler
        return getattr(assembler, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
