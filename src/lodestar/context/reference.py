"""File mention parsing.

Grammar:
    mention    := "@" path_chars ("." extension)?
    path_chars := [A-Za-z0-9./_-]+
    extension  := js | jsx | ts | tsx | css | scss | json | html

Trailing ".,;!?" characters are stripped from the captured token.

Examples:
    @src/app.ts          → "src/app.ts"
    @utils.js?           → "utils.js"
    @readme              → "readme"
"""

from __future__ import annotations

import re

from lodestar.context.constants import MENTION_EXTENSIONS, MENTION_TRAILING_PUNCTUATION

# Pattern to match @ mentions (module-level constant)
_PATTERN = re.compile(
    r"@([A-Za-z0-9./_-]+(?:\.(?:" + "|".join(MENTION_EXTENSIONS) + r"))?)"
)


def extract_mentions(text: str) -> list[str]:
    """Extract file mention tokens from prompt text.

    Tokens are unique and ordered by first occurrence. Tokens that are
    empty after punctuation stripping are dropped.

    Example:
        >>> extract_mentions("fix @a.ts and @a.ts again")
        ['a.ts']
        >>> extract_mentions("what does @utils.js? do")
        ['utils.js']
    """
    if "@" not in text:
        return []

    tokens: dict[str, None] = {}
    for match in _PATTERN.finditer(text):
        token = match.group(1).rstrip(MENTION_TRAILING_PUNCTUATION)
        if token:
            tokens.setdefault(token, None)
    return list(tokens)


def has_mentions(text: str) -> bool:
    """Check if text contains any @ mention."""
    return bool(extract_mentions(text))
