"""Content loading for resolved files.

Text files are returned verbatim. Images are never returned as bytes;
they become a short metadata summary the model can reason about.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path

from lodestar.context.constants import (
    DEFAULT_LANGUAGE,
    IMAGE_EXTENSIONS,
    LANGUAGE_BY_EXTENSION,
    SIZE_UNITS,
)
from lodestar.foundation.errors import FileReadError

logger = logging.getLogger(__name__)


def language_for(path: str) -> str:
    """Language tag for a file path, "text" when the extension is unknown."""
    return LANGUAGE_BY_EXTENSION.get(os.path.splitext(path)[1].lower(), DEFAULT_LANGUAGE)


def is_image(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in IMAGE_EXTENSIONS


def format_file_size(size: int) -> str:
    """Human-readable size with binary-prefix units.

    >>> format_file_size(1536)
    '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    i = 0
    while i < len(SIZE_UNITS) - 1 and size >= 1024 ** (i + 1):
        i += 1
    value = f"{size / 1024 ** i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[i]}"


def image_summary(path: str) -> str:
    """Metadata summary for an image file.

    Falls back to name, type and path only when the file cannot be
    stat-ed; this never raises.
    """
    p = Path(path)
    file_type = p.suffix.lstrip(".").upper()

    try:
        st = p.stat()
    except OSError as e:
        logger.debug("Could not stat image %s: %s", path, e)
        return (
            f"[Image: {p.name}]\n"
            f"Type: {file_type}\n"
            f"Path: {path}\n"
            "\n"
            "This is an image file. I can reference it in our conversation "
            "but cannot directly analyze the image content."
        )

    modified = datetime.fromtimestamp(st.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    return (
        f"[Image: {p.name}]\n"
        f"Type: {file_type}\n"
        f"Size: {format_file_size(st.st_size)}\n"
        f"Path: {path}\n"
        f"Modified: {modified}\n"
        "\n"
        "This is an image file. I can see the file metadata but cannot directly "
        "analyze the image content. If you need image analysis, please describe "
        "what you'd like me to help you with regarding this image."
    )


def _read_text(path: str) -> str:
    # Process default encoding
    with open(path) as f:
        return f.read()


class ContentReader:
    """Loads a resolved file's content for the context block."""

    async def read(self, path: str) -> str:
        """Return text content, or a metadata summary for images.

        Raises:
            FileReadError: The file is missing, unreadable or not decodable
        """
        if is_image(path):
            return await asyncio.to_thread(image_summary, path)

        try:
            return await asyncio.to_thread(_read_text, path)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, e) from e


async def read(path: str) -> str:
    """Module-level shortcut for ``ContentReader().read(path)``."""
    return await ContentReader().read(path)
