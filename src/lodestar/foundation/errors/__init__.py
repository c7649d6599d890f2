"""Error system for Lodestar."""

from lodestar.foundation.errors.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ErrorCode,
    FileReadError,
    LodestarError,
    NoWorkspaceError,
    PathNotFoundError,
    config_error,
    from_openai_error,
    model_error,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "LodestarError",
    "NoWorkspaceError",
    "PathNotFoundError",
    "FileReadError",
    "config_error",
    "from_openai_error",
    "model_error",
]
