"""Lodestar Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints shown alongside chat errors
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Model/Provider errors
        5xxx - Configuration errors
        7xxx - Workspace/IO errors
    """

    # 1xxx - Model/Provider Errors
    MODEL_AUTH_FAILED = 1002
    MODEL_RATE_LIMITED = 1003
    MODEL_TIMEOUT = 1005
    MODEL_API_ERROR = 1006
    MODEL_PROVIDER_UNAVAILABLE = 1009
    MODEL_RESPONSE_INVALID = 1010

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5002
    CONFIG_ENV_MISSING = 5003

    # 7xxx - Workspace/IO Errors
    WORKSPACE_NOT_OPEN = 7001
    FILE_NOT_FOUND = 7003
    FILE_READ_FAILED = 7004

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "model",
            5: "config",
            7: "io",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.MODEL_AUTH_FAILED,
            ErrorCode.CONFIG_INVALID,
            ErrorCode.CONFIG_ENV_MISSING,
        }
        return self not in non_recoverable


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Model errors
    ErrorCode.MODEL_AUTH_FAILED: "Invalid API key for {provider}. Check your API key in settings.",
    ErrorCode.MODEL_RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorCode.MODEL_TIMEOUT: "Request timeout. Please try again.",
    ErrorCode.MODEL_API_ERROR: "API Error: {detail}",
    ErrorCode.MODEL_PROVIDER_UNAVAILABLE: "AI service is temporarily unavailable. Please try again later.",
    ErrorCode.MODEL_RESPONSE_INVALID: "No response generated from AI service",

    # Config errors
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",
    ErrorCode.CONFIG_ENV_MISSING: "API key is not configured. Set {var} or model.api_key in config.",

    # Workspace/IO errors
    ErrorCode.WORKSPACE_NOT_OPEN: "No workspace folder open",
    ErrorCode.FILE_NOT_FOUND: "File not found: {token}",
    ErrorCode.FILE_READ_FAILED: "Could not read file '{path}': {detail}",
}


# Recovery hints
RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.MODEL_AUTH_FAILED: [
        "Set the API key environment variable ({env_var})",
        "Check if your API key is valid and not expired",
    ],
    ErrorCode.MODEL_RATE_LIMITED: [
        "Wait {retry_after} seconds before retrying",
        "Reduce request frequency",
    ],
    ErrorCode.CONFIG_ENV_MISSING: [
        "Set the environment variable: export {var}=<value>",
        "Run 'lodestar config init' and fill in model.api_key",
    ],
    ErrorCode.WORKSPACE_NOT_OPEN: [
        "Pass one or more workspace roots with --root",
        "Add workspace.roots to .lodestar/config.yaml",
    ],
    ErrorCode.FILE_NOT_FOUND: [
        "Check the path is relative to a workspace root",
        "Use 'lodestar files <query>' to find the file",
    ],
}


class LodestarError(Exception):
    """Base error type for all Lodestar errors.

    Example:
        >>> err = LodestarError(
        ...     code=ErrorCode.FILE_NOT_FOUND,
        ...     context={"token": "src/app.ts"},
        ... )
        >>> print(err)
        [LS-7003] File not found: src/app.ts
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        hints = RECOVERY_HINTS.get(self.code, [])
        formatted = []
        for hint in hints:
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        """Whether this error is typically recoverable."""
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'LS-7003')."""
        return f"LS-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging/API responses."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


class NoWorkspaceError(LodestarError):
    """Raised when an operation needs a workspace root and none is open."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.WORKSPACE_NOT_OPEN)


class PathNotFoundError(LodestarError):
    """A reference token resolved to nothing, even after fallback search."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(code=ErrorCode.FILE_NOT_FOUND, context={"token": token})


class FileReadError(LodestarError):
    """Reading or stat-ing a resolved file failed."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        detail = getattr(cause, "strerror", None) or str(cause) or type(cause).__name__
        super().__init__(
            code=ErrorCode.FILE_READ_FAILED,
            context={"path": path, "detail": detail},
            cause=cause,
        )


# Convenience factory functions

def model_error(
    code: ErrorCode,
    model: str,
    provider: str,
    detail: str = "",
    cause: Exception | None = None,
    **extra: Any,
) -> LodestarError:
    """Create a model-related error."""
    return LodestarError(
        code=code,
        context={"model": model, "provider": provider, "detail": detail, **extra},
        cause=cause,
    )


def config_error(
    code: ErrorCode,
    key: str = "",
    var: str = "",
    detail: str = "",
) -> LodestarError:
    """Create a configuration error."""
    return LodestarError(
        code=code,
        context={"key": key, "var": var, "detail": detail},
    )


# Error translation from external exceptions

def from_openai_error(exc: Exception, model: str, provider: str) -> LodestarError:
    """Translate OpenAI-compatible client exceptions to LodestarError.

    HTTP status wins when the client exposes one; otherwise the exception
    type and message are inspected.
    """
    exc_type = type(exc).__name__
    message = str(exc)
    status = getattr(exc, "status_code", None)

    if status == 401 or "auth" in exc_type.lower():
        env_var = "LODESTAR_MODEL_API_KEY"
        return model_error(
            ErrorCode.MODEL_AUTH_FAILED, model, provider, cause=exc, env_var=env_var,
        )

    if status == 429 or "rate_limit" in exc_type.lower() or "rate limit" in message.lower():
        return model_error(
            ErrorCode.MODEL_RATE_LIMITED, model, provider, cause=exc, retry_after=60,
        )

    if status is not None and status >= 500:
        return model_error(
            ErrorCode.MODEL_PROVIDER_UNAVAILABLE, model, provider, detail=message, cause=exc,
        )

    if "timeout" in exc_type.lower() or "timed out" in message.lower():
        return model_error(ErrorCode.MODEL_TIMEOUT, model, provider, cause=exc)

    if "connection" in exc_type.lower() or "connection" in message.lower():
        return model_error(
            ErrorCode.MODEL_PROVIDER_UNAVAILABLE, model, provider, detail=message, cause=exc,
        )

    # Generic API error
    return model_error(ErrorCode.MODEL_API_ERROR, model, provider, detail=message, cause=exc)
