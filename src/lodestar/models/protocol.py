"""Model protocol - provider-agnostic chat completion interface.

Includes LLM output sanitization.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


# =============================================================================
# LLM Output Sanitization
# =============================================================================


def sanitize_llm_content(text: str | None) -> str | None:
    """Remove control characters from LLM output.

    Preserves newlines, carriage returns, and tabs which are needed for
    code formatting.

    Args:
        text: Raw LLM output text (may be None)

    Returns:
        Sanitized text with control characters removed, or None if input was None
    """
    if text is None:
        return None

    sanitized = "".join(c for c in text if not (ord(c) < 32 and c not in "\n\r\t"))

    if len(sanitized) != len(text):
        logger.debug(
            "Sanitized control chars from LLM output",
            extra={
                "original_len": len(text),
                "sanitized_len": len(sanitized),
                "chars_removed": len(text) - len(sanitized),
            },
        )

    return sanitized


# =============================================================================
# Message Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Message:
    """A conversation message."""

    role: Literal["system", "user", "assistant"]
    content: str


# =============================================================================
# Generation Options & Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class GenerateOptions:
    """Options for model generation. None means the model's configured default."""

    temperature: float | None = None
    max_tokens: int | None = None
    stop_sequences: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TokenUsage:
    """Token usage statistics."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True, slots=True)
class GenerateResult:
    """Result from model generation."""

    content: str | None
    model: str
    usage: TokenUsage | None = None
    finish_reason: str | None = None

    @property
    def text(self) -> str:
        """Get content as string, defaulting to empty string."""
        return self.content or ""


# =============================================================================
# Model Protocol
# =============================================================================


@runtime_checkable
class ModelProtocol(Protocol):
    """Protocol for generation collaborators.

    Implementations: OpenAIModel (any OpenAI-compatible endpoint), MockModel.
    """

    @property
    def model_id(self) -> str:
        """The model identifier (e.g., 'deepseek-coder')."""
        ...

    async def generate(
        self,
        prompt: str | tuple[Message, ...],
        *,
        options: GenerateOptions | None = None,
    ) -> GenerateResult:
        """Generate a response.

        Args:
            prompt: Either a single user prompt, or a tuple of Messages.
            options: Generation options (temperature, max_tokens, etc.)

        Raises:
            LodestarError: With a MODEL_* or CONFIG_* code on failure
        """
        ...
