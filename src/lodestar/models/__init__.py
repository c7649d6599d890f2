"""Generation collaborators: protocol, OpenAI-compatible adapter, mock."""

from lodestar.foundation.errors import ErrorCode, config_error
from lodestar.foundation.types.config import ModelConfig
from lodestar.models.mock import MockModel
from lodestar.models.openai import OpenAIModel
from lodestar.models.protocol import (
    GenerateOptions,
    GenerateResult,
    Message,
    ModelProtocol,
    TokenUsage,
    sanitize_llm_content,
)


def create_model(config: ModelConfig) -> ModelProtocol:
    """Build the generation collaborator named by config.provider."""
    match config.provider:
        case "openai":
            return OpenAIModel.from_config(config)
        case "mock":
            return MockModel()
        case other:
            raise config_error(
                ErrorCode.CONFIG_INVALID,
                key="model.provider",
                detail=f"unknown provider {other!r} (expected 'openai' or 'mock')",
            )


__all__ = [
    # Protocol
    "ModelProtocol",
    "GenerateOptions",
    "GenerateResult",
    "Message",
    "TokenUsage",
    "sanitize_llm_content",
    # Adapters
    "OpenAIModel",
    "MockModel",
    "create_model",
]
