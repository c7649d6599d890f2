"""OpenAI-compatible chat completions adapter (DeepSeek by default)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from lodestar.foundation.errors import ErrorCode, LodestarError, from_openai_error, model_error
from lodestar.foundation.types.config import ModelConfig
from lodestar.models.protocol import (
    GenerateOptions,
    GenerateResult,
    Message,
    TokenUsage,
    sanitize_llm_content,
)

if TYPE_CHECKING:
    from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OpenAIModel:
    """Chat completions against any OpenAI-compatible endpoint.

    One request per call, bounded by ``timeout`` seconds and never retried.
    """

    model: str = "deepseek-coder"
    api_key: str | None = None
    base_url: str = "https://api.deepseek.com/v1"
    temperature: float = 0.1
    max_tokens: int = 2048
    timeout: float = 30.0
    provider: str = "openai"
    _client: AsyncOpenAI | None = field(default=None, init=False)

    @classmethod
    def from_config(cls, config: ModelConfig) -> OpenAIModel:
        return cls(
            model=config.model,
            api_key=config.api_key or None,
            base_url=config.api_url,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            provider=config.provider,
        )

    @property
    def model_id(self) -> str:
        return self.model

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the client."""
        if self._client is None:
            from openai import AsyncOpenAI

            # Check for API key BEFORE creating client (gives clear error)
            if not self.api_key:
                raise LodestarError(
                    code=ErrorCode.CONFIG_ENV_MISSING,
                    context={"var": "LODESTAR_MODEL_API_KEY", "provider": self.provider},
                )

            try:
                self._client = AsyncOpenAI(
                    api_key=self.api_key,
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout),
                    max_retries=0,
                )
            except Exception as e:
                raise from_openai_error(e, self.model, self.provider) from e

        return self._client

    def _convert_messages(self, prompt: str | tuple[Message, ...]) -> list[dict]:
        if isinstance(prompt, str):
            return [{"role": "user", "content": prompt}]
        return [{"role": m.role, "content": m.content} for m in prompt]

    async def generate(
        self,
        prompt: str | tuple[Message, ...],
        *,
        options: GenerateOptions | None = None,
    ) -> GenerateResult:
        """Generate a completion for prompt."""
        client = self._get_client()
        opts = options or GenerateOptions()

        kwargs: dict = {
            "model": self.model,
            "messages": self._convert_messages(prompt),
            "temperature": self.temperature if opts.temperature is None else opts.temperature,
            "max_tokens": opts.max_tokens or self.max_tokens,
        }
        if opts.stop_sequences:
            kwargs["stop"] = list(opts.stop_sequences)

        logger.debug("Requesting completion from %s (%s)", self.base_url, self.model)
        try:
            response = await client.chat.completions.create(**kwargs)
        except Exception as e:
            raise from_openai_error(e, self.model, self.provider) from e

        if not response.choices:
            raise model_error(
                ErrorCode.MODEL_RESPONSE_INVALID,
                self.model,
                self.provider,
                detail="response contained no choices",
            )

        choice = response.choices[0]
        usage = None
        if response.usage:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return GenerateResult(
            content=sanitize_llm_content(choice.message.content),
            model=self.model,
            usage=usage,
            finish_reason=choice.finish_reason,
        )
