"""Mock model for tests and offline runs."""

from dataclasses import dataclass, field

from lodestar.models.protocol import (
    GenerateOptions,
    GenerateResult,
    Message,
    TokenUsage,
    sanitize_llm_content,
)


@dataclass(slots=True)
class MockModel:
    """Mock model for testing.

    Returns predefined responses in rotation, or echoes the prompt.
    """

    responses: list[str] = field(default_factory=list)
    _call_count: int = field(default=0, init=False)
    _prompts: list[str] = field(default_factory=list, init=False)
    _options: list[GenerateOptions | None] = field(default_factory=list, init=False)

    @property
    def model_id(self) -> str:
        return "mock-model"

    @property
    def call_count(self) -> int:
        """Number of times generate was called."""
        return self._call_count

    @property
    def prompts(self) -> list[str]:
        """All prompts received, flattened to text."""
        return self._prompts

    @property
    def options(self) -> list[GenerateOptions | None]:
        """Options passed with each call."""
        return self._options

    async def generate(
        self,
        prompt: str | tuple[Message, ...],
        *,
        options: GenerateOptions | None = None,
    ) -> GenerateResult:
        """Generate a mock response."""
        if isinstance(prompt, str):
            prompt_text = prompt
        else:
            prompt_text = "\n".join(m.content for m in prompt)

        self._prompts.append(prompt_text)
        self._options.append(options)
        self._call_count += 1

        if self.responses:
            response = self.responses[(self._call_count - 1) % len(self.responses)]
        else:
            response = f"Mock response to: {prompt_text[:50]}..."

        return GenerateResult(
            content=sanitize_llm_content(response),
            model=self.model_id,
            usage=TokenUsage(
                prompt_tokens=len(prompt_text.split()),
                completion_tokens=len(response.split()),
                total_tokens=len(prompt_text.split()) + len(response.split()),
            ),
            finish_reason="stop",
        )
