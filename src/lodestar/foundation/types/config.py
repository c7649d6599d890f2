"""Configuration type definitions - single source of truth for all config classes."""


from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ModelConfig:
    """Generation endpoint settings (OpenAI-compatible chat completions)."""

    provider: str = "openai"
    """Model provider: "openai" (any OpenAI-compatible endpoint) or "mock"."""

    api_key: str = ""
    """API key; falls back to DEEPSEEK_API_KEY when empty."""

    api_url: str = "https://api.deepseek.com/v1"
    """Base URL of the chat completions endpoint."""

    model: str = "deepseek-coder"
    """Model name sent with each request."""

    temperature: float = 0.1
    """Sampling temperature for chat requests."""

    max_tokens: int = 2048
    """Completion token budget for chat requests."""

    timeout: float = 30.0
    """Request timeout in seconds."""


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Workspace file search settings."""

    exclude_glob: str = "**/{node_modules,.git}/**"
    """Glob of trees never searched (dependency caches, VCS metadata)."""

    pattern_limit: int = 20
    """Maximum hits collected per search pattern."""

    suggestion_limit: int = 20
    """Maximum ranked candidates returned for live suggestions."""

    mention_limit: int = 5
    """Candidates considered when a mention needs ranked resolution."""


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Workspace root settings."""

    roots: tuple[str, ...] = field(default_factory=tuple)
    """Workspace root directories, in resolution order."""
