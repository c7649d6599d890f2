"""Lodestar configuration management.

Loads configuration from .lodestar/config.yaml with sensible defaults.
All settings can be overridden via environment variables (LODESTAR_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .lodestar/config.yaml (project-local)
3. ~/.lodestar/config.yaml (user-global)
4. Built-in defaults

The loaded config is returned to the caller and passed down explicitly;
there is no process-wide config singleton.
"""


import dataclasses
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from lodestar.foundation.errors import ErrorCode, config_error
from lodestar.foundation.types.config import ModelConfig, SearchConfig, WorkspaceConfig

logger = logging.getLogger(__name__)

_ENV_PREFIX = "LODESTAR_"

# Sections that accept LODESTAR_<SECTION>_<KEY> overrides
_SECTIONS: dict[str, type] = {
    "model": ModelConfig,
    "search": SearchConfig,
    "workspace": WorkspaceConfig,
}


@dataclass(frozen=True, slots=True)
class LodestarConfig:
    """Root configuration for Lodestar."""

    model: ModelConfig = field(default_factory=ModelConfig)
    """Generation endpoint configuration."""

    search: SearchConfig = field(default_factory=SearchConfig)
    """Workspace search configuration."""

    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    """Workspace roots."""

    debug: bool = False
    """Enable debug logging by default."""

    def with_roots(self, roots: tuple[str, ...]) -> "LodestarConfig":
        """Return a copy with the workspace roots replaced."""
        return dataclasses.replace(self, workspace=WorkspaceConfig(roots=tuple(roots)))


def _default_dict() -> dict[str, Any]:
    """Defaults from the dataclass definitions (single source of truth)."""
    return {
        "model": asdict(ModelConfig()),
        "search": asdict(SearchConfig()),
        "workspace": {"roots": []},
        "debug": False,
    }


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> bool | int | float | str:
    """Coerce an environment string to bool/int/float when it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env_overrides(config_dict: dict, environ: dict[str, str] | None = None) -> dict:
    """Apply environment variable overrides.

    Environment variables follow pattern: LODESTAR_SECTION_KEY

    Examples:
        LODESTAR_MODEL_API_KEY=sk-...
        LODESTAR_SEARCH_PATTERN_LIMIT=50
        LODESTAR_WORKSPACE_ROOTS=/src/app:/src/lib   (os.pathsep separated)
    """
    env = os.environ if environ is None else environ

    for key, value in env.items():
        if not key.startswith(_ENV_PREFIX):
            continue

        path_str = key[len(_ENV_PREFIX):].lower()
        for section, section_cls in _SECTIONS.items():
            if not path_str.startswith(section + "_"):
                continue
            name = path_str[len(section) + 1:]
            known = {f.name for f in dataclasses.fields(section_cls)}
            if name not in known:
                break

            if section == "workspace" and name == "roots":
                config_dict[section][name] = [p for p in value.split(os.pathsep) if p]
            elif section == "model" and name in ("api_key", "api_url", "model", "provider"):
                config_dict[section][name] = value
            else:
                config_dict[section][name] = _coerce(value)
            break

    if not config_dict["model"].get("api_key"):
        fallback = env.get("DEEPSEEK_API_KEY")
        if fallback:
            config_dict["model"]["api_key"] = fallback

    return config_dict


def _build_section(section_cls: type, data: Any, section: str) -> Any:
    """Instantiate one config section, rejecting unknown keys."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise config_error(ErrorCode.CONFIG_INVALID, key=section, detail="expected a mapping")

    known = {f.name for f in dataclasses.fields(section_cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise config_error(
            ErrorCode.CONFIG_INVALID,
            key=section,
            detail=f"unknown keys: {', '.join(unknown)}",
        )
    return section_cls(**data)


def _dict_to_config(data: dict) -> LodestarConfig:
    """Convert a dict to LodestarConfig."""
    workspace_data = dict(data.get("workspace") or {})
    roots = workspace_data.get("roots") or []
    if isinstance(roots, str):
        roots = [roots]
    workspace_data["roots"] = tuple(str(r) for r in roots)

    return LodestarConfig(
        model=_build_section(ModelConfig, data.get("model"), "model"),
        search=_build_section(SearchConfig, data.get("search"), "search"),
        workspace=_build_section(WorkspaceConfig, workspace_data, "workspace"),
        debug=bool(data.get("debug", False)),
    )


def load_config(
    path: str | Path | None = None,
    *,
    environ: dict[str, str] | None = None,
) -> LodestarConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (LODESTAR_*)
    2. Explicit path if provided
    3. .lodestar/config.yaml (project-local)
    4. ~/.lodestar/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.
        environ: Environment mapping (default: os.environ).

    Returns:
        Merged LodestarConfig instance.

    Raises:
        LodestarError: CONFIG_INVALID when a section has unknown keys.
    """
    config_dict = _default_dict()

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".lodestar/config.yaml"),
        Path.home() / ".lodestar" / "config.yaml",
    ])

    for config_path in config_paths:
        if not config_path.exists():
            continue
        try:
            with open(config_path, encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Skipping unreadable config %s: %s", config_path, e)
            continue
        if not isinstance(file_config, dict):
            logger.warning("Skipping config %s: top level is not a mapping", config_path)
            continue
        _deep_update(config_dict, file_config)
        logger.debug("Loaded config from %s", config_path)
        break  # Use first found config

    config_dict = _apply_env_overrides(config_dict, environ)
    return _dict_to_config(config_dict)


def save_default_config(path: str | Path = ".lodestar/config.yaml") -> Path:
    """Save the default configuration to a file.

    Creates a documented config file with all options.

    Args:
        path: Where to save the config.

    Returns:
        Path to the saved config file.
    """
    config_content = '''# Lodestar Configuration
#
# Actual defaults are defined in lodestar/foundation/types/config.py.
# Edit values you want to override. Environment variables
# (LODESTAR_SECTION_KEY) take precedence over this file.

# Generation endpoint (any OpenAI-compatible chat completions API)
model:
  # "openai" for a real endpoint, "mock" for offline use
  provider: "openai"

  # API key (or set LODESTAR_MODEL_API_KEY / DEEPSEEK_API_KEY)
  api_key: ""

  # Base URL of the endpoint
  api_url: "https://api.deepseek.com/v1"

  # Model name: deepseek-coder or deepseek-chat
  model: "deepseek-coder"

  temperature: 0.1
  max_tokens: 2048

  # Request timeout (seconds)
  timeout: 30.0

# Workspace file search
search:
  # Trees never searched
  exclude_glob: "**/{node_modules,.git}/**"

  # Hits collected per search pattern
  pattern_limit: 20

  # Ranked suggestions returned for a query
  suggestion_limit: 20

  # Candidates considered when resolving an ambiguous @mention
  mention_limit: 5

# Workspace roots, searched in this order
workspace:
  roots: []

debug: false
'''

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_content, encoding="utf-8")
    return path
