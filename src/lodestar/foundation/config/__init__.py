"""Configuration management for Lodestar."""

from lodestar.foundation.config.loader import (
    LodestarConfig,
    load_config,
    save_default_config,
)

__all__ = [
    "LodestarConfig",
    "load_config",
    "save_default_config",
]
