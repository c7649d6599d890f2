"""Shared type definitions."""

from lodestar.foundation.types.config import ModelConfig, SearchConfig, WorkspaceConfig

__all__ = ["ModelConfig", "SearchConfig", "WorkspaceConfig"]
