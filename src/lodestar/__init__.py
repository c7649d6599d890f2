"""Lodestar - @file context for a chat code assistant.

Resolves @mentions in a prompt to workspace files, reads them, and
assembles the context block sent to the model.
"""

__version__ = "0.1.0"

from lodestar.context import EditorContext, extract_mentions
from lodestar.context.assembler import ContextAssembler, ContextBlock
from lodestar.foundation.config import LodestarConfig, load_config
from lodestar.foundation.errors import ErrorCode, LodestarError
from lodestar.workspace import FileFinder, PathResolver, Workspace

__all__ = [
    "__version__",
    # Context
    "ContextAssembler",
    "ContextBlock",
    "EditorContext",
    "extract_mentions",
    # Workspace
    "Workspace",
    "PathResolver",
    "FileFinder",
    # Foundation
    "LodestarConfig",
    "load_config",
    "ErrorCode",
    "LodestarError",
]
