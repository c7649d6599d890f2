"""Command-line interface for Lodestar."""

from lodestar.cli.main import main

__all__ = ["main"]
