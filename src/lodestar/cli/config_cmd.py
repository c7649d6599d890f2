"""Config command - Manage Lodestar configuration."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from lodestar.foundation.config import save_default_config

console = Console()


@click.group()
def config() -> None:
    """Manage Lodestar configuration.

    Configuration is loaded from (in priority order):
    1. Environment variables (LODESTAR_*)
    2. --config path
    3. .lodestar/config.yaml (project-local)
    4. ~/.lodestar/config.yaml (user-global)
    5. Built-in defaults

    Environment overrides:

        LODESTAR_MODEL_API_KEY=sk-... lodestar ask ...
        LODESTAR_SEARCH_SUGGESTION_LIMIT=50 lodestar files app
    """


@config.command()
@click.pass_obj
def show(state) -> None:
    """Show the effective configuration."""
    cfg = state.config

    console.print(Panel("[bold]Lodestar Configuration[/bold]", border_style="cyan"))

    console.print("\n[cyan]Model[/cyan]")
    console.print(f"  Provider: {cfg.model.provider}")
    console.print(f"  Endpoint: {cfg.model.api_url}")
    console.print(f"  Model: {cfg.model.model}")
    console.print(f"  API key: {'set' if cfg.model.api_key else '[yellow]not set[/yellow]'}")
    console.print(f"  Temperature: {cfg.model.temperature}")
    console.print(f"  Max tokens: {cfg.model.max_tokens}")
    console.print(f"  Timeout: {cfg.model.timeout}s")

    console.print("\n[cyan]Search[/cyan]")
    console.print(f"  Exclude: {cfg.search.exclude_glob}", markup=False)
    console.print(f"  Per-pattern limit: {cfg.search.pattern_limit}")
    console.print(f"  Suggestion limit: {cfg.search.suggestion_limit}")
    console.print(f"  Mention candidates: {cfg.search.mention_limit}")

    console.print("\n[cyan]Workspace[/cyan]")
    for root in state.workspace().roots:
        console.print(f"  {root}")

    console.print("\n[dim]Config sources:[/dim]")
    for candidate in (Path(".lodestar/config.yaml"), Path.home() / ".lodestar" / "config.yaml"):
        if candidate.exists():
            console.print(f"  [green]✓[/green] {candidate}")
        else:
            console.print(f"  [dim]○[/dim] {candidate} (not found)")


@config.command()
@click.option("--path", type=click.Path(dir_okay=False), default=".lodestar/config.yaml",
              show_default=True, help="Where to write the config file")
def init(path: str) -> None:
    """Create a default config file."""
    saved_path = save_default_config(path)
    console.print(f"[green]✓ Config file created:[/green] {saved_path}")
    console.print("\n[dim]Edit this file to customize Lodestar behavior.[/dim]")
