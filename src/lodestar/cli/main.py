"""Main CLI entry point.

    lodestar ask "explain @utils/format.ts"
    lodestar files format
    lodestar review src/app.ts
    lodestar bridge            # JSON lines on stdin/stdout for an editor
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import IO, Any

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from lodestar import __version__
from lodestar.chat import ChatController, ErrorResponse, FileContent
from lodestar.cli.config_cmd import config
from lodestar.context.ide import EditorContext
from lodestar.context.reader import language_for
from lodestar.context.reference import extract_mentions
from lodestar.foundation.config import LodestarConfig, load_config
from lodestar.foundation.errors import LodestarError
from lodestar.foundation.logging import configure_logging
from lodestar.models import create_model
from lodestar.workspace.roots import Workspace

console = Console()
err_console = Console(stderr=True)


@dataclass(slots=True)
class CLIState:
    """Options shared by every subcommand."""

    config: LodestarConfig
    roots: tuple[str, ...]
    editor_context: EditorContext | None

    def workspace(self) -> Workspace:
        """--root, then editor folders, then config roots, then cwd."""
        if self.roots:
            return Workspace.from_paths(self.roots)
        if self.editor_context and self.editor_context.workspace_folders:
            return Workspace.from_editor(self.editor_context)
        if self.config.workspace.roots:
            return Workspace.from_paths(self.config.workspace.roots)
        return Workspace.from_paths([os.getcwd()])

    def controller(self) -> ChatController:
        return ChatController(
            self.workspace(),
            create_model(self.config.model),
            search_config=self.config.search,
            editor_context=self.editor_context,
        )


def _load_editor_context(path: str | None) -> EditorContext | None:
    if path is None:
        return EditorContext.from_env()
    try:
        return EditorContext.from_file(path)
    except (OSError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"cannot load editor context: {e}", param_hint="--ide-context") from e


@click.group()
@click.option("--root", "-r", "roots", multiple=True, type=click.Path(file_okay=False),
              help="Workspace root (repeatable, searched in order)")
@click.option("--ide-context", type=click.Path(dir_okay=False),
              help="Editor context JSON (default: $LODESTAR_IDE_CONTEXT)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Config file (default: .lodestar/config.yaml)")
@click.option("--debug", is_flag=True, help="Debug logging to stderr")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    roots: tuple[str, ...],
    ide_context: str | None,
    config_path: str | None,
    debug: bool,
) -> None:
    """Lodestar - @file context for a chat code assistant.

    \b
    Ask with files pulled in by @mention:

        lodestar ask "why does @src/app.ts crash on startup?"

    \b
    Find files the way the @ picker does:

        lodestar files app
    """
    try:
        cfg = load_config(config_path)
    except LodestarError as e:
        raise click.ClickException(e.message) from e

    configure_logging(debug=debug or cfg.debug)
    ctx.obj = CLIState(
        config=cfg,
        roots=roots,
        editor_context=_load_editor_context(ide_context),
    )


main.add_command(config)


@main.command()
@click.argument("prompt")
@click.option("--attach", "-a", "attached", multiple=True, help="Attach a file (repeatable)")
@click.option("--dry-run", is_flag=True, help="Print the assembled context instead of asking")
@click.pass_obj
def ask(state: CLIState, prompt: str, attached: tuple[str, ...], dry_run: bool) -> None:
    """Ask the assistant, with @mentioned and attached files as context."""
    controller = state.controller()

    if dry_run:
        block = asyncio.run(controller.build_context(prompt, list(attached)))
        click.echo(block.render())
        for token in block.dropped_mentions:
            err_console.print(f"[yellow]Unresolved mention:[/yellow] @{token}")
        return

    with err_console.status("[bold green]Thinking..."):
        response = asyncio.run(controller.send_message(prompt, list(attached)))

    if isinstance(response, ErrorResponse):
        err_console.print(f"[red]{response.text}[/red]")
        raise SystemExit(1)

    console.print(Markdown(response.text))
    if response.referenced_files:
        console.print("\n[dim]Referenced files:[/dim]")
        for path in response.referenced_files:
            console.print(f"  [dim]{path}[/dim]")


@main.command()
@click.argument("query")
@click.option("--limit", "-n", type=int, default=None, help="Maximum results (default: config)")
@click.option("--json", "as_json", is_flag=True, help="Print suggestion records as JSON")
@click.pass_obj
def files(state: CLIState, query: str, limit: int | None, as_json: bool) -> None:
    """Ranked workspace files matching QUERY."""
    finder = state.controller().finder
    candidates = asyncio.run(finder.candidates(query, limit or state.config.search.suggestion_limit))

    if as_json:
        click.echo(json.dumps([c.to_record() for c in candidates], indent=2))
        return

    if not candidates:
        console.print(f"[dim]No files match '{query}'[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Score", justify="right")
    table.add_column("Path")
    table.add_column("Root", style="dim")
    workspace = finder.workspace
    for c in candidates:
        table.add_row(str(c.score), c.relative_path, str(workspace.root_for(c.absolute_path) or ""))
    console.print(table)


@main.command()
@click.argument("path")
@click.pass_obj
def show(state: CLIState, path: str) -> None:
    """Print a file the way it would be sent as context."""
    response = asyncio.run(state.controller().file_content(path))
    if not isinstance(response, FileContent):
        err_console.print(f"[red]{response.text}[/red]")
        raise SystemExit(1)
    click.echo(response.content)


@main.command()
@click.argument("text")
def mentions(text: str) -> None:
    """List the @mentions found in TEXT."""
    for token in extract_mentions(text):
        click.echo(token)


async def _serve(controller: ChatController, stdin: IO[str], stdout: IO[str]) -> None:
    while True:
        line = await asyncio.to_thread(stdin.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        response = await controller.handle_payload(line)
        stdout.write(json.dumps(response) + "\n")
        stdout.flush()


@main.command()
@click.pass_obj
def bridge(state: CLIState) -> None:
    """Serve requests as JSON lines on stdin/stdout.

    \b
    One request object per input line, one response object per output line:

        {"command": "getWorkspaceFiles", "query": "app"}
        {"command": "workspaceFiles", "files": [...]}
    """
    asyncio.run(_serve(
        state.controller(),
        click.get_text_stream("stdin"),
        click.get_text_stream("stdout"),
    ))


# =============================================================================
# Code tasks
# =============================================================================


def _source_of(controller: ChatController, path: str) -> str:
    response = asyncio.run(controller.file_content(path))
    if not isinstance(response, FileContent):
        err_console.print(f"[red]{response.text}[/red]")
        raise SystemExit(1)
    return response.content


def _print_task(coro: Coroutine[Any, Any, str]) -> None:
    try:
        with err_console.status("[bold green]Thinking..."):
            text = asyncio.run(coro)
    except LodestarError as e:
        err_console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1) from e
    console.print(Markdown(text))


@main.command()
@click.argument("path")
@click.option("--context", "-c", "extra", help="Extra context for the explanation")
@click.pass_obj
def explain(state: CLIState, path: str, extra: str | None) -> None:
    """Explain the code in PATH."""
    controller = state.controller()
    _print_task(controller.explain(_source_of(controller, path), extra))


@main.command()
@click.argument("path")
@click.pass_obj
def review(state: CLIState, path: str) -> None:
    """Review the code in PATH."""
    controller = state.controller()
    _print_task(controller.review(_source_of(controller, path), language_for(path)))


@main.command()
@click.argument("path")
@click.option("--requirements", "-R", required=True, help="What the refactor should achieve")
@click.pass_obj
def refactor(state: CLIState, path: str, requirements: str) -> None:
    """Refactor the code in PATH to the given requirements."""
    controller = state.controller()
    _print_task(controller.refactor(_source_of(controller, path), requirements, language_for(path)))
