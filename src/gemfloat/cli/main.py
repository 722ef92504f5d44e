"""CLI entry point for gemfloat.

Running `gemfloat` without a subcommand launches the TUI.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import ConfigError, ConfigManager
from ..core.config_schema import Config
from ..runtime.logging import bootstrap_logging
from ..util.error import format_error

app = typer.Typer(
    name="gemfloat",
    help="gemfloat - ask Gemini about a scratch buffer",
    no_args_is_help=False,
    add_completion=False,
    invoke_without_command=True,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"gemfloat {__version__}")
        raise typer.Exit()


def _load_config(model: Optional[str]) -> Config:
    try:
        config = asyncio.run(ConfigManager.get())
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(format_error(e))}")
        raise typer.Exit(2)
    if model:
        config = config.model_copy(update={"model": model})
    return config


def _read_input(file: Optional[Path]) -> str:
    if file is not None:
        return file.read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model id, e.g. gemini-2.0-flash",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        help="File to load into the scratch editor",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Minimum log level (debug, info, warn, error)",
    ),
    print_logs: bool = typer.Option(
        False,
        "--print-logs",
        help="Also write logs to stderr",
    ),
):
    """gemfloat - send text to Gemini and read the answer in a floating window.

    Running without a subcommand launches the interactive TUI.
    """
    mode = "tui" if ctx.invoked_subcommand is None else "cli"
    try:
        bootstrap_logging(mode=mode, level=log_level, console=print_logs or None)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(format_error(e) or str(e))}")
        raise typer.Exit(2)

    config = _load_config(model)
    ctx.obj = {"config": config}

    if ctx.invoked_subcommand is not None:
        return

    from .cmd.tui import tui_command

    text = file.read_text(encoding="utf-8") if file else ""
    tui_command(config=config, text=text)


@app.command()
def ask(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="File holding the prompt; stdin is read when omitted",
    ),
    meta: bool = typer.Option(
        False,
        "--meta",
        help="Show finish reason, model version and token usage above the answer",
    ),
):
    """Send one prompt and print the answer."""
    from .cmd.ask import ask_command

    text = _read_input(file)
    if not text.strip():
        console.print("[red]Error:[/red] You must provide a prompt")
        raise typer.Exit(1)

    code = asyncio.run(ask_command(text, ctx.obj["config"], show_meta=meta, console=console))
    raise typer.Exit(code)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
    path: bool = typer.Option(
        False,
        "--path",
        help="Show configuration directory",
    ),
):
    """Inspect configuration."""
    from ..core.global_paths import GlobalPath

    if path:
        console.print(GlobalPath.config())
        return

    if show:
        resolved: Config = ctx.obj["config"]
        console.print_json(resolved.model_dump_json(by_alias=True, exclude={"schema_"}))
        for source in ConfigManager.sources():
            console.print(f"[dim]source: {source}[/dim]")
        return

    console.print("Use --show to display configuration or --path to show config path")


if __name__ == "__main__":
    app()
