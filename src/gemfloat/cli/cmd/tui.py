"""TUI command - start the interactive terminal interface."""

from __future__ import annotations

from typing import Callable, Optional

from ...core.config_schema import Config
from ...tui.app import run_tui
from ...util.log import Log

log = Log.create({"service": "cli.tui"})


def tui_command(
    config: Config,
    text: str = "",
    run: Optional[Callable[..., None]] = None,
) -> None:
    """Start the gemfloat TUI with ``text`` preloaded in the scratch editor."""
    log.info("starting TUI", {"model": config.model, "chars": len(text)})
    call = run or run_tui
    call(config=config, text=text)
