"""Runtime logging bootstrap helpers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Literal, Optional

from ..core.config import ConfigManager
from ..util.log import Log, LogFormat, LogLevel

LogMode = Literal["cli", "tui"]


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


async def _resolve(
    *,
    mode: LogMode,
    level: Optional[str],
    format: Optional[str],
    console: Optional[bool],
    file: Optional[bool],
) -> LogSettings:
    cfg = await ConfigManager.get()
    log = cfg.logging

    lv = LogLevel.parse(level or (log.level if log else None) or cfg.log_level)
    fm = LogFormat.parse(format or (log.format if log else None))

    # Console output in TUI mode is opt-in only.
    use_console = console
    if use_console is None:
        use_console = log.console if log and log.console is not None else False
    if mode == "tui" and console is None:
        use_console = False

    use_file = file
    if use_file is None:
        use_file = log.file if log and log.file is not None else True

    use_dev = log.dev_file if log and log.dev_file is not None else False

    return LogSettings(level=lv, format=fm, console=use_console, file=use_file, dev_file=use_dev)


def bootstrap_logging(
    *,
    mode: LogMode,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
) -> LogSettings:
    """Resolve config and initialize the process logger."""
    settings = asyncio.run(
        _resolve(mode=mode, level=level, format=format, console=console, file=file)
    )
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings
