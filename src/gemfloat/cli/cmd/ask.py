"""Ask command - send one prompt without the TUI and print the answer."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from ...core.config_schema import Config
from ...pipeline.orchestrator import CredentialProvider, RequestOrchestrator
from ...pipeline.runner import ProcessRunner
from ...surface.controller import META_KEY
from ...surface.memory import MemoryHost
from ...util.log import Log

log = Log.create({"service": "cli.ask"})


async def ask_command(
    text: str,
    config: Config,
    *,
    show_meta: bool = False,
    console: Optional[Console] = None,
    credentials: Optional[CredentialProvider] = None,
    runner: Optional[ProcessRunner] = None,
) -> int:
    """Run one request against an in-memory surface and print its content.

    Returns the process exit status: 0 on a decoded answer, 1 otherwise.
    """
    console = console or Console()
    host = MemoryHost(text)
    orchestrator = RequestOrchestrator(host, config=config, credentials=credentials, runner=runner)

    pending = orchestrator.run()
    if pending is None:
        for note in host.notifications:
            console.print(f"[yellow]Warning:[/yellow] {note.message}")
        return 1

    with console.status("Waiting for Gemini..."):
        decoded = await pending.wait()

    surface = pending.controller.surface
    if show_meta and surface is not None:
        surface.trigger(META_KEY)

    lines = surface.get_lines() if surface is not None else None
    console.print(Markdown("\n".join(lines or [])))
    log.info("ask finished", {"ok": decoded.ok})
    return 0 if decoded.ok else 1
