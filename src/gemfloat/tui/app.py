"""Main TUI application.

A scratch editor tab holds the prompt. ``ctrl+g`` sends it to Gemini and
shows the answer on a floating surface; exported answers open as new tabs.
"""

from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static, TabbedContent, TabPane, TextArea

from ..core.config_schema import Config
from ..pipeline.orchestrator import CredentialProvider, PendingRequest, RequestOrchestrator
from ..pipeline.runner import ProcessRunner
from ..surface.base import View
from ..util.log import Log
from .surface import TextualHost, render_lines

log = Log.create({"service": "tui.app"})


class GeminiApp(App[None]):
    """Scratch editor with Gemini result surfaces."""

    TITLE = "gemfloat"

    CSS = """
    #editor {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+g", "ask", "Ask Gemini", show=True, priority=True),
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        text: str = "",
        credentials: Optional[CredentialProvider] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        super().__init__()
        self.settings = config or Config()
        self.initial_text = text
        self.surface_host = TextualHost(self)
        self.orchestrator = RequestOrchestrator(
            self.surface_host,
            config=self.settings,
            credentials=credentials,
            runner=runner,
        )
        self.requests: List[PendingRequest] = []
        self.view_count = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with TabbedContent(id="views"):
            with TabPane("Scratch", id="scratch"):
                yield TextArea(self.initial_text, id="editor")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.settings.model
        self.query_one("#editor", TextArea).focus()

    @property
    def main_screen(self) -> Screen:
        """The screen holding the editor and tabs, below any surfaces."""
        return self.screen_stack[0]

    def editor_text(self) -> str:
        return self.main_screen.query_one("#editor", TextArea).text

    def action_ask(self) -> None:
        self.requests = [request for request in self.requests if not request.task.done()]
        pending = self.orchestrator.run()
        if pending is not None:
            self.requests.append(pending)

    def add_view(self, view: View) -> None:
        self.view_count += 1
        pane_id = f"view-{self.view_count}"
        self.call_later(self._mount_view, view, pane_id)

    async def _mount_view(self, view: View, pane_id: str) -> None:
        tabs = self.main_screen.query_one("#views", TabbedContent)
        pane = TabPane(
            view.name,
            VerticalScroll(Static(render_lines(view.lines, view.content_type))),
            id=pane_id,
        )
        await tabs.add_pane(pane)
        tabs.active = pane_id
        log.info("view opened", {"view": view.name, "pane": pane_id})


def run_tui(config: Config, text: str = "") -> None:
    """Run the TUI until the user quits."""
    GeminiApp(config=config, text=text).run()
