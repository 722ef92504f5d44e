"""Textual implementation of the surface host.

Floating surfaces are modal screens whose panel is placed at the surface
geometry. Exported views become tabs of the main application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Tuple

from rich.markdown import Markdown
from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ..surface.base import Geometry, Severity, Surface, SurfaceHost, View
from ..surface.controller import CANCEL_KEY, MARKDOWN
from ..util.log import Log

if TYPE_CHECKING:
    from .app import GeminiApp

log = Log.create({"service": "tui.surface"})

# Round border plus one cell of horizontal padding on each side.
FRAME_WIDTH = 4
FRAME_HEIGHT = 2


def render_lines(lines: Sequence[str], content_type: str) -> Markdown | Text:
    text = "\n".join(lines)
    if content_type == MARKDOWN:
        return Markdown(text)
    return Text(text)


class SurfaceScreen(ModalScreen[None]):
    """Screen showing one floating surface."""

    BINDINGS = [
        Binding("escape", "cancel", "Close", show=False),
    ]

    DEFAULT_CSS = """
    SurfaceScreen {
        align: left top;
        background: $background 30%;
    }

    SurfaceScreen > #surface-panel {
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(self, surface: "TextualSurface") -> None:
        super().__init__()
        self.surface = surface

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="surface-panel"):
            yield Static(id="surface-body")

    def on_mount(self) -> None:
        self.refresh_surface()

    def refresh_surface(self) -> None:
        if not self.is_mounted:
            return
        geometry = self.surface.geometry
        panel = self.query_one("#surface-panel", VerticalScroll)
        panel.styles.width = geometry.width + FRAME_WIDTH
        panel.styles.height = geometry.height + FRAME_HEIGHT
        panel.styles.offset = (geometry.col, geometry.row)
        body = self.query_one("#surface-body", Static)
        body.update(render_lines(self.surface.get_lines() or [], self.surface.content_type))

    def on_key(self, event: events.Key) -> None:
        if self.surface.trigger(event.character):
            event.stop()
            event.prevent_default()

    def on_screen_resume(self) -> None:
        if not self.surface.alive and self.app.screen is self:
            self.app.pop_screen()

    def action_cancel(self) -> None:
        self.surface.trigger(CANCEL_KEY)


class TextualSurface(Surface):
    def __init__(self, app: "GeminiApp", geometry: Geometry, name: str) -> None:
        super().__init__(geometry, name=name)
        self.app = app
        self.screen = SurfaceScreen(self)

    def _render(self) -> None:
        self.screen.refresh_surface()

    def _close(self) -> None:
        if self.app.screen is self.screen:
            self.app.pop_screen()
        else:
            log.info("surface closed below the active screen", {"surface": self.name})


class TextualHost(SurfaceHost):
    def __init__(self, app: "GeminiApp") -> None:
        self.app = app
        self._opened = 0

    def size(self) -> Tuple[int, int]:
        return self.app.size.width, self.app.size.height

    def current_text(self) -> str:
        return self.app.editor_text()

    def open_surface(self, geometry: Geometry) -> Surface:
        self._opened += 1
        surface = TextualSurface(self.app, geometry, name=f"surface-{self._opened}")
        self.app.push_screen(surface.screen)
        return surface

    def open_view(self, lines: Sequence[str], content_type: str) -> View:
        view = View(name=f"Response {self.app.view_count + 1}", lines=list(lines), content_type=content_type)
        self.app.add_view(view)
        return view

    def notify(self, message: str, severity: Severity = Severity.INFORMATION) -> None:
        self.app.notify(message, severity=severity.value)
