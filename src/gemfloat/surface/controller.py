"""Result surface lifecycle.

``Loading -> Displaying -> {Closed, Exported}``. While displaying, the
metadata block can be prepended to the content without leaving the state.
Escape closes the surface in any live state, including while loading.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..core.config_schema import LayoutConfig
from ..util.log import Log
from .base import Geometry, Surface, SurfaceHost, split_lines

if TYPE_CHECKING:
    from ..pipeline.decoder import DecodedResult

log = Log.create({"service": "surface.controller"})

MARKDOWN = "markdown"
CLOSE_KEY = "q"
EXPORT_KEY = "t"
META_KEY = "?"
CANCEL_KEY = "escape"


class SurfaceState(str, Enum):
    LOADING = "loading"
    DISPLAYING = "displaying"
    CLOSED = "closed"
    EXPORTED = "exported"


class ResultSurfaceController:
    """Owns one result surface from the loading bar to close or export."""

    def __init__(self, host: SurfaceHost, layout: Optional[LayoutConfig] = None) -> None:
        self.host = host
        self.layout = layout or LayoutConfig()
        self.surface: Optional[Surface] = None
        self.state = SurfaceState.LOADING
        self.meta_shown = False

    def open(self) -> Surface:
        geometry = Geometry.loading(self.host.size(), self.layout.loading_width)
        self.surface = self.host.open_surface(geometry)
        self.surface.bind(CANCEL_KEY, self.close)
        log.debug("loading surface opened", {"width": geometry.width, "row": geometry.row})
        return self.surface

    @property
    def alive(self) -> bool:
        return self.surface is not None and self.surface.alive

    def complete(self, result: DecodedResult) -> bool:
        """Switch the loading surface to the result. Returns False if it was already gone."""
        if self.state is not SurfaceState.LOADING or self.surface is None:
            return False
        surface = self.surface
        if not surface.alive:
            log.info("surface closed before the response arrived")
            return False

        geometry = Geometry.result(self.host.size(), self.layout.result_width, self.layout.result_height)
        surface.resize(geometry)
        surface.set_lines(split_lines(result.response_text))
        surface.set_content_type(MARKDOWN)
        surface.set_meta(result.meta)
        surface.bind(CLOSE_KEY, self.close)
        surface.bind(EXPORT_KEY, self.export)
        surface.bind(META_KEY, self.show_meta)
        self.state = SurfaceState.DISPLAYING
        log.info("response displayed", {"ok": result.ok, "width": geometry.width, "height": geometry.height})
        return True

    def close(self) -> None:
        if not self.alive:
            return
        self.surface.destroy()
        self.state = SurfaceState.CLOSED

    def export(self) -> None:
        if not self.alive:
            return
        lines = self.surface.get_lines() or []
        self.surface.destroy()
        view = self.host.open_view(lines, MARKDOWN)
        self.state = SurfaceState.EXPORTED
        log.info("response exported", {"view": view.name, "lines": len(lines)})

    def show_meta(self) -> None:
        # Not deduplicated: every call prepends the block again.
        if not self.alive:
            return
        meta = self.surface.get_meta()
        if meta is None:
            return
        self.surface.insert_lines(0, [*split_lines(meta), ""])
        self.meta_shown = True
