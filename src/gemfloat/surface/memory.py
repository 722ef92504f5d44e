"""In-memory surface host used by the headless CLI and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .base import Geometry, Severity, Surface, SurfaceHost, View


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity


class MemoryHost(SurfaceHost):
    """Keeps surfaces, views and notifications in lists."""

    def __init__(self, text: str = "", size: Tuple[int, int] = (120, 40)) -> None:
        self.text = text
        self._size = size
        self.surfaces: List[Surface] = []
        self.views: List[View] = []
        self.notifications: List[Notification] = []
        self.active_view: Optional[View] = None

    def size(self) -> Tuple[int, int]:
        return self._size

    def current_text(self) -> str:
        return self.text

    def open_surface(self, geometry: Geometry) -> Surface:
        surface = Surface(geometry, name=f"surface-{len(self.surfaces) + 1}")
        self.surfaces.append(surface)
        return surface

    def open_view(self, lines: Sequence[str], content_type: str) -> View:
        view = View(name=f"view-{len(self.views) + 1}", lines=list(lines), content_type=content_type)
        self.views.append(view)
        self.active_view = view
        return view

    def notify(self, message: str, severity: Severity = Severity.INFORMATION) -> None:
        self.notifications.append(Notification(message=message, severity=severity))
