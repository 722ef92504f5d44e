"""Surface and host abstractions.

A :class:`Surface` is a floating display region owned by a host. Every
access reports whether it applied: once a surface is destroyed, writes
return False and reads return None instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..util.log import Log

log = Log.create({"service": "surface"})

Action = Callable[[], None]


class Severity(str, Enum):
    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Geometry:
    """Inner size and top-left position of a surface, in cells."""

    width: int
    height: int
    row: int
    col: int

    @classmethod
    def loading(cls, size: Tuple[int, int], width_ratio: float) -> "Geometry":
        """One-line bar, ``width_ratio`` of the host width, centered."""
        columns, lines = size
        width = max(1, int(columns * width_ratio))
        height = 1
        return cls(width=width, height=height, row=(lines - height) // 2, col=(columns - width) // 2)

    @classmethod
    def result(cls, size: Tuple[int, int], width_ratio: float, height_ratio: float) -> "Geometry":
        """Large centered panel, raised by one row."""
        columns, lines = size
        width = max(1, int(columns * width_ratio))
        height = max(1, int(lines * height_ratio))
        return cls(width=width, height=height, row=max(0, (lines - height) // 2 - 1), col=(columns - width) // 2)


def split_lines(text: str) -> List[str]:
    """Non-empty segments between newlines; other line separators stay in the line."""
    return [line for line in text.split("\n") if line] or [""]


class Surface:
    """Buffer-backed surface. Hosts subclass it and override :meth:`_render` and :meth:`_close`."""

    def __init__(self, geometry: Geometry, name: str = "surface") -> None:
        self.name = name
        self._geometry = geometry
        self._lines: List[str] = []
        self._content_type = ""
        self._meta: Optional[str] = None
        self._bindings: Dict[str, Action] = {}
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def keys(self) -> List[str]:
        return sorted(self._bindings)

    def get_lines(self) -> Optional[List[str]]:
        if not self._alive:
            return None
        return list(self._lines)

    def set_lines(self, lines: Sequence[str]) -> bool:
        if not self._alive:
            return False
        self._lines = list(lines)
        self._render()
        return True

    def insert_lines(self, index: int, lines: Sequence[str]) -> bool:
        if not self._alive:
            return False
        self._lines[index:index] = list(lines)
        self._render()
        return True

    def set_content_type(self, content_type: str) -> bool:
        if not self._alive:
            return False
        self._content_type = content_type
        self._render()
        return True

    def set_meta(self, meta: str) -> bool:
        if not self._alive:
            return False
        self._meta = meta
        return True

    def get_meta(self) -> Optional[str]:
        if not self._alive:
            return None
        return self._meta

    def bind(self, key: str, action: Action) -> bool:
        if not self._alive:
            return False
        self._bindings[key] = action
        return True

    def trigger(self, key: Optional[str]) -> bool:
        """Run the action bound to ``key``. Returns False when nothing ran."""
        if not self._alive or key is None:
            return False
        action = self._bindings.get(key)
        if action is None:
            return False
        action()
        return True

    def resize(self, geometry: Geometry) -> bool:
        if not self._alive:
            return False
        self._geometry = geometry
        self._render()
        return True

    def destroy(self) -> bool:
        if not self._alive:
            return False
        self._alive = False
        self._bindings.clear()
        self._close()
        log.debug("surface destroyed", {"surface": self.name})
        return True

    def _render(self) -> None:
        """Push the current state to the screen."""

    def _close(self) -> None:
        """Remove the surface from the screen."""


@dataclass
class View:
    """Persistent content container created by an export."""

    name: str
    lines: List[str] = field(default_factory=list)
    content_type: str = ""


class SurfaceHost(ABC):
    """Editor-side collaborator: window sizes, surfaces, views and notifications."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """``(columns, lines)`` of the editor area."""

    @abstractmethod
    def current_text(self) -> str:
        """Whole text of the current editing context."""

    @abstractmethod
    def open_surface(self, geometry: Geometry) -> Surface: ...

    @abstractmethod
    def open_view(self, lines: Sequence[str], content_type: str) -> View:
        """Create a persistent view holding ``lines`` and make it active."""

    @abstractmethod
    def notify(self, message: str, severity: Severity = Severity.INFORMATION) -> None: ...
