"""Floating surfaces, their hosts and the result surface controller."""

from .base import Geometry, Severity, Surface, SurfaceHost, View
from .controller import ResultSurfaceController, SurfaceState
from .memory import MemoryHost

__all__ = [
    "Geometry",
    "MemoryHost",
    "ResultSurfaceController",
    "Severity",
    "Surface",
    "SurfaceHost",
    "SurfaceState",
    "View",
]
