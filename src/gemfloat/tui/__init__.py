"""Textual terminal interface."""

from .app import GeminiApp, run_tui
from .surface import SurfaceScreen, TextualHost, TextualSurface

__all__ = ["GeminiApp", "SurfaceScreen", "TextualHost", "TextualSurface", "run_tui"]
