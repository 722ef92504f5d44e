"""Loading animation written into a surface on a fixed interval."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.config_schema import SPINNER_FRAMES
from ..surface.base import Surface
from ..util.log import Log

log = Log.create({"service": "spinner"})

LOADING_PREFIX = "Loading... "


@dataclass
class SpinnerHandle:
    surface: Surface
    frame_index: int = 0
    task: Optional[asyncio.Task[None]] = None
    stopped: bool = False


class SpinnerController:
    """Writes ``Loading... <frame>`` into a surface until stopped."""

    def __init__(self, interval: float = 0.1, frames: Sequence[str] = SPINNER_FRAMES) -> None:
        if not frames:
            raise ValueError("spinner needs at least one frame")
        self.interval = interval
        self.frames = list(frames)

    def start(self, surface: Surface) -> SpinnerHandle:
        handle = SpinnerHandle(surface=surface)
        handle.task = asyncio.create_task(self._animate(handle))
        return handle

    def stop(self, handle: SpinnerHandle) -> None:
        if handle.stopped:
            return
        handle.stopped = True
        if handle.task is not None and not handle.task.done():
            handle.task.cancel()
        handle.task = None
        log.debug("spinner stopped", {"surface": handle.surface.name, "frame": handle.frame_index})

    def tick(self, handle: SpinnerHandle) -> bool:
        """Draw the current frame and advance. A destroyed surface is skipped."""
        if handle.stopped:
            return False
        frame = self.frames[handle.frame_index]
        if not handle.surface.set_lines([LOADING_PREFIX + frame]):
            return False
        handle.frame_index = (handle.frame_index + 1) % len(self.frames)
        return True

    async def _animate(self, handle: SpinnerHandle) -> None:
        while not handle.stopped:
            self.tick(handle)
            await asyncio.sleep(self.interval)
