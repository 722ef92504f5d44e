"""Request orchestration: editor text -> Gemini -> result surface."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.config_schema import Config
from ..core.env import Env
from ..surface.base import Severity, SurfaceHost
from ..surface.controller import ResultSurfaceController
from ..util.error import MissingCredentialError
from ..util.log import Log, LogTimer
from .decoder import DecodedResult, decode
from .payload import RequestPayload, build_command
from .runner import ProcessHandle, ProcessRunner
from .spinner import SpinnerController, SpinnerHandle

log = Log.create({"service": "orchestrator"})


class CredentialProvider(Protocol):
    def api_key(self) -> Optional[str]: ...


class EnvCredentialProvider:
    """Reads the API key from an environment variable."""

    def __init__(self, variable: str = "GEMINI_API_KEY") -> None:
        self.variable = variable

    def api_key(self) -> Optional[str]:
        return Env.get(self.variable)


@dataclass
class PendingRequest:
    """An in-flight request. ``wait()`` resolves once the result is rendered."""

    controller: ResultSurfaceController
    task: asyncio.Task[DecodedResult]

    async def wait(self) -> DecodedResult:
        return await self.task


class RequestOrchestrator:
    def __init__(
        self,
        host: SurfaceHost,
        config: Optional[Config] = None,
        credentials: Optional[CredentialProvider] = None,
        runner: Optional[ProcessRunner] = None,
        spinner: Optional[SpinnerController] = None,
    ) -> None:
        self.host = host
        self.config = config or Config()
        self.credentials = credentials or EnvCredentialProvider(self.config.api_key_env)
        self.runner = runner or ProcessRunner()
        self.spinner = spinner or SpinnerController(
            interval=self.config.spinner.interval_ms / 1000,
            frames=self.config.spinner.frames,
        )

    def _require_key(self) -> str:
        key = self.credentials.api_key()
        if not key:
            raise MissingCredentialError(self.config.api_key_env)
        return key

    def run(self) -> Optional[PendingRequest]:
        """Send the current editor text. Returns immediately; None when nothing was sent."""
        text = self.host.current_text()
        try:
            api_key = self._require_key()
        except MissingCredentialError as e:
            log.warn("request aborted", {"reason": "missing credential", "variable": e.variable})
            self.host.notify(str(e), Severity.WARNING)
            return None

        payload = RequestPayload.from_text(text)
        command = build_command(self.config, api_key, payload)

        controller = ResultSurfaceController(self.host, self.config.layout)
        surface = controller.open()
        spinner = self.spinner.start(surface)
        process = self.runner.start(command.program, command.args, command.stdin)
        timer = log.time("request", {"command": command.display, "chars": len(text), "model": self.config.model})

        task = asyncio.create_task(self._finish(controller, spinner, process, timer))
        return PendingRequest(controller=controller, task=task)

    async def _finish(
        self,
        controller: ResultSurfaceController,
        spinner: SpinnerHandle,
        process: ProcessHandle,
        timer: LogTimer,
    ) -> DecodedResult:
        result = await process.wait()
        # Nothing may draw the loading frame once rendering begins.
        self.spinner.stop(spinner)
        decoded = decode(result.stdout, result.stderr)
        if not decoded.ok:
            log.warn("request failed", {"exit_code": result.exit_code, "stderr": "\n".join(result.stderr)})
        controller.complete(decoded)
        timer.stop()
        return decoded
