"""Asynchronous external process runner.

``ProcessRunner.start`` launches a program without blocking the caller and
returns a :class:`ProcessHandle` that resolves exactly once with the buffered
stdout and stderr lines and the exit code.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..util.error import ProcessAlreadyCompletedError
from ..util.log import Log

log = Log.create({"service": "runner"})

LAUNCH_FAILED = -1
STREAM_LIMIT = 16 * 1024 * 1024

LineCallback = Callable[[str], None]


@dataclass(frozen=True)
class ProcessResult:
    """Output of a finished process. Lines are non-empty and in emission order per stream."""

    stdout: List[str] = field(default_factory=list)
    stderr: List[str] = field(default_factory=list)
    exit_code: int = 0

    @property
    def launched(self) -> bool:
        return self.exit_code != LAUNCH_FAILED

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class ProcessHandle:
    """One-shot completion of a started process."""

    def __init__(self, command: str) -> None:
        self.command = command
        self._future: asyncio.Future[ProcessResult] = asyncio.get_running_loop().create_future()
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def done(self) -> bool:
        return self._future.done()

    def resolve(self, result: ProcessResult) -> None:
        if self._future.done():
            raise ProcessAlreadyCompletedError(self.command)
        self._future.set_result(result)

    def result(self) -> ProcessResult:
        """The result of a finished process; raises ``InvalidStateError`` while running."""
        return self._future.result()

    async def wait(self) -> ProcessResult:
        return await asyncio.shield(self._future)

    def add_done_callback(self, callback: Callable[[ProcessResult], None]) -> None:
        self._future.add_done_callback(lambda fut: callback(fut.result()))


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass


async def _collect(
    stream: Optional[asyncio.StreamReader],
    buffer: List[str],
    on_line: Optional[LineCallback],
) -> None:
    if stream is None:
        return
    async for raw in stream:
        line = _decode(raw)
        if not line:
            continue
        buffer.append(line)
        if on_line:
            on_line(line)


class ProcessRunner:
    """Starts programs as asyncio subprocesses."""

    def start(
        self,
        program: str,
        args: Sequence[str] = (),
        stdin: Optional[bytes] = None,
        *,
        on_stdout: Optional[LineCallback] = None,
        on_stderr: Optional[LineCallback] = None,
    ) -> ProcessHandle:
        """Launch ``program`` in the background. Must be called from a running event loop."""
        handle = ProcessHandle(program)
        handle._task = asyncio.create_task(
            self._run(handle, program, list(args), stdin, on_stdout, on_stderr)
        )
        return handle

    async def _run(
        self,
        handle: ProcessHandle,
        program: str,
        args: List[str],
        stdin: Optional[bytes],
        on_stdout: Optional[LineCallback],
        on_stderr: Optional[LineCallback],
    ) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                program,
                *args,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=STREAM_LIMIT,
            )
        except OSError as e:
            log.error("process failed to launch", {"program": program, "error": e})
            handle.resolve(ProcessResult(exit_code=LAUNCH_FAILED))
            return

        log.info("process started", {"program": program, "pid": proc.pid})
        stdout: List[str] = []
        stderr: List[str] = []

        async def feed() -> None:
            if proc.stdin is None or stdin is None:
                return
            try:
                proc.stdin.write(stdin)
                await proc.stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                log.warn("process closed stdin early", {"program": program, "error": e})
            finally:
                proc.stdin.close()

        try:
            await asyncio.gather(
                feed(),
                _collect(proc.stdout, stdout, on_stdout),
                _collect(proc.stderr, stderr, on_stderr),
            )
        except ValueError as e:
            # A single line above STREAM_LIMIT; keep what was read and stop the process.
            log.error("process output could not be read", {"program": program, "error": e})
            _kill(proc)
        except Exception as e:
            log.error("process output handler failed", {"program": program, "error": e})
            _kill(proc)
        exit_code = await proc.wait()
        log.info(
            "process exited",
            {"program": program, "exit_code": exit_code, "stdout_lines": len(stdout), "stderr_lines": len(stderr)},
        )
        handle.resolve(ProcessResult(stdout=list(stdout), stderr=list(stderr), exit_code=exit_code))
