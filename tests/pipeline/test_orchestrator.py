import asyncio
import json

import pytest

from gemfloat.core.config_schema import Config
from gemfloat.core.env import Env
from gemfloat.pipeline.orchestrator import EnvCredentialProvider, RequestOrchestrator
from gemfloat.pipeline.runner import ProcessResult
from gemfloat.pipeline.spinner import SpinnerController
from gemfloat.surface.base import Severity
from gemfloat.surface.controller import SurfaceState
from gemfloat.surface.memory import MemoryHost
from tests.helpers import FakeCredentials, FakeRunner, gemini_body, pretty_lines


def _orchestrator(host: MemoryHost, runner: FakeRunner, key: str | None = "test-key") -> RequestOrchestrator:
    return RequestOrchestrator(
        host,
        config=Config(),
        credentials=FakeCredentials(key),
        runner=runner,
        spinner=SpinnerController(interval=0.01),
    )


@pytest.mark.anyio
@pytest.mark.parametrize("key", [None, ""])
async def test_missing_credential_warns_once_and_launches_nothing(key: str | None) -> None:
    host = MemoryHost("prompt")
    runner = FakeRunner()

    pending = _orchestrator(host, runner, key=key).run()

    assert pending is None
    assert runner.calls == []
    assert host.surfaces == []
    assert len(host.notifications) == 1
    assert host.notifications[0].severity is Severity.WARNING
    assert "GEMINI_API_KEY" in host.notifications[0].message


@pytest.mark.anyio
async def test_run_returns_before_completion_and_renders_result() -> None:
    host = MemoryHost("line one\nline two", size=(100, 50))
    runner = FakeRunner(
        ProcessResult(stdout=pretty_lines(gemini_body("# Title\n\nBody text"))),
        delay=0.05,
    )

    pending = _orchestrator(host, runner).run()

    assert pending is not None
    controller = pending.controller
    assert controller.state is SurfaceState.LOADING
    assert controller.surface.geometry.height == 1
    assert controller.surface.geometry.width == 50

    await asyncio.sleep(0.02)
    assert controller.surface.get_lines()[0].startswith("Loading... ")

    decoded = await pending.wait()

    assert decoded.response_text == "# Title\n\nBody text"
    assert controller.state is SurfaceState.DISPLAYING
    assert controller.surface.get_lines() == ["# Title", "Body text"]
    assert controller.surface.content_type == "markdown"
    assert controller.surface.get_meta() == decoded.meta
    assert controller.surface.geometry.width == 80
    assert controller.surface.geometry.height == 40
    assert controller.surface.keys == ["?", "escape", "q", "t"]

    program, args, stdin = runner.calls[0]
    assert program == "curl"
    assert any(arg.endswith("gemini-2.0-flash:generateContent?key=test-key") for arg in args)
    assert json.loads(stdin) == {"contents": [{"parts": [{"text": "line one\nline two"}]}]}


@pytest.mark.anyio
async def test_spinner_does_not_overwrite_rendered_result() -> None:
    host = MemoryHost("q")
    pending = _orchestrator(host, FakeRunner(delay=0.03)).run()

    await pending.wait()
    lines = pending.controller.surface.get_lines()
    await asyncio.sleep(0.05)

    assert pending.controller.surface.get_lines() == lines
    assert lines == ["Hello from Gemini"]


@pytest.mark.anyio
async def test_closing_surface_mid_flight_makes_completion_a_no_op() -> None:
    host = MemoryHost("q")
    runner = FakeRunner(delay=0.03)
    pending = _orchestrator(host, runner).run()

    pending.controller.close()
    decoded = await pending.wait()

    assert decoded.ok is True
    assert pending.controller.state is SurfaceState.CLOSED
    assert pending.controller.surface.alive is False
    assert host.views == []


@pytest.mark.anyio
async def test_process_failure_renders_diagnostic() -> None:
    host = MemoryHost("q")
    runner = FakeRunner(
        ProcessResult(stdout=[], stderr=["curl: (6) Could not resolve host"], exit_code=6)
    )
    pending = _orchestrator(host, runner).run()

    decoded = await pending.wait()

    assert decoded.ok is False
    assert pending.controller.surface.get_lines() == ["Failed to decode response: "]
    assert "Could not resolve host" in pending.controller.surface.get_meta()


def test_env_credential_provider_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMFLOAT_TEST_KEY", "from-env")
    Env.reset()

    assert EnvCredentialProvider("GEMFLOAT_TEST_KEY").api_key() == "from-env"
    assert EnvCredentialProvider("GEMFLOAT_TEST_UNSET_KEY").api_key() is None
