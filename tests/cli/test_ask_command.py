import io

import pytest
from rich.console import Console

from gemfloat.cli.cmd.ask import ask_command
from gemfloat.core.config_schema import Config
from gemfloat.pipeline.runner import ProcessResult
from tests.helpers import FakeCredentials, FakeRunner


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, force_terminal=False), buffer


@pytest.mark.anyio
async def test_ask_prints_answer() -> None:
    console, buffer = _console()
    runner = FakeRunner()

    code = await ask_command(
        "hi", Config(), console=console, credentials=FakeCredentials(), runner=runner
    )

    assert code == 0
    assert "Hello from Gemini" in buffer.getvalue()
    assert "Finish Reason" not in buffer.getvalue()
    assert len(runner.calls) == 1


@pytest.mark.anyio
async def test_ask_with_meta_prints_metadata_first() -> None:
    console, buffer = _console()

    code = await ask_command(
        "hi",
        Config(),
        show_meta=True,
        console=console,
        credentials=FakeCredentials(),
        runner=FakeRunner(),
    )

    output = buffer.getvalue()
    assert code == 0
    assert "Finish Reason: STOP" in output
    assert "Total tokens: 12" in output
    assert output.index("Finish Reason") < output.index("Hello from Gemini")


@pytest.mark.anyio
async def test_ask_reports_decode_failure_with_exit_code_one() -> None:
    console, buffer = _console()
    runner = FakeRunner(ProcessResult(stdout=["not json"], stderr=["curl: (7) refused"], exit_code=7))

    code = await ask_command("hi", Config(), console=console, credentials=FakeCredentials(), runner=runner)

    assert code == 1
    assert "Failed to decode response: not json" in buffer.getvalue()


@pytest.mark.anyio
async def test_ask_without_key_warns_and_skips_request() -> None:
    console, buffer = _console()
    runner = FakeRunner()

    code = await ask_command("hi", Config(), console=console, credentials=FakeCredentials(None), runner=runner)

    assert code == 1
    assert runner.calls == []
    assert "Warning: GEMINI_API_KEY is missing from your system environment!" in buffer.getvalue()
