from collections.abc import Iterator
from pathlib import Path

import pytest

from gemfloat.core.config import ConfigManager
from gemfloat.core.env import Env
from gemfloat.core.global_paths import GlobalPath
from gemfloat.util.log import Log, LogFormat, LogLevel


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    config_dir = tmp_path / "config"
    monkeypatch.setattr(GlobalPath, "log", classmethod(lambda cls: str(tmp_path / "log")))
    monkeypatch.setattr(GlobalPath, "config", classmethod(lambda cls: str(config_dir)))
    monkeypatch.delenv("GEMFLOAT_CONFIG_CONTENT", raising=False)
    yield tmp_path
    Log.configure(level=LogLevel.INFO, format=LogFormat.KV, console=False, file=False)


@pytest.fixture(autouse=True)
def config_context() -> Iterator[None]:
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture(autouse=True)
def env_snapshot() -> Iterator[None]:
    Env.reset()
    yield
    Env.reset()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
