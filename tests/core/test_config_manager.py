import asyncio
import json
from pathlib import Path

import pytest

from gemfloat.core.config import ConfigError, ConfigManager
from gemfloat.core.global_paths import GlobalPath


def test_project_config_overrides_global(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    global_dir = Path(GlobalPath.config())
    global_dir.mkdir(parents=True)
    (global_dir / "gemfloat.json").write_text(
        json.dumps({"model": "gemini-global", "layout": {"resultWidth": 0.6}}),
        encoding="utf-8",
    )
    project = tmp_path / "project" / "nested"
    project.mkdir(parents=True)
    (tmp_path / "project" / "gemfloat.jsonc").write_text(
        '{\n  // closer to the working directory wins\n  "model": "gemini-project"\n}\n',
        encoding="utf-8",
    )

    config = asyncio.run(ConfigManager.load(str(project)))

    assert config.model == "gemini-project"
    assert config.layout.result_width == 0.6
    assert str(tmp_path / "project" / "gemfloat.jsonc") in ConfigManager.sources()


def test_inline_config_content_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMFLOAT_TEST_HOST", "proxy.internal")
    (tmp_path / "gemfloat.json").write_text('{"apiHost": "{env:GEMFLOAT_TEST_HOST}"}', encoding="utf-8")
    monkeypatch.setenv("GEMFLOAT_CONFIG_CONTENT", '{"curl": "/opt/curl"}')

    config = asyncio.run(ConfigManager.load(str(tmp_path)))

    assert config.api_host == "proxy.internal"
    assert config.curl == "/opt/curl"


def test_invalid_config_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "gemfloat.json").write_text('{"colour": "blue"}', encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        asyncio.run(ConfigManager.load(str(tmp_path)))

    assert excinfo.value.path == str(tmp_path / "gemfloat.json")


def test_get_caches_until_reset(tmp_path: Path) -> None:
    first = asyncio.run(ConfigManager.get())

    assert asyncio.run(ConfigManager.get()) is first
    ConfigManager.reset()
    assert asyncio.run(ConfigManager.get()) is not first
