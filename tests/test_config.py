from pathlib import Path

import pytest

from bracket_harvester.config import ScanConfig, load_secret
from bracket_harvester.errors import ConfigError


def test_scan_config_defaults() -> None:
    config = ScanConfig()
    assert config.request_interval == 1.0
    assert config.retry_delay == 60.0
    assert config.secret is None
    assert "secret" not in repr(ScanConfig(secret="hidden"))


def test_scan_config_validates() -> None:
    with pytest.raises(ConfigError):
        ScanConfig(request_timeout=-1)


def test_load_secret_reads_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IM_SECRET", "placeholder")
    monkeypatch.delenv("IM_SECRET")
    env_file = tmp_path / ".env"
    env_file.write_text("IM_SECRET=from-file\n", encoding="utf-8")
    assert load_secret(str(env_file)) == "from-file"


def test_load_secret_environment_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IM_SECRET", "from-env")
    env_file = tmp_path / ".env"
    env_file.write_text("IM_SECRET=from-file\n", encoding="utf-8")
    assert load_secret(str(env_file)) == "from-env"


def test_load_secret_empty_is_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IM_SECRET", "")
    assert load_secret(str(tmp_path / "absent.env")) is None
