from pathlib import Path

import pytest

from quickjot.config import DEFAULT_DATA_DIR, Settings


def test_defaults(monkeypatch):
    for name in ("APP_DATA_DIR", "LOG_LEVEL", "QUICKJOT_API_URL", "ALLOC_MAX_ATTEMPTS", "QUICKJOT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.log_level == "INFO"
    assert settings.alloc_max_attempts == 10
    assert settings.request_timeout == 10.0


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("QUICKJOT_API_URL", "http://notes.example:9000")
    monkeypatch.setenv("ALLOC_MAX_ATTEMPTS", "25")
    monkeypatch.setenv("QUICKJOT_TIMEOUT_SECONDS", "2.5")

    settings = Settings.from_env()
    assert settings.data_dir == Path(tmp_path)
    assert settings.log_level == "DEBUG"
    assert settings.api_url == "http://notes.example:9000"
    assert settings.alloc_max_attempts == 25
    assert settings.request_timeout == 2.5


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_bad_attempt_cap_fails_fast(monkeypatch, value):
    monkeypatch.setenv("ALLOC_MAX_ATTEMPTS", value)
    with pytest.raises(ValueError):
        Settings.from_env()
