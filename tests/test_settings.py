from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.config.settings import DEFAULT_TRANSCRIPTION_URL, Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    for name in ("PORT", "LOG_LEVEL", "MAX_AUDIO_BYTES", "WHISPER_MODEL", "UPLOAD_FILENAME"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)  # type: ignore[call-arg]

    assert s.openai_api_key == "sk-test"
    assert s.port == 8080
    assert s.log_level == "INFO"
    assert str(s.transcription_url) == DEFAULT_TRANSCRIPTION_URL
    assert s.whisper_model == "whisper-1"
    assert s.upload_filename == "audio.mp3"
    assert s.max_audio_bytes is None


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("MAX_AUDIO_BYTES", "1048576")
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "5")

    s = Settings(_env_file=None)  # type: ignore[call-arg]

    assert s.port == 9000
    assert s.log_level == "DEBUG"
    assert s.max_audio_bytes == 1048576
    assert s.fetch_timeout_seconds == 5.0


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_api_key_refuses_to_load(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    else:
        monkeypatch.setenv("OPENAI_API_KEY", value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_blank_max_audio_bytes_means_unlimited(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("MAX_AUDIO_BYTES", "")

    assert Settings(_env_file=None).max_audio_bytes is None  # type: ignore[call-arg]


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError, match="Invalid LOG_LEVEL"):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_settings_are_frozen(settings):
    with pytest.raises(ValidationError):
        settings.port = 1


def test_blank_port_means_default(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("PORT", "")

    assert Settings(_env_file=None).port == 8080  # type: ignore[call-arg]


def test_entrypoint_exits_without_api_key(monkeypatch, capsys):
    from app.__main__ import main
    from app.config.settings import get_settings

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(SystemExit) as exc_info:
            main()
    finally:
        get_settings.cache_clear()

    assert exc_info.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err
