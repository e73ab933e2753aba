import pytest
from pydantic import ValidationError

from core.config import AppSettings, _parse_env_lines, write_user_env_vars


def test_defaults_match_console_copy(settings):
    assert settings.pending_text == "Running..."
    assert settings.streaming_text == "Streaming..."
    assert settings.clearing_text == "Clearing..."
    assert settings.uploading_text == "Uploading..."
    assert settings.http_timeout_seconds is None
    assert settings.error_message_field == "message"
    assert settings.default_top_k == 3


def test_env_prefix_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AI_CONSOLE_BASE_URL", "http://ai.internal:9000")
    monkeypatch.setenv("AI_CONSOLE_MISSING_FILE_MESSAGE", "Audio file tanlanmagan")
    monkeypatch.setenv("AI_CONSOLE_HTTP_TIMEOUT_SECONDS", "12.5")

    settings = AppSettings(_env_file=None)

    assert settings.base_url == "http://ai.internal:9000"
    assert settings.missing_file_message == "Audio file tanlanmagan"
    assert settings.http_timeout_seconds == 12.5


def test_invalid_values_are_rejected(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, default_top_k=0)


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"AI_CONSOLE_BASE_URL": "http://a"}, env_path=env_path)
    write_user_env_vars({"AI_CONSOLE_LOG_LEVEL": "DEBUG"}, env_path=env_path)

    assert _parse_env_lines(env_path.read_text(encoding="utf-8")) == {
        "AI_CONSOLE_BASE_URL": "http://a",
        "AI_CONSOLE_LOG_LEVEL": "DEBUG",
    }
