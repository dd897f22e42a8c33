import pytest
from pydantic import ValidationError

from mediaforward.config import DEFAULT_BANNER_URL, Settings, is_admin


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("API_ID", "API_HASH", "DEST_CHAT", "ADMIN_ID", "SOURCES", "BANNER_URL",
                 "SOURCES_FILE", "SESSION_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_reads_environment(clean_env):
    clean_env.setenv("API_ID", "42")
    clean_env.setenv("API_HASH", "abc")
    clean_env.setenv("DEST_CHAT", "-100555")
    clean_env.setenv("ADMIN_ID", " 111 ")
    clean_env.setenv("SOURCES", "1, 2,,3 ")
    clean_env.setenv("SOURCES_FILE", "/data/sources.json")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.api_id == 42
    assert settings.admin_id == "111"
    assert settings.initial_sources == ["1", "2", "3"]
    assert str(settings.sources_file_path) == "/data/sources.json"
    assert settings.log_level == "DEBUG"
    assert settings.banner_url == DEFAULT_BANNER_URL
    assert settings.forward_retry_attempts == 0
    assert settings.notify_unauthorized_callbacks is False


def test_missing_credentials_fail_validation(clean_env):
    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    missing = {err["loc"][0] for err in exc_info.value.errors()}
    assert {"api_id", "api_hash", "dest_chat", "admin_id"} <= missing


def test_invalid_api_id(clean_env):
    clean_env.setenv("API_ID", "not-a-number")
    clean_env.setenv("API_HASH", "abc")
    clean_env.setenv("DEST_CHAT", "1")
    clean_env.setenv("ADMIN_ID", "1")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_empty_sources(settings):
    assert settings.model_copy(update={"sources": " , "}).initial_sources == []


@pytest.mark.parametrize("user_id,expected", [
    ("111", True), (111, True), (" 111", True), ("1111", False), (None, False), (999, False),
])
def test_is_admin(settings, user_id, expected):
    assert is_admin(settings, user_id) is expected
