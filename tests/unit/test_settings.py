import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_store_backend(self) -> None:
        s = Settings()
        assert s.store_backend == "flatfile"

    def test_default_fetch_retry_budget(self) -> None:
        s = Settings()
        assert s.fetch_max_attempts == 5
        assert s.fetch_retry_delay_seconds == 2.0
        assert s.fetch_backoff == "fixed"

    def test_default_api_base_url(self) -> None:
        s = Settings()
        assert s.flatfile_api_base_url == "https://platform.flatfile.com/api"


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLATFILE_API_KEY", "sk_live")
        s = Settings()
        assert s.flatfile_api_key == "sk_live"

    def test_loads_fetch_max_attempts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_MAX_ATTEMPTS", "3")
        s = Settings()
        assert s.fetch_max_attempts == 3


class TestSettingsValidation:
    def test_invalid_max_attempts_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_MAX_ATTEMPTS", "abc")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_retry_delay_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_RETRY_DELAY_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()
