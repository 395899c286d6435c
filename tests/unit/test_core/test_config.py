"""Unit tests for core configuration module."""

import pytest
from pydantic import ValidationError

from geotag_api.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_defaults(self) -> None:
        """Default values match the Nominatim usage policy."""
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.log_dir is None
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.geocoder_nominatim_base_url == "https://nominatim.openstreetmap.org"
        assert settings.geocoder_user_agent == "geotag-api/1.0"
        assert settings.geocoder_timeout == 10.0
        assert settings.geocoder_min_interval == 1.0
        assert settings.geocoder_throttle_cooldown == 5.0
        assert settings.geocoder_cache_precision == 4

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings load from environment variables."""
        monkeypatch.setenv("GEOCODER_USER_AGENT", "issue-intake/2.0 (ops@example.org)")
        monkeypatch.setenv("GEOCODER_MIN_INTERVAL", "1.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = get_settings()
        assert settings.geocoder_user_agent == "issue-intake/2.0 (ops@example.org)"
        assert settings.geocoder_min_interval == 1.5
        assert settings.log_level == "debug"

    def test_base_url_trailing_slash_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCODER_NOMINATIM_BASE_URL", "http://nominatim.internal:8080/")
        settings = Settings(_env_file=None)
        assert settings.geocoder_nominatim_base_url == "http://nominatim.internal:8080"

    def test_base_url_requires_scheme(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCODER_NOMINATIM_BASE_URL", "nominatim.openstreetmap.org")
        with pytest.raises(ValidationError, match="http"):
            Settings(_env_file=None)

    def test_empty_user_agent_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCODER_USER_AGENT", "")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    @pytest.mark.parametrize("name", ["GEOCODER_TIMEOUT", "GEOCODER_MIN_INTERVAL"])
    def test_positive_floats(self, monkeypatch: pytest.MonkeyPatch, name: str) -> None:
        monkeypatch.setenv(name, "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cooldown_may_be_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCODER_THROTTLE_COOLDOWN", "0")
        assert Settings(_env_file=None).geocoder_throttle_cooldown == 0.0

    def test_cache_precision_bounds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCODER_CACHE_PRECISION", "9")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
