"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from weasel.config.settings import DetectionSettings, ImgurSettings, Settings


class TestImgurSettings:
    """Test Imgur settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("WEASEL_IMGUR_CLIENT_ID", raising=False)
        settings = ImgurSettings()

        assert settings.is_configured is False
        assert settings.api_base_url == "https://api.imgur.com/3"
        assert "i.imgur.com" in settings.hosts

    def test_strips_trailing_slash(self):
        settings = ImgurSettings(client_id="abc", api_base_url="https://api.example/3/")
        assert settings.api_base_url == "https://api.example/3"
        assert settings.is_configured is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("WEASEL_IMGUR_CLIENT_ID", "from-env")
        assert ImgurSettings().client_id == "from-env"


class TestDetectionSettings:
    """Test detection settings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "WEASEL_DETECTION_INITIAL_BACKOFF_SECONDS",
            "WEASEL_DETECTION_MAX_BACKOFF_SECONDS",
            "WEASEL_DETECTION_BROKEN_IS_PERMANENT",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = DetectionSettings()

        assert settings.initial_backoff_seconds == 0.002
        assert settings.max_backoff_seconds == 600.0
        assert settings.broken_is_permanent is False

    def test_rejects_non_positive_backoff(self):
        with pytest.raises(ValidationError):
            DetectionSettings(initial_backoff_seconds=0)


class TestNestedSettings:
    """Test the top-level Settings object."""

    def test_nested_environment(self, monkeypatch):
        monkeypatch.setenv("WEASEL_IMGUR__CLIENT_ID", "nested")
        monkeypatch.setenv("WEASEL_DETECTION__BROKEN_IS_PERMANENT", "true")

        settings = Settings(_env_file=None)

        assert settings.imgur.client_id == "nested"
        assert settings.detection.broken_is_permanent is True
