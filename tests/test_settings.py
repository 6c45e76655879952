"""Tests for global settings."""

from pathlib import Path

from config.settings import CALENDAR_SCOPE, load_settings


class TestLoadSettings:
    def test_defaults(self, monkeypatch) -> None:
        # Clear any existing env vars
        for var in ["GCAL_TIME_TRACKER_DIR", "GCAL_SCOPES", "LOG_LEVEL"]:
            monkeypatch.delenv(var, raising=False)

        settings = load_settings()
        assert settings.app_dir is None
        assert settings.scopes == [CALENDAR_SCOPE]
        assert settings.log_level == "WARNING"

    def test_app_dir_override(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("GCAL_TIME_TRACKER_DIR", str(tmp_path / "tracker"))

        settings = load_settings()
        assert settings.app_dir == Path(tmp_path / "tracker")

    def test_multiple_scopes_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv(
            "GCAL_SCOPES",
            "https://www.googleapis.com/auth/calendar.readonly, openid",
        )

        settings = load_settings()
        assert settings.scopes == [
            "https://www.googleapis.com/auth/calendar.readonly",
            "openid",
        ]

    def test_blank_scopes_fall_back_to_default(self, monkeypatch) -> None:
        monkeypatch.setenv("GCAL_SCOPES", " , ")

        settings = load_settings()
        assert settings.scopes == [CALENDAR_SCOPE]

    def test_log_level_is_uppercased(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings()
        assert settings.log_level == "DEBUG"

    def test_unknown_log_level_falls_back_to_warning(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        settings = load_settings()
        assert settings.log_level == "WARNING"
