"""Tests for settings loading and logging configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from config.logging_setup import configure_logging
from config.settings import Settings, get_settings


@pytest.fixture
def fresh_settings():
    """Clear the settings cache around a test."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self) -> None:
        """Test: Defaults describe a non-updating run."""
        settings = Settings()

        assert settings.snapshot_update_mode == "none"
        assert settings.snapshot_dir_name == "__snapshot_predicates__"
        assert settings.snapshot_expand_diff is False
        assert settings.snapshot_report_all_fields is False
        assert settings.diff_context_lines == 3

    def test_environment_overrides(
        self, monkeypatch: pytest.MonkeyPatch, fresh_settings
    ) -> None:
        """Test: Environment variables populate the settings."""
        monkeypatch.setenv("SNAPSHOT_UPDATE_MODE", "new")
        monkeypatch.setenv("SNAPSHOT_DIR_NAME", "snaps")
        monkeypatch.setenv("SNAPSHOT_EXPAND_DIFF", "yes")
        monkeypatch.setenv("SNAPSHOT_REPORT_ALL_FIELDS", "1")
        monkeypatch.setenv("SNAPSHOT_DIFF_CONTEXT_LINES", "0")

        settings = fresh_settings()

        assert settings.snapshot_update_mode == "new"
        assert settings.snapshot_dir_name == "snaps"
        assert settings.snapshot_expand_diff is True
        assert settings.snapshot_report_all_fields is True
        assert settings.diff_context_lines == 0

    def test_invalid_update_mode(self, monkeypatch: pytest.MonkeyPatch, fresh_settings) -> None:
        """Test: Unknown update modes are rejected."""
        monkeypatch.setenv("SNAPSHOT_UPDATE_MODE", "sometimes")

        with pytest.raises(ValidationError):
            fresh_settings()

    def test_negative_context_rejected(self) -> None:
        """Test: Diff context cannot be negative."""
        with pytest.raises(ValidationError):
            Settings(diff_context_lines=-1)


class TestLogging:
    """Test logging configuration."""

    def test_level_applied_to_package_loggers(self) -> None:
        """Test: The configured level reaches the engine loggers."""
        level = configure_logging("debug")

        assert level == logging.DEBUG
        assert logging.getLogger("snapshot_engine").level == logging.DEBUG
        configure_logging("WARNING")

    def test_unknown_level_falls_back(self) -> None:
        """Test: Garbage levels fall back to INFO."""
        assert configure_logging("chatty") == logging.INFO
        configure_logging("WARNING")
