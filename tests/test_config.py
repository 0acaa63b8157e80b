"""Tests for environment-based settings."""
from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from midievent import MIDIEvent
from midievent.config import Settings, configure_logging, get_settings


class TestSettings:
    """Settings defaults and env overrides."""

    def test_defaults(self) -> None:

        settings = Settings()
        assert settings.pitch_reference_hz == 440.0
        assert settings.note_name_mode == "sharp"
        assert settings.default_meta_channel == 1
        assert settings.effective_log_level == logging.INFO

    def test_debug_lowers_log_level(self) -> None:

        assert Settings(debug=True).effective_log_level == logging.DEBUG

    def test_explicit_log_level_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:

        monkeypatch.setenv("MIDIEVENT_LOG_LEVEL", "warning")
        settings = Settings(debug=True)
        assert settings.log_level == "WARNING"
        assert settings.effective_log_level == logging.WARNING

    def test_unknown_log_level_rejected(self) -> None:

        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_invalid_note_name_mode_rejected(self) -> None:

        with pytest.raises(ValidationError):
            Settings(note_name_mode="solfege")

    @pytest.mark.parametrize("channel", [-1, 17])
    def test_default_meta_channel_out_of_range_rejected(self, channel: int) -> None:

        with pytest.raises(ValidationError):
            Settings(default_meta_channel=channel)

    def test_get_settings_is_cached(self) -> None:

        assert get_settings() is get_settings()

    def test_default_meta_channel_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:

        monkeypatch.setenv("MIDIEVENT_DEFAULT_META_CHANNEL", "16")
        assert MIDIEvent(0, 0x51, 120).channel == 16


class TestConfigureLogging:
    """configure_logging applies the settings level."""

    def test_calls_basic_config(self, monkeypatch: pytest.MonkeyPatch) -> None:

        calls: list[dict[str, object]] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging(Settings(debug=True))
        assert calls and calls[0]["level"] == logging.DEBUG
