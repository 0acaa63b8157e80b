"""
midievent Configuration

Environment-based configuration for the MIDI event model.
"""
import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from midievent.contracts.midi_types import MidiChannel


# Concert pitch for A4 (MIDI 69). Overridden with MIDIEVENT_PITCH_REFERENCE_HZ.
DEFAULT_PITCH_REFERENCE_HZ: float = 440.0


class Settings(BaseSettings):
    """Package settings loaded from environment variables."""

    debug: bool = False
    log_level: Optional[str] = None  # falls back to DEBUG/INFO from `debug`

    # Note derivation
    pitch_reference_hz: float = Field(default=DEFAULT_PITCH_REFERENCE_HZ, gt=0.0)
    note_name_mode: Literal["sharp", "flat"] = "sharp"

    # Channel given to meta/system events when none is supplied
    default_meta_channel: MidiChannel = 1

    @model_validator(mode="after")
    def _normalise_log_level(self) -> "Settings":
        """Upper-case the log level and reject names logging does not know."""
        if self.log_level is not None:
            level = self.log_level.upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ValueError(f"Unknown log level {self.log_level!r}")
            self.log_level = level
        return self

    @property
    def effective_log_level(self) -> int:
        if self.log_level is not None:
            return logging.getLevelName(self.log_level)
        return logging.DEBUG if self.debug else logging.INFO

    model_config = SettingsConfigDict(
        env_prefix="MIDIEVENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging for hosts that embed the event model."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
