from __future__ import annotations

"""Application settings using Pydantic Settings.

Loads configuration from environment variables and optional .env file.
The resulting object is frozen: it is built once at startup and handed to
request handlers through FastAPI dependencies.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TRANSCRIPTION_URL = "https://api.openai.com/v1/audio/transcriptions"
DEFAULT_PORT = 8080


class Settings(BaseSettings):
    """Top-level relay configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Core
    openai_api_key: str

    # App
    app_host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Logging
    log_level: str = "INFO"

    # Provider
    transcription_url: AnyHttpUrl = DEFAULT_TRANSCRIPTION_URL  # type: ignore[assignment]
    whisper_model: str = "whisper-1"
    # Sent as the multipart filename whatever the real source format is
    upload_filename: str = "audio.mp3"

    # Limits
    fetch_timeout_seconds: PositiveFloat = 60.0
    provider_timeout_seconds: PositiveFloat = 120.0
    max_audio_bytes: Optional[PositiveInt] = None

    @field_validator("openai_api_key")
    @classmethod
    def _require_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("OPENAI_API_KEY environment variable not set")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            raise ValueError("Invalid LOG_LEVEL")
        return v.upper()

    @field_validator("max_audio_bytes", mode="before")
    @classmethod
    def _blank_means_unlimited(cls, v: object) -> object:
        # MAX_AUDIO_BYTES= in a compose file arrives as an empty string
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port_means_default(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_PORT
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""

    return Settings()  # type: ignore[call-arg]
