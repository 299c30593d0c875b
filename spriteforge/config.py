from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Google GenAI
    gemini_api_key: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")

    # Image generation
    image_provider: str = Field("gemini", validation_alias="IMAGE_PROVIDER")
    image_model: str = Field("gemini-2.5-flash-image-preview", validation_alias="IMAGE_MODEL")
    image_temperature: float = Field(0.7, validation_alias="IMAGE_TEMPERATURE")

    # Video generation
    video_provider: str = Field("veo", validation_alias="VIDEO_PROVIDER")
    video_model: str = Field("veo-3.0-generate-001", validation_alias="VIDEO_MODEL")
    video_poll_interval: float = Field(
        10.0, validation_alias="VIDEO_POLL_INTERVAL", description="Seconds between operation status checks."
    )
    video_max_polls: int = Field(
        60, validation_alias="VIDEO_MAX_POLLS", description="Give up on a video operation after this many checks."
    )

    # Presets
    presets_file: Optional[str] = Field(
        default=None,
        validation_alias="PRESETS_FILE",
        description="Optional JSON file with extra presets loaded on top of the built-in ones.",
    )

    # HTTP uploads
    max_upload_bytes: int = Field(10 * 1024 * 1024, validation_alias="MAX_UPLOAD_BYTES")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
