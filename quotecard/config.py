"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Keys (only required once metadata is fetched)
    youtube_api_key: Optional[str] = Field(default=None, alias="YOUTUBE_API_KEY")

    # Paths
    output_dir: Path = Field(default=Path("output"), alias="OUTPUT_DIR")
    assets_dir: Path = Field(default=Path("assets"), alias="ASSETS_DIR")

    # Image acquisition
    image_timeout_s: float = Field(default=15.0, gt=0, alias="IMAGE_TIMEOUT_S")
    image_max_retries: int = Field(default=2, ge=0, alias="IMAGE_MAX_RETRIES")
    fallback_profile_url: str = Field(
        default="https://www.gravatar.com/avatar/00000000000000000000000000000000?d=mp&f=y",
        alias="FALLBACK_PROFILE_URL",
    )
    fallback_channel_url: str = Field(
        default="https://www.gravatar.com/avatar/00000000000000000000000000000000?d=identicon&f=y",
        alias="FALLBACK_CHANNEL_URL",
    )
    fallback_thumbnail_url: str = Field(
        default="https://images.unsplash.com/photo-1461151304267-38535e780c79?w=1200&auto=format&fit=crop&q=80",
        alias="FALLBACK_THUMBNAIL_URL",
    )

    # Card Settings
    card_heading: str = Field(default="What are viewers saying?", alias="CARD_HEADING")
    default_layout: str = Field(default="default", alias="DEFAULT_LAYOUT")
    default_text_size: int = Field(default=42, ge=14, le=72, alias="DEFAULT_TEXT_SIZE")
    default_comment_position: int = Field(
        default=450, ge=100, le=800, alias="DEFAULT_COMMENT_POSITION"
    )

    # YouTube Settings
    comments_max_results: int = Field(default=99, ge=1, le=100, alias="COMMENTS_MAX_RESULTS")
    verified_subscriber_threshold: int = Field(
        default=100_000, alias="VERIFIED_SUBSCRIBER_THRESHOLD"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    gcp_project_id: Optional[str] = Field(default=None, alias="GCP_PROJECT_ID")

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def fonts_dir(self) -> Path:
        """Path to the fonts directory."""
        return self.assets_dir / "fonts"

    @property
    def fallback_images(self) -> dict[str, str]:
        """Fallback image URLs keyed by the element they stand in for."""
        return {
            "profile": self.fallback_profile_url,
            "channel": self.fallback_channel_url,
            "thumbnail": self.fallback_thumbnail_url,
        }


# Global settings instance
settings = Settings()
