"""Application configuration using Pydantic Settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "heartsheal-breathing"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Breathing timer
    tick_interval_ms: int = 100
    tick_step_seconds: float = 0.1
    countdown_start: int = 3
    default_total_cycles: int = 3
    default_sound_enabled: bool = True

    # Audio cues
    audio_output: str = "tones"  # "tones" or "log"
    audio_sample_rate_hz: int = 16000

    # Summary storage
    summary_store: str = "local"  # "local" or "dynamodb"
    aws_region: str = "us-east-1"
    summaries_table_name: str = "BreathingSessions"

    # AWS credentials (optional, uses default credential chain if not set)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None


# Create a singleton instance
settings = Settings()
