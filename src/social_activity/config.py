"""
Configuration settings for social-activity.
Loads environment variables (and an optional .env file) into typed settings.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

ENV_PREFIX = "SOCIAL_"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Output directory for activities.json and cached provider responses
    activity_path: Optional[Path] = None

    # Twitter
    twitter_bearer_token: str = ""
    twitter_screen_name: str = ""
    twitter_count: int = 10  # Tweets requested per run

    # GitHub
    github_access_token: str = ""
    github_username: str = ""

    # Dribbble
    dribbble_access_token: str = ""
    dribbble_username: str = ""

    # HTTP
    http_timeout: int = 30  # seconds
    user_agent: str = "social-activity/0.1 (+https://github.com)"

    # Feed
    feed_limit: int = 12

    def require(self, name: str) -> str:
        """Return a non-empty string setting or raise ``ConfigError`` naming its env var."""
        value = getattr(self, name, None)
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ConfigError(f"{ENV_PREFIX}{name.upper()} not set!")
        return text

    def require_activity_path(self) -> Path:
        if self.activity_path is None or not str(self.activity_path).strip():
            raise ConfigError(f"Activity feed filepath not set! ({ENV_PREFIX}ACTIVITY_PATH)")
        return Path(self.activity_path).expanduser()
