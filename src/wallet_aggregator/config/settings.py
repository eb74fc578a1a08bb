"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / "Documents" / "Wallet Aggregator Data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Wallet Aggregator"
    app_version: str = "0.1.0"

    # Data directory (cache database and settings document live here)
    data_dir: Optional[Path] = None

    # Database URL for the local cache (derived from data_dir if not set)
    database_url: Optional[str] = None

    # JSON settings document holding the category registry and widget defaults
    config_path: Optional[Path] = None

    log_level: str = "INFO"
    # Optional log file in addition to stdout
    log_file: Optional[Path] = None

    # Upstream provider
    upstream_provider: Literal["octav", "stub"] = "octav"
    upstream_base_url: str = "https://api.octav.fi/v1"
    upstream_api_key: Optional[str] = None
    upstream_request_timeout_seconds: float = 30.0
    upstream_unit_timeout_seconds: float = 120.0
    transactions_page_size: int = 250

    # Entries for today's data go stale after this; past dates never do
    current_cache_ttl_seconds: int = 300

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "cache.db"
        return f"sqlite:///{db_path}"

    def get_config_path(self) -> Path:
        """Get the settings document path, deriving from data_dir if not set."""
        if self.config_path:
            return self.config_path
        return self.get_data_dir() / "config.json"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
