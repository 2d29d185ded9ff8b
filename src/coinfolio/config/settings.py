"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".coinfolio"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COINFOLIO_",
    )

    app_name: str = "Coinfolio"
    app_version: str = "0.1.0"

    # Data directory (holds the key-value database)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Price API (CoinGecko simple price)
    price_api_base_url: str = "https://api.coingecko.com/api/v3"
    price_api_timeout_seconds: float = 7.0
    price_api_max_retries: int = 3
    price_api_retry_delay_seconds: float = 1.0
    price_batch_size: int = 5
    price_batch_delay_seconds: float = 1.0
    use_stub_provider: bool = False

    # Cache freshness windows
    rate_cache_ttl_seconds: int = 60
    total_cache_ttl_seconds: int = 30

    # Ledger policy: reject removals beyond the held balance instead of clamping to 0
    strict_removal: bool = False

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "holdings.db"
        return f"sqlite:///{db_path}"


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
