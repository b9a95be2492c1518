"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "printpress.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


DEFAULT_SECRET_KEY = "change-me-in-production"


class AuthSettings(BaseSettings):
    """Bearer token configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    cookie_name: str = "token"


class PdfSettings(BaseSettings):
    """Stock report PDF configuration."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    # Used when the tenant has not saved a company name yet
    company_name: str = "Printing Press"
    footer_text: str = "Paper stock report"
    # TTF font with Devanagari coverage, e.g. NotoSansDevanagari-Regular.ttf
    unicode_font_path: str = ""


class LedgerSettings(BaseSettings):
    """Paper stock ledger behaviour."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # Re-read the ledger after each write and fail the request on a bad balance
    verify_after_write: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Printpress Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)

    @model_validator(mode="after")
    def require_real_secret(self) -> "Settings":
        if self.environment == "production" and self.auth.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("AUTH_SECRET_KEY must be set in production")
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
