"""Configuration management for Mastermind."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into ``.env`` files or injected by a secret manager may
    carry a BOM that breaks HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Vault
    vault_dir: Path = Path("./vault")
    active_note: str | None = None
    note_extensions: list[str] = [".md"]
    default_extension: str = ".md"

    # Context assembly
    content_scan_chars: int = Field(default=5000, gt=0)
    relevant_snippet_chars: int = Field(default=2000, gt=0)
    max_relevant_files: int = Field(default=5, gt=0)
    min_relevance_score: int = Field(default=5, ge=0)
    search_result_limit: int = Field(default=20, gt=0)
    scan_workers: int = Field(default=16, gt=0)
    note_read_timeout: float | None = Field(default=None, gt=0)

    # Google AI API
    google_api_key: str = ""
    llm_model: str = "gemini-2.0-flash"
    llm_requests_per_minute: int | None = 15
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2048
    max_tool_rounds: int = Field(default=5, gt=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None
    debug: bool = False

    @field_validator("google_api_key", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    @field_validator("note_extensions", mode="after")
    @classmethod
    def lowercase_extensions(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in (e.strip().lower() for e in value) if ext]


# Global settings instance
settings = Settings()
