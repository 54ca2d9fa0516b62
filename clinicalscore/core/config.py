"""Application configuration using pydantic-settings."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Clinical Questionnaire Calculators"
    debug: bool = False
    log_level: str = "INFO"

    # Remote result log. Empty URL disables submission.
    submission_url: str = ""
    submission_timeout: float = 10.0
    submission_max_retries: int = 3
    submission_retry_delay: float = 1.0

    # API
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the service."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
