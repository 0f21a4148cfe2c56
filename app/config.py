"""Application configuration using Pydantic Settings."""

import logging
import warnings

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    app_name: str = "AI Consultancy API"
    debug: bool = False

    # Security
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080  # 1 week

    # Database
    database_url: str = "sqlite:///./consultancy.db"
    # Persistent job store for background jobs (defaults to the main database)
    jobstore_url: str | None = None

    # Embedding provider
    openai_api_key: str | None = None
    embedding_base_url: str = "https://api.openai.com/v1"
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimensions: int = 1536
    embedding_timeout_seconds: float = 30.0

    # Embedding job retries
    embedding_max_attempts: int = 3
    embedding_retry_base_seconds: float = 2.0
    embedding_retry_max_seconds: float = 60.0

    # Search
    search_default_limit: int = 5
    search_max_limit: int = 50

    # CORS
    cors_origins: list[str] = ["*"]

    def __init__(self, **kwargs):
        """Initialize settings and validate production configuration."""
        super().__init__(**kwargs)
        self._validate_production_settings()

    @property
    def effective_jobstore_url(self) -> str:
        """Job store URL, falling back to the main database."""
        return self.jobstore_url or self.database_url

    def _validate_production_settings(self) -> None:
        """Validate and warn about insecure production settings."""
        if not self.debug:
            # Production mode - check for insecure settings
            if self.secret_key == "change-me-in-production":
                warnings.warn(
                    "SECRET_KEY is set to default value. Change this in production!",
                    UserWarning,
                    stacklevel=2,
                )
                logger.warning(
                    "SECRET_KEY is set to default value. Change this in production!"
                )

            if "*" in self.cors_origins:
                warnings.warn(
                    "CORS is configured to allow all origins (*). Restrict this in production!",
                    UserWarning,
                    stacklevel=2,
                )
                logger.warning(
                    "CORS is configured to allow all origins (*). Restrict this in production!"
                )


settings = Settings()
