"""Application settings and configuration.

This module defines all configuration options for the Startup Feed service.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    The storage backend is not chosen here: the selector reads these values
    once at startup and hands the resulting store to its callers.
    """

    # Application metadata
    app_name: str = Field(default="Startup Feed", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    admin_email: str = Field(default="admin@startup.com", alias="ADMIN_EMAIL")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Document store; leaving the URI empty selects flat-file mode
    mongodb_uri: str | None = Field(default=None, alias="MONGODB_URI")
    mongodb_db: str = Field(default="startup_app", alias="MONGODB_DB")
    mongodb_timeout_ms: int = Field(default=5000, alias="MONGODB_TIMEOUT_MS")

    # Flat-file storage
    data_dir: Path = Field(default=Path("./data"), alias="DATA_DIR")

    # Write three example posts when the feed is read while empty
    seed_sample_posts: bool = Field(default=True, alias="SEED_SAMPLE_POSTS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def document_store_configured(self) -> bool:
        """Return True when a MongoDB connection string is present."""
        return bool(self.mongodb_uri and self.mongodb_uri.strip())


settings = Settings()  # type: ignore[call-arg]
