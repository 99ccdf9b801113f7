"""Application settings and configuration.

This module defines all configuration options for the Radical API.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Radical API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="production", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./radical.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Public site and static origin
    public_base_url: str = Field(
        default="https://theradicalparty.com",
        alias="PUBLIC_BASE_URL",
    )
    static_origin_url: str = Field(
        default="https://radical.pages.dev",
        alias="STATIC_ORIGIN_URL",
    )
    static_fetch_timeout_seconds: float = Field(
        default=10.0,
        alias="STATIC_FETCH_TIMEOUT_SECONDS",
    )

    # Blob storage for memes, share images and audio
    blob_backend: Literal["local", "s3"] = Field(default="local", alias="BLOB_BACKEND")
    media_root: str = Field(default="./media", alias="MEDIA_ROOT")
    memes_bucket: str = Field(default="memes", alias="MEMES_BUCKET")
    audio_bucket: str = Field(default="audio", alias="AUDIO_BUCKET")
    s3_endpoint_url: str | None = Field(default=None, alias="S3_ENDPOINT_URL")
    s3_region: str = Field(default="auto", alias="S3_REGION")
    s3_access_key_id: str | None = Field(default=None, alias="S3_ACCESS_KEY_ID")
    s3_secret_access_key: str | None = Field(default=None, alias="S3_SECRET_ACCESS_KEY")

    # Meme uploads
    meme_max_bytes: int = Field(default=2 * 1024 * 1024, alias="MEME_MAX_BYTES")
    meme_allowed_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/gif", "image/webp"],
        alias="MEME_ALLOWED_TYPES",
    )

    # Listing and statistics
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")
    top_postcodes_limit: int = Field(default=5, alias="TOP_POSTCODES_LIMIT")

    # CORS and caching headers applied to every response
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=[
            "Content-Type",
            "Authorization",
            "Accept",
            "Cache-Control",
            "X-Requested-With",
        ],
        alias="CORS_ALLOW_HEADERS",
    )
    cors_max_age: int = Field(default=86400, alias="CORS_MAX_AGE")
    default_cache_control: str = Field(default="no-cache", alias="DEFAULT_CACHE_CONTROL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def public_base(self) -> str:
        """Public site URL without a trailing slash."""
        return self.public_base_url.rstrip("/")


settings = Settings()
