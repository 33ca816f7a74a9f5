"""Application settings and configuration.

This module defines all configuration options for the resource registry.
Settings are loaded from environment variables (or a `.env` file) with
defaults suitable for local development against SQLite.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Registry settings loaded from environment variables."""

    app_name: str = Field(default="Resource Registry", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./resource_registry.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    db_pool_size: int = Field(default=20, alias="DB_POOL_SIZE", ge=1)
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW", ge=0)

    # Sequence allocation
    sequence_name_max_length: int = Field(default=64, alias="SEQUENCE_NAME_MAX_LENGTH", ge=1)

    # Resource id minting
    resource_id_sequence: str = Field(default="image_bed", alias="RESOURCE_ID_SEQUENCE")
    resource_id_step: int = Field(default=10, alias="RESOURCE_ID_STEP", ge=1)
    resource_id_format: Literal["digest", "prefixed"] = Field(
        default="digest",
        alias="RESOURCE_ID_FORMAT",
    )
    resource_id_prefix: str = Field(default="img", alias="RESOURCE_ID_PREFIX")
    resource_id_digest_length: int = Field(
        default=10,
        alias="RESOURCE_ID_DIGEST_LENGTH",
        ge=1,
        le=32,
    )

    # Listing and registration
    default_page_size: int = Field(default=50, alias="DEFAULT_PAGE_SIZE", ge=1)
    max_page_size: int = Field(default=1000, alias="MAX_PAGE_SIZE", ge=1)
    register_max_attempts: int = Field(default=3, alias="REGISTER_MAX_ATTEMPTS", ge=1)
    content_hash_algorithm: Literal["sha256", "blake3"] = Field(
        default="sha256",
        alias="CONTENT_HASH_ALGORITHM",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def check_page_sizes(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")
        return self

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


settings = Settings()  # type: ignore[call-arg]
