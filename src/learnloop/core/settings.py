"""Application settings and configuration.

This module defines all configuration options for the LearnLoop API.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="LearnLoop API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./learnloop.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Community moderation
    report_auto_hide_threshold: int = Field(default=5, alias="REPORT_AUTO_HIDE_THRESHOLD")
    reports_per_hour: int = Field(default=10, alias="REPORTS_PER_HOUR")
    admin_reports_page_size: int = Field(default=50, alias="ADMIN_REPORTS_PAGE_SIZE")
    admin_reports_max_page_size: int = Field(default=100, alias="ADMIN_REPORTS_MAX_PAGE_SIZE")

    # Discovery feeds
    feed_default_limit: int = Field(default=20, alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=100, alias="FEED_MAX_LIMIT")

    # Rate limiting backend; redis is required when running more than one instance
    rate_limit_backend: Literal["memory", "redis"] = Field(
        default="memory",
        alias="RATE_LIMIT_BACKEND",
    )
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")

    # Outbound email
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    email_from: str = Field(default="LearnLoop <no-reply@learnloop.local>", alias="EMAIL_FROM")
    contact_email_to: str | None = Field(default=None, alias="CONTACT_EMAIL_TO")
    verification_token_hours: int = Field(default=24, alias="VERIFICATION_TOKEN_HOURS")

    # System accounts created at startup
    system_user_email: str | None = Field(default=None, alias="SYSTEM_USER_EMAIL")
    system_user_password: str | None = Field(default=None, alias="SYSTEM_USER_PASSWORD")
    bot_user_email: str | None = Field(default=None, alias="BOT_USER_EMAIL")
    bot_user_password: str | None = Field(default=None, alias="BOT_USER_PASSWORD")

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
    def smtp_configured(self) -> bool:
        """Return True when outbound SMTP delivery is possible."""
        return bool(self.smtp_host)


settings = Settings()  # type: ignore[call-arg]
