"""Application settings.

All values are loaded from environment variables (or a local ``.env`` file)
through pydantic-settings.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quotaguard.core.config.enums import Environment, LogFormat


class Settings(BaseSettings):
    """Settings for the quotaguard backend.

    Attributes:
    ----------
        PROJECT_NAME: Name shown in the OpenAPI docs.
        ENVIRONMENT: Deployment environment.
        POSTGRES_*: Connection fields for the usage/catalog database.
        AUTH_ENABLED: When false, every request runs as ``LOCAL_ACCOUNT_ID``.
        AUTH_SERVER_URL: Base URL of the identity provider (``/auth/v1/user``).
        BILLING_TIMEZONE: The single timezone used to compute billing periods.
        CAPPED_OPERATIONS: Operation kinds whose admission is limited by the tier allowance.
        SUBSCRIPTION_REQUIRED_OPERATIONS: Operation kinds refused without an active or
            trial subscription.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "quotaguard"
    ENVIRONMENT: Environment = Environment.LOCAL
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.TEXT

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "quotaguard"
    POSTGRES_PASSWORD: str = "quotaguard"
    POSTGRES_DB: str = "quotaguard"
    POSTGRES_SSLMODE: str = "prefer"

    db_pool_size: int = 20
    db_pool_max_overflow: int = 40

    RUN_ALEMBIC_MIGRATIONS: bool = False

    AUTH_ENABLED: bool = False
    AUTH_SERVER_URL: Optional[str] = None
    AUTH_SERVER_API_KEY: Optional[str] = None
    AUTH_TIMEOUT_SECONDS: float = 5.0
    LOCAL_ACCOUNT_ID: str = "local-dev-account"

    BILLING_TIMEZONE: str = "UTC"
    FREE_TRIAL_MONTHLY_ALLOWANCE: int = Field(default=5, ge=0)
    CAPPED_OPERATIONS: List[str] = ["generate"]
    SUBSCRIPTION_REQUIRED_OPERATIONS: List[str] = [
        "generate",
        "magic_edit",
        "upscale",
        "remove_bg",
    ]
    RECENT_ARTIFACTS_LIMIT: int = Field(default=10, gt=0)
    USAGE_HISTORY_LIMIT: int = Field(default=12, gt=0)

    STORAGE_RETRY_ATTEMPTS: int = Field(default=3, ge=1)
    STORAGE_RETRY_WAIT_SECONDS: float = Field(default=0.1, ge=0)

    HEALTH_CHECK_TIMEOUT: float = 5.0

    ADDITIONAL_CORS_ORIGINS: Optional[str] = None

    @field_validator("AUTH_SERVER_URL")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the auth server URL so paths can be appended safely."""
        return v.rstrip("/") if v else v

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:  # noqa: N802
        """Async SQLAlchemy URI built from the POSTGRES_* fields."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )
