"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
        env_prefix="",
    )

    # ===== Token Configuration =====
    jwt_secret: str | None = Field(
        default=None,
        alias="JWT_SECRET",
        description="HMAC secret used to sign and verify bearer tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="Signing algorithm for bearer tokens",
    )

    access_token_expire_minutes: int = Field(
        default=60,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of an issued bearer token in minutes",
    )

    # ===== Database Configuration =====
    database_url: str = Field(
        default="sqlite+aiosqlite:///./database.db",
        alias="DATABASE_URL",
        description="SQLAlchemy async database URL",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=3000, alias="SERVER_PORT", description="Server port number"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=False,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Normalize the database URL and warn about missing secrets."""
        if self.database_url.startswith("postgresql://"):
            self.database_url = self.database_url.replace(
                "postgresql://", "postgresql+asyncpg://", 1
            )

        if not self.jwt_secret:
            logger.warning(
                "JWT_SECRET environment variable not set. The API will refuse to start."
            )

        logger.debug(f"Token lifetime: {self.access_token_expire_minutes} minutes")
        return self


# Global settings instance
settings = Settings()
