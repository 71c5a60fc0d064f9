from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STRICT_CSP = "default-src 'self'; frame-ancestors 'none'"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Code Pipeline API"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False
    enable_openapi: bool = True
    csp_production: str = STRICT_CSP  # Sent when the docs UI is off

    database_url: str
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_echo: bool = False
    database_auto_migrate: bool = False

    shutdown_grace_period: float = Field(default=30, ge=0)

    # Tokens come from the identity provider; HS* takes a secret, RS*/ES* a PEM public key
    jwt_algorithm: str = "HS256"
    jwt_secret_key: str
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    jwt_username_claim: str = "preferred_username"

    message_page_size: int = Field(default=20, ge=1)
    message_max_page_size: int = Field(default=100, ge=1)

    cors_origins: list[str] = ["http://localhost:3000"]

    metrics_api_key: str | None = None

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str, info: ValidationInfo) -> str:
        if info.data.get("jwt_algorithm", "HS256").startswith("HS") and len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters for HMAC algorithms")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Credentials are allowed, so origins must be explicit."""
        if "*" in v:
            raise ValueError("CORS_ORIGINS may not contain '*'; list the allowed origins")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
