from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from src.db.config.Settings, which focuses on the database layer.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Balloon Studio API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Backend API for a balloon-decor design studio. Stores designs, estimates "
            "balloon material requirements and tracks inventory, production, supplier "
            "orders, payments and client intake."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Startup behavior
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(
        default=True,
        description="If true, run Alembic migrations (upgrade head) at app startup.",
    )
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, seed the admin user, inventory grid and accessories after migrations.",
    )
    SEED_ADMIN_USERNAME: str = Field(default="admin")
    SEED_ADMIN_EMAIL: str = Field(default="admin@example.com")
    SEED_ADMIN_PASSWORD: str = Field(default="admin123")

    # Auth
    JWT_SECRET_KEY: str = Field(default="change-me-in-production")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)
    REFRESH_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Inventory
    DEFAULT_INVENTORY_THRESHOLD: int = Field(default=20, ge=0)

    # CRM integration
    CRM_PROVIDER: Optional[str] = Field(
        default=None, description="'gohighlevel' or 'square'; unset disables CRM sync."
    )
    GHL_API_KEY: Optional[str] = Field(default=None)
    GHL_LOCATION_ID: Optional[str] = Field(default=None)
    SQUARE_ACCESS_TOKEN: Optional[str] = Field(default=None)
    SQUARE_ENVIRONMENT: str = Field(default="sandbox")
    CRM_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]

    @field_validator("CRM_PROVIDER", mode="before")
    @classmethod
    def _normalize_crm_provider(cls, v):
        if v is None:
            return None
        v = str(v).strip().lower()
        return v or None


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is built on each call so tests can change the environment.
    """
    return AppSettings()
