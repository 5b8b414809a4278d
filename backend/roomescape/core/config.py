"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DEV_ORIGIN = "http://localhost:5173"


class Settings(BaseSettings):
    """Typed application configuration.

    Every field reads from the upper-case environment variable named by its
    alias, falling back to ``.env`` at the repository root.
    """

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Room Escape Reservation API"
    api_v1_prefix: str = "/api/v1"

    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    secret_key: str = Field(..., alias="SECRET_KEY")
    jwt_secret_key: str = Field(default="", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, ge=1, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Wall-clock zone that time slot start times are expressed in.
    reservation_timezone: str = Field("UTC", alias="RESERVATION_TIMEZONE")

    default_admin_email: str | None = Field(default=None, alias="DEFAULT_ADMIN_EMAIL")
    default_admin_password: str | None = Field(
        default=None, alias="DEFAULT_ADMIN_PASSWORD"
    )
    default_admin_name: str = Field("Admin", alias="DEFAULT_ADMIN_NAME")

    cors_allowlist: Annotated[list[str], NoDecode] = Field(
        default_factory=list, alias="CORS_ALLOWLIST"
    )
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [_DEV_ORIGIN], alias="CORS_ALLOW_ORIGINS"
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_login: str = Field("10/minute", alias="RATE_LIMIT_LOGIN")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    def model_post_init(self, __context: Any) -> None:
        if not self.jwt_secret_key:
            object.__setattr__(self, "jwt_secret_key", self.secret_key)

    @field_validator("cors_allow_origins", "cors_allowlist", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("reservation_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @property
    def reservation_tz(self) -> ZoneInfo:
        return ZoneInfo(self.reservation_timezone)

    @property
    def allowed_origins(self) -> list[str]:
        """The explicit allowlist when set, otherwise the general CORS origins."""
        return [o for o in self.cors_allowlist if o] or [
            o for o in self.cors_allow_origins if o
        ]


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
