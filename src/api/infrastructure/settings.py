"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IsolationSettings(BaseSettings):
    """Isolation context settings.

    Environment variables:
        ISOLATION_TENANT_HEADER: Header carrying the tenant id (default: X-Tenant-Id)
        ISOLATION_ORGANIZATION_HEADER: Header carrying the organization id (default: X-Organization-Id)
        ISOLATION_DEPARTMENT_HEADER: Header carrying the department id (default: X-Department-Id)
        ISOLATION_USER_HEADER: Header carrying the user id (default: X-User-Id)
        ISOLATION_REQUEST_ID_HEADER: Header carrying the request id attached to
            probe events (default: X-Request-Id)
        ISOLATION_INTERN_IDENTIFIERS: Share one instance per identifier value (default: true)
        ISOLATION_WHERE_CLAUSE_INCLUDES_USER: Scope storage filters by user_id
            for user-level contexts (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="ISOLATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tenant_header: str = Field(
        default="X-Tenant-Id",
        description="Request header carrying the tenant id",
    )
    organization_header: str = Field(
        default="X-Organization-Id",
        description="Request header carrying the organization id",
    )
    department_header: str = Field(
        default="X-Department-Id",
        description="Request header carrying the department id",
    )
    user_header: str = Field(
        default="X-User-Id",
        description="Request header carrying the user id",
    )
    request_id_header: str = Field(
        default="X-Request-Id",
        description="Request header carrying the request id",
    )
    intern_identifiers: bool = Field(
        default=True,
        description="Intern identifier value objects per value",
    )
    where_clause_includes_user: bool = Field(
        default=False,
        description="Add user_id to storage filters for user-level contexts",
    )

    @field_validator(
        "tenant_header",
        "organization_header",
        "department_header",
        "user_header",
        "request_id_header",
    )
    @classmethod
    def validate_header_name(cls, value: str) -> str:
        """Reject blank header names."""
        value = value.strip()
        if not value:
            raise ValueError("header name must not be empty")
        return value


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="Hierarchy Isolation API", description="Application name"
    )
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_isolation_settings() -> IsolationSettings:
    """Get cached isolation settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return IsolationSettings()
