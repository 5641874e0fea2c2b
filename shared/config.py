"""
Shared configuration management for the User Profile Access Layer.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROFILES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="local", description="Deployment environment name")
    log_level: str = Field(default="info", description="Root log level")

    # Security
    jwt_issuer: str = Field(default="https://auth.local/", description="Expected token issuer")
    jwt_audience: str = Field(default="user-service", description="Expected token audience")
    jwt_public_key_path: str = Field(default="public.key", description="PEM encoded public key file")
    jwt_algorithms: List[str] = Field(default_factory=lambda: ["RS256"])
    jwt_clock_skew_seconds: int = Field(default=300, ge=0)

    # Search
    search_default_page_size: int = Field(default=10, ge=1)
    search_max_page_size: int = Field(default=100, ge=1)

    # Demo data
    demo_pool_size: int = Field(default=50, ge=0)
    demo_max_profiles: int = Field(default=100, ge=0)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
