# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the CourseGit
backend. Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational store configuration.

    The database stores users and their provider links, courses, groups
    and the repository records written by group provisioning.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        url: Full connection URL (computed from components).
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "coursegit"
    password: SecretStr = SecretStr("coursegit_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "coursegit"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def sync_url(self) -> str:
        """Build the sync database URL for migrations."""
        pwd = self.password.get_secret_value()
        return f"postgresql://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class SCMSettings(BaseSettings):
    """Code-hosting provider configuration.

    Attributes:
        github_api_url: Base URL of the GitHub REST API.
        request_timeout: Upper bound in seconds for every provider call.
        per_page: Page size used when listing repositories.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCM_",
        extra="ignore",
    )

    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    per_page: int = 100

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Reject non-positive timeouts."""
        if value <= 0:
            raise ValueError("request_timeout must be positive")
        return value


class GroupSettings(BaseSettings):
    """Group approval configuration.

    Attributes:
        privileged_status_threshold: Highest group status value a privileged
            caller may request. Groups already at or above it are reserved.
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUP_",
        extra="ignore",
    )

    privileged_status_threshold: int = 3


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        title: OpenAPI title.
        prefix: Mount prefix for versioned routes.
        cors_origins: Allowed CORS origins.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    title: str = "CourseGit API"
    prefix: str = "/api/v1"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: Relational store settings.
        scm: Code-hosting provider settings.
        groups: Group approval settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    scm: SCMSettings = Field(default_factory=SCMSettings)
    groups: GroupSettings = Field(default_factory=GroupSettings)
    api: APISettings = Field(default_factory=APISettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
