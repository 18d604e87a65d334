# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)

_INSECURE_SECRETS = ("dev", "development", "test", "")


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///messagely.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG

    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SecurityConfig(BaseSettings):
    # Token signing
    secret_key: str = Field("dev", alias="SECRET_KEY")
    token_algorithm: str = Field("HS256", alias="TOKEN_ALGORITHM")
    token_ttl_seconds: int | None = Field(86400, ge=0, alias="TOKEN_TTL_SECONDS")

    # Password hashing
    password_hash_method: str = Field("pbkdf2:sha256", alias="PASSWORD_HASH_METHOD")
    password_hash_iterations: int = Field(600_000, ge=1, alias="PASSWORD_HASH_ITERATIONS")

    # Report denied message access as "not found"
    conceal_denied: bool = Field(False, alias="SECURITY_CONCEAL_DENIED")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("token_ttl_seconds", mode="before")
    @classmethod
    def _parse_ttl(cls, value: str | int | None) -> int | None:
        if value in (None, "", 0, "0"):
            return None
        return int(value)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("conceal_denied", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @property
    def password_hash_spec(self) -> str:
        """Method string understood by ``werkzeug.security``."""

        if self.password_hash_method.startswith("pbkdf2"):
            return f"{self.password_hash_method}:{self.password_hash_iterations}"
        return self.password_hash_method


class LoggingConfig(BaseSettings):
    level: str = Field("INFO", alias="LOG_LEVEL")
    file: Path | None = Field(None, alias="LOG_FILE")
    debug: bool = Field(False, alias="DEBUG_LOGGING")

    model_config = _SECTION_CONFIG

    @field_validator("debug", mode="before")
    @classmethod
    def _parse_debug(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _logging_config_factory() -> LoggingConfig:
    return LoggingConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    logging: LoggingConfig = Field(default_factory=_logging_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        security = self.security
        if security.secret_key in _INSECURE_SECRETS:
            sys.exit(
                "FATAL: SECRET_KEY is unset or a development placeholder while APP_ENV=production. "
                "It signs every session token; set it to a long random value."
            )

        advisories = [
            message
            for failed, message in (
                ("*" in security.allowed_origins, "ALLOWED_ORIGINS contains \"*\""),
                (not security.enable_hsts, "ENABLE_HSTS is off"),
                (security.token_ttl_seconds is None, "session tokens never expire"),
            )
            if failed
        ]
        for advisory in advisories:
            print(f"[messagely] production warning: {advisory}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "DatabaseConfig", "LoggingConfig", "SecurityConfig", "load_config"]
