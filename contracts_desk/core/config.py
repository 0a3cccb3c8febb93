"""Configuration module for the contracts application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from contracts_desk.core.exceptions import ConfigurationError

load_dotenv()

KNOWN_ENVS = {"development", "test", "production"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _default_locator_config() -> Path:
    return Path.home() / ".local" / "share" / "Contracts" / "config.txt"


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_PATH: str | None
    BASE_DIR: str
    LOCATOR_CONFIG_PATH: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def database_candidates(self) -> tuple[Path, Path]:
        """Default database locations checked after the saved one."""
        base = Path(self.BASE_DIR)
        return base / "contracts.db", base / "Data" / "contracts.db"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="Contracts",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_PATH=os.getenv("CONTRACTS_DB_PATH") or None,
        BASE_DIR=os.getenv("CONTRACTS_BASE_DIR", os.getcwd()),
        LOCATOR_CONFIG_PATH=os.getenv("CONTRACTS_LOCATOR_CONFIG", str(_default_locator_config())),
        SQL_ECHO=_as_bool(os.getenv("SQL_ECHO")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_config(config: Config) -> None:
    if config.ENV not in KNOWN_ENVS:
        raise ConfigurationError("ENV must be one of development/test/production.")
    if config.LOG_LEVEL not in LOG_LEVELS:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if not config.LOCATOR_CONFIG_PATH.strip():
        raise ConfigurationError("CONTRACTS_LOCATOR_CONFIG must not be empty.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
