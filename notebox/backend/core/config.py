"""
Configuration Management.

Loads optional overrides from config/.env (or NOTEBOX_* environment
variables) and settings from config/settings/*.yaml.

Overrides (.env / environment):
    NOTEBOX_STORAGE_BACKEND, NOTEBOX_STORAGE_URL

Settings (YAML):
    application.yaml - App identity
    storage.yaml     - Key-value store backend, URL and collection key
    logging.yaml     - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notebox.backend.core.config_schema import (
    ApplicationSchema,
    LoggingSchema,
    StorageSchema,
)

SQLITE_URL_PREFIX = "sqlite:///"


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides loaded from config/.env or NOTEBOX_* variables."""

    storage_backend: str | None = None
    storage_url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTEBOX_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._storage = _load_validated(StorageSchema, "storage.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def storage(self) -> StorageSchema:
        """Key-value store settings."""
        return self._storage

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_storage_backend() -> str:
    """Get the configured store backend, honouring NOTEBOX_STORAGE_BACKEND."""
    return get_settings().storage_backend or get_app_config().storage.backend


def get_storage_url() -> str:
    """
    Construct the store URL from YAML config and overrides.

    Relative SQLite paths are resolved against the project root so the
    database location does not depend on the working directory.

    Returns:
        SQLAlchemy database URL string.
    """
    url = get_settings().storage_url or get_app_config().storage.url

    if url.startswith(SQLITE_URL_PREFIX):
        path = url[len(SQLITE_URL_PREFIX):]
        if path and path != ":memory:" and not Path(path).is_absolute():
            return f"{SQLITE_URL_PREFIX}{find_project_root() / path}"
    return url
