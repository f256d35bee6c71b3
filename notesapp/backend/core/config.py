"""
Configuration Management.

Loads overrides from config/.env and settings from config/settings/*.yaml.
No hardcoded values in code; all configuration comes from these sources.

Overrides (.env, prefix NOTESAPP_):
    DATABASE_URL, API_BASE_URL

Settings (YAML):
    application.yaml   - App identity, server, cors, api prefix, timeouts
    database.yaml      - Database URL and table bootstrap
    logging.yaml       - Logging configuration
    features.yaml      - Feature flags
    editor.yaml        - Note editor autosave timing
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notesapp.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    EditorSchema,
    FeaturesSchema,
    LoggingSchema,
)


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
    """Environment overrides loaded from config/.env. Every field is optional."""

    database_url: str | None = None
    api_base_url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTESAPP_",
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

    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._editor = _load_validated(EditorSchema, "editor.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features

    @property
    def editor(self) -> EditorSchema:
        """Note editor autosave settings."""
        return self._editor


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Resolve the database URL.

    NOTESAPP_DATABASE_URL wins over database.yaml. Relative SQLite paths
    are anchored at the project root so the server and the CLI agree on
    the same file regardless of the working directory.

    Returns:
        SQLAlchemy async database URL.
    """
    url = get_settings().database_url or get_app_config().database.url
    prefix = "sqlite+aiosqlite:///"
    if url.startswith(prefix) and not url.endswith(":memory:"):
        db_path = Path(url[len(prefix):])
        if not db_path.is_absolute():
            db_path = find_project_root() / db_path
            url = f"{prefix}{db_path}"
    return url


def get_server_base_url() -> tuple[str, float]:
    """
    Get the backend server base URL and timeout from application.yaml.

    NOTESAPP_API_BASE_URL overrides the host/port pair.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    app = get_app_config().application
    server = app.server
    base_url = get_settings().api_base_url or f"http://{server.host}:{server.port}"
    timeout = app.timeouts.client
    return base_url, timeout
