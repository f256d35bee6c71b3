"""
Configuration Schemas.

One strict Pydantic model per file in config/settings/. A typo'd key, a
missing key or a value of the wrong type fails at startup with the file
name in the message.

    application.yaml  → ApplicationSchema
    database.yaml     → DatabaseSchema
    logging.yaml      → LoggingSchema
    features.yaml     → FeaturesSchema
    editor.yaml       → EditorSchema
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _StrictBase(BaseModel):
    """Unknown keys are errors."""

    model_config = ConfigDict(extra="forbid")


# ---- application.yaml ------------------------------------------------------


class ServerSchema(_StrictBase):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    """Seconds. `database` bounds the readiness probe, `client` every front end request."""

    database: float = Field(gt=0)
    client: float = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str = Field(pattern=r"^/")
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema


# ---- database.yaml ---------------------------------------------------------


class DatabaseSchema(_StrictBase):
    url: str
    echo: bool
    create_tables_on_startup: bool


# ---- logging.yaml ----------------------------------------------------------


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: LogLevel
    format: Literal["json", "console"]
    quiet_loggers: list[str] = []
    handlers: HandlersSchema


# ---- features.yaml ---------------------------------------------------------


class FeaturesSchema(_StrictBase):
    api_detailed_errors: bool
    api_request_logging: bool


# ---- editor.yaml -----------------------------------------------------------


class EditorSchema(_StrictBase):
    """Autosave timing of the note editor, in seconds."""

    debounce_seconds: float = Field(gt=0)
    saved_display_seconds: float = Field(ge=0)
    retry_on_error: bool
    retry_delay_seconds: float = Field(gt=0)
    default_note_title: str = Field(min_length=1)
