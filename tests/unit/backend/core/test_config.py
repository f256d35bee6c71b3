"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Tests run against the real project files (YAML configs, .env).
Failure scenarios use tmp_path to create controlled filesystems.
No mocking: the config loader is the system under test.
"""

import pytest

from notesapp.backend.core.config import (
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_database_url,
    get_server_base_url,
    get_settings,
    load_yaml_config,
    validate_project_root,
)
from notesapp.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    EditorSchema,
    FeaturesSchema,
    LoggingSchema,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


def _write_settings(root, **files: str) -> None:
    (root / ".project_root").touch()
    settings_dir = root / "config" / "settings"
    settings_dir.mkdir(parents=True)
    for name, text in files.items():
        (settings_dir / f"{name}.yaml").write_text(text)


# =============================================================================
# find_project_root
# =============================================================================


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert root.is_dir()
        assert (root / ".project_root").exists()

    def test_config_directory_exists_at_root(self):
        root = find_project_root()
        assert (root / "config" / "settings").is_dir()

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


class TestValidateProjectRoot:
    """Tests for the SystemExit wrapper around find_project_root."""

    def test_returns_path_when_marker_exists(self):
        root = validate_project_root()
        assert (root / ".project_root").exists()

    def test_exits_when_marker_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            validate_project_root()


# =============================================================================
# load_yaml_config
# =============================================================================


class TestLoadYamlConfig:
    """Tests for YAML file loading from config/settings/."""

    def test_loads_application_yaml_as_dict(self):
        data = load_yaml_config("application.yaml")
        assert isinstance(data, dict)
        assert "name" in data
        assert "api_prefix" in data

    def test_loads_all_config_files(self):
        """Every expected YAML file should be loadable."""
        filenames = [
            "application.yaml",
            "database.yaml",
            "logging.yaml",
            "features.yaml",
            "editor.yaml",
        ]
        for filename in filenames:
            data = load_yaml_config(filename)
            assert isinstance(data, dict), f"{filename} did not return a dict"
            assert len(data) > 0, f"{filename} returned empty dict"

    def test_raises_for_nonexistent_file(self):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_yaml_config("does_not_exist.yaml")

    def test_returns_empty_dict_for_empty_yaml(self, tmp_path, monkeypatch):
        """An empty YAML file should return {} rather than None."""
        _write_settings(tmp_path, empty="")
        monkeypatch.chdir(tmp_path)

        assert load_yaml_config("empty.yaml") == {}


# =============================================================================
# AppConfig (validated YAML)
# =============================================================================


class TestAppConfig:
    """Tests for validated YAML configuration loading."""

    def test_sections_return_typed_schemas(self):
        config = AppConfig()
        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.database, DatabaseSchema)
        assert isinstance(config.logging, LoggingSchema)
        assert isinstance(config.features, FeaturesSchema)
        assert isinstance(config.editor, EditorSchema)

    def test_application_has_attribute_access(self):
        app = AppConfig().application
        assert isinstance(app.name, str)
        assert app.api_prefix.startswith("/")
        assert isinstance(app.server.port, int)
        assert app.timeouts.database > 0

    def test_editor_timing_values(self):
        editor = AppConfig().editor
        assert editor.debounce_seconds > 0
        assert editor.saved_display_seconds >= 0
        assert editor.default_note_title == "Untitled Note"

    def test_rejects_yaml_with_missing_required_fields(self, tmp_path, monkeypatch):
        """A YAML file missing required fields should fail Pydantic validation."""
        _write_settings(
            tmp_path,
            application="name: 'Incomplete'",
            database="echo: false",
            logging="level: INFO",
            features="api_detailed_errors: true",
            editor="debounce_seconds: 1.2",
        )
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="Invalid configuration"):
            AppConfig()

    def test_rejects_yaml_with_unknown_fields(self):
        """extra='forbid' on schemas should reject unknown YAML keys."""
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("application.yaml")
        data["unknown_field"] = "oops"
        with pytest.raises(PydanticValidationError, match="Extra inputs are not permitted"):
            ApplicationSchema(**data)

    def test_rejects_non_positive_debounce(self):
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("editor.yaml")
        data["debounce_seconds"] = 0
        with pytest.raises(PydanticValidationError):
            EditorSchema(**data)

    def test_rejects_unknown_log_level(self):
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("logging.yaml")
        data["level"] = "VERBOSE"
        with pytest.raises(PydanticValidationError):
            LoggingSchema(**data)

    def test_quiet_loggers_listed(self):
        assert "sqlalchemy.engine" in AppConfig().logging.quiet_loggers


# =============================================================================
# Cached accessors
# =============================================================================


class TestCachedAccessors:
    """Tests for get_settings() and get_app_config()."""

    def test_settings_instance_is_cached(self):
        assert isinstance(get_settings(), Settings)
        assert get_settings() is get_settings()

    def test_app_config_instance_is_cached(self):
        assert isinstance(get_app_config(), AppConfig)
        assert get_app_config() is get_app_config()


# =============================================================================
# URL builders
# =============================================================================


class TestGetDatabaseUrl:
    """Tests for database URL resolution."""

    def test_relative_sqlite_path_is_anchored_at_root(self, monkeypatch):
        monkeypatch.delenv("NOTESAPP_DATABASE_URL", raising=False)
        url = get_database_url()
        root = find_project_root()
        assert url.startswith("sqlite+aiosqlite:///")
        assert str(root) in url

    def test_environment_override_wins(self, monkeypatch):
        monkeypatch.setenv("NOTESAPP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        assert get_database_url() == "sqlite+aiosqlite:///:memory:"


class TestGetServerBaseUrl:
    """Tests for server base URL construction."""

    def test_url_contains_host_and_port(self, monkeypatch):
        monkeypatch.delenv("NOTESAPP_API_BASE_URL", raising=False)
        base_url, _ = get_server_base_url()
        server = get_app_config().application.server
        assert base_url == f"http://{server.host}:{server.port}"

    def test_timeout_is_positive_float(self):
        _, timeout = get_server_base_url()
        assert isinstance(timeout, float)
        assert timeout > 0

    def test_environment_override_wins(self, monkeypatch):
        monkeypatch.setenv("NOTESAPP_API_BASE_URL", "http://notes.local:9000")
        base_url, _ = get_server_base_url()
        assert base_url == "http://notes.local:9000"
