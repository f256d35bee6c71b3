#!/usr/bin/env python3
"""
Folder Notes Service CLI.

Entry point for running and inspecting the application.
Use --service to select what to run, --action to control the server lifecycle.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service server --action stop
    python cli.py --service tui
    python cli.py --service init-db
    python cli.py --service health --debug
    python cli.py --service config
    python cli.py --service test --test-type unit
"""

import asyncio
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notesapp.backend.core.logging import get_logger, setup_logging

SERVICES = ["server", "tui", "init-db", "health", "config", "test", "info"]


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _find_process_on_port(port: int) -> list[int]:
    """Find PIDs listening on a port."""
    result = subprocess.run(
        ["lsof", "-ti", f":{port}"],
        capture_output=True, text=True,
    )
    return [int(p) for p in result.stdout.split() if p.strip()]


def _server_port(port: int | None) -> int:
    if port is not None:
        return port
    from notesapp.backend.core.config import get_app_config
    return get_app_config().application.server.port


def stop_server(logger, port: int) -> None:
    """Stop the server listening on a port."""
    pids = _find_process_on_port(port)
    if not pids:
        click.echo(f"No server running on port {port}.")
        return

    for pid in pids:
        os.kill(pid, signal.SIGINT)
        logger.info("Sent SIGINT", extra={"pid": pid, "port": port})

    click.echo(f"Server on port {port} stopped (PID: {', '.join(str(p) for p in pids)}).")


def server_status(port: int) -> None:
    """Report whether the server is listening on a port."""
    pids = _find_process_on_port(port)
    if pids:
        click.echo(f"Server is running on port {port} (PID: {', '.join(str(p) for p in pids)}).")
    else:
        click.echo(f"Server is not running on port {port}.")


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(SERVICES),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--action", "-a",
    type=click.Choice(["start", "stop", "restart", "status"]),
    default="start",
    help="Lifecycle action for the server.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host.")
@click.option("--port", default=None, type=int, help="Server port.")
@click.option("--reload", is_flag=True, help="Enable auto-reload (server only).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run.",
)
@click.option("--coverage", is_flag=True, help="Run tests with coverage.")
def main(
    service: str,
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Folder Notes service CLI.

    \b
    Examples:
        python cli.py --service server --reload --verbose
        python cli.py --service server --action status
        python cli.py --service tui
        python cli.py --service init-db
        python cli.py --service health
        python cli.py --service test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    # the TUI owns the terminal, so it logs to file only
    setup_logging(level=log_level, format_type="console", enable_console=service != "tui")
    structlog.contextvars.bind_contextvars(source="cli")
    logger = get_logger(__name__)
    logger.debug("CLI invoked", extra={"service": service, "action": action, "log_level": log_level})

    if service == "server" and action != "start":
        service_port = _server_port(port)
        if action == "status":
            server_status(service_port)
            return
        stop_server(logger, service_port)
        if action == "stop":
            return
        time.sleep(2)

    if service == "server":
        run_server(logger, host, port, reload)
    elif service == "tui":
        run_tui(logger)
    elif service == "init-db":
        init_database(logger)
    elif service == "health":
        check_health(logger)
    elif service == "config":
        show_config(logger)
    elif service == "test":
        run_tests(logger, test_type, coverage)
    elif service == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server under uvicorn."""
    from notesapp.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except Exception as e:
        logger.error("Failed to load configuration.", extra={"error": str(e)})
        click.echo(
            click.style("Error: Could not load config/settings/application.yaml.", fg="red"),
            err=True,
        )
        sys.exit(1)

    server_host = host or server_config.host
    server_port = port or server_config.port

    logger.info("Starting server", extra={"host": server_host, "port": server_port, "reload": reload})

    cmd = [
        sys.executable, "-m", "uvicorn",
        "notesapp.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]
    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def run_tui(logger) -> None:
    """Start the terminal UI against a running server."""
    from notesapp.tui.app import NotesTUI

    logger.info("Starting TUI")
    NotesTUI().run()


def init_database(logger) -> None:
    """Create the folders and notes tables if they do not exist."""
    from notesapp.backend.core.config import get_database_url
    from notesapp.backend.core.database import dispose_engine, init_db

    async def _init() -> None:
        try:
            await init_db()
        finally:
            await dispose_engine()

    try:
        asyncio.run(_init())
    except Exception as e:
        logger.error("Database initialization failed", extra={"error": str(e)})
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    url = get_database_url()
    click.echo(click.style(f"Database ready: {url}", fg="green"))


def check_health(logger) -> None:
    """Check application health by testing imports, configuration and the database."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from notesapp.backend.core.config import get_app_config, get_database_url
        app_config = get_app_config()
        checks.append(("YAML configuration", True, f"App: {app_config.application.name}"))
    except Exception as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", extra={"error": str(e)})

    try:
        from notesapp.backend.main import get_app
        app = get_app()
        checks.append(("FastAPI application", True, f"Title: {app.title}"))
    except Exception as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", extra={"error": str(e)})

    try:
        from notesapp.backend.models import Base
        checks.append(("Database models", True, ", ".join(sorted(Base.metadata.tables))))
    except Exception as e:
        checks.append(("Database models", False, str(e)))
        logger.error("Database models failed", extra={"error": str(e)})

    try:
        from notesapp.backend.api.health import check_database
        from notesapp.backend.core.database import dispose_engine

        async def _check() -> dict:
            try:
                return await check_database()
            finally:
                await dispose_engine()

        result = asyncio.run(_check())
        checks.append(("Database connection", result["status"] == "healthy", get_database_url()))
    except Exception as e:
        checks.append(("Database connection", False, str(e)))
        logger.error("Database check failed", extra={"error": str(e)})

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        all_passed = all_passed and passed

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        sys.exit(1)


def _echo_section(title: str, values: dict, indent: int = 2) -> None:
    if title:
        click.echo(f"\n{title}:")
        click.echo("-" * 40)
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_section("", value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:")

    try:
        from notesapp.backend.core.config import get_app_config, get_database_url

        app_config = get_app_config()
        _echo_section("Application (application.yaml)", app_config.application.model_dump())
        _echo_section("Database (database.yaml)", app_config.database.model_dump())
        click.echo(f"  effective url: {get_database_url()}")
        _echo_section("Logging (logging.yaml)", app_config.logging.model_dump())
        _echo_section("Feature Flags (features.yaml)", app_config.features.model_dump())
        _echo_section("Editor (editor.yaml)", app_config.editor.model_dump())

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]
    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")
    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=notesapp", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd, cwd=PROJECT_ROOT)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    try:
        from notesapp.backend.core.config import get_app_config
        app = get_app_config().application
    except Exception as e:
        logger.error("Failed to load application configuration", extra={"error": str(e)})
        click.echo(
            click.style("Error: Could not load application.yaml configuration.", fg="red"),
            err=True,
        )
        sys.exit(1)

    click.echo(app.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app.version}")
    click.echo(f"Description: {app.description}")
    click.echo()
    click.echo("Services (--service):")
    click.echo("  server     FastAPI server (folders and notes API)")
    click.echo("  tui        Terminal UI (needs a running server)")
    click.echo("  init-db    Create database tables")
    click.echo("  health     Check application health")
    click.echo("  config     Display configuration")
    click.echo("  test       Run test suite")
    click.echo("  info       Show this information")
    click.echo()
    click.echo("Server actions (--action): start, stop, restart, status")
    click.echo()
    click.echo("Data commands: python notes_cli.py --help")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
