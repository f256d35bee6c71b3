"""
CLI Client Module.

Typer commands for scripted folder and note management against a running
backend. The CLI is a thin presentation layer: every command goes through
NotesAPIClient over HTTP with X-Frontend-ID: cli.

Usage:
    python notes_cli.py --help
    python notes_cli.py folders list
    python notes_cli.py notes create <folder-id> --title "Plan"
"""
