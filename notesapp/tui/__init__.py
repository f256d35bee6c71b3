"""Textual terminal front end."""
