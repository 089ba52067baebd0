"""
CLI interface package for Gist Manager.

This package contains the Typer application and the interactive shell
that hosts the gist commands.
"""

__all__ = ["app", "shell"]
