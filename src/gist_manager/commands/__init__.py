"""
Command package for Gist Manager.

Implements the list-and-open, create, update and delete commands on top of
the API client, the host UI primitives and the workspace.
"""

from .gist_commands import GistCommands
from .selection import CommandOutcome, NO_GISTS_MESSAGE
from .session import GistMetadata, SessionMetadataStore

__all__ = [
    "GistCommands",
    "CommandOutcome",
    "NO_GISTS_MESSAGE",
    "GistMetadata",
    "SessionMetadataStore",
]
