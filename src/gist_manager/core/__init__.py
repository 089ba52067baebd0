"""
Core package for Gist Manager.

Contains the GitHub Gist API client, its models, token acquisition and
the error hierarchy shared with the commands.
"""

from .auth import (
    GIST_SCOPE,
    TokenProvider,
    StaticTokenProvider,
    GhCliTokenProvider,
    InteractiveTokenProvider,
    SessionTokenProvider,
)
from .client import GistClient, build_files_payload
from .errors import (
    GistError,
    GistApiError,
    NetworkError,
    AuthenticationError,
    GistValidationError,
    ConfigurationError,
)
from .models import Gist, GistFile

__all__ = [
    "GIST_SCOPE",
    "TokenProvider",
    "StaticTokenProvider",
    "GhCliTokenProvider",
    "InteractiveTokenProvider",
    "SessionTokenProvider",
    "GistClient",
    "build_files_payload",
    "GistError",
    "GistApiError",
    "NetworkError",
    "AuthenticationError",
    "GistValidationError",
    "ConfigurationError",
    "Gist",
    "GistFile",
]
