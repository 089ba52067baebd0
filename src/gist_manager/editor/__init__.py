"""
Editor package for Gist Manager.

Provides the in-process text views the commands read from and open gists
into, and the extension to language lookup.
"""

from .languages import EXTENSION_LANGUAGES, language_for
from .workspace import LineSelection, TextView, Workspace, file_name_of

__all__ = [
    "EXTENSION_LANGUAGES",
    "language_for",
    "LineSelection",
    "TextView",
    "Workspace",
    "file_name_of",
]
