"""
Gist Manager - list, open, create, update and delete GitHub gists.

This package provides a small GitHub Gist API client together with the
interactive commands that drive it from a terminal host.
"""

__version__ = "0.1.0"
__author__ = "Gist Manager Team"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "gist-manager"
USER_AGENT: Final[str] = f"{PACKAGE_NAME}/{VERSION}"

# Re-export commonly used items
__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "USER_AGENT",
]
