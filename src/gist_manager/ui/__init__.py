"""
UI package for Gist Manager.

Defines the host primitives the commands prompt and present through, and
their rich-based terminal implementation.
"""

from .host import HostUI, QuickPickItem, InputValidator
from .console import ConsoleHostUI

__all__ = ["HostUI", "QuickPickItem", "InputValidator", "ConsoleHostUI"]
