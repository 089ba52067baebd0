"""
GitHub token acquisition.

The client never stores credentials itself; it asks a TokenProvider for a
bearer token scoped to gist management. SessionTokenProvider chains the
available sources and keeps the first token it obtains for the lifetime of
the process.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence, TYPE_CHECKING

from .errors import AuthenticationError

if TYPE_CHECKING:
    from ..ui.host import HostUI

logger = logging.getLogger(__name__)

GIST_SCOPE = "gist"


class TokenProvider(Protocol):
    """Source of GitHub bearer tokens."""

    async def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        """Return a token for the scopes, or None when this source has none."""
        ...


class StaticTokenProvider:
    """Token taken from configuration."""

    def __init__(self, token: Optional[str]):
        self._token = token

    async def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        return self._token or None


class GhCliTokenProvider:
    """Reuses the login of the GitHub CLI (`gh auth token`)."""

    def __init__(self, executable: str = "gh", hostname: Optional[str] = None):
        self.executable = executable
        self.hostname = hostname

    async def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        args = ["auth", "token"]
        if self.hostname:
            args += ["--hostname", self.hostname]

        try:
            process = await asyncio.create_subprocess_exec(
                self.executable, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logger.debug(f"Cannot run {self.executable}; skipping GitHub CLI token: {e}")
            return None

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            logger.debug(f"gh auth token failed: {stderr.decode('utf-8', errors='ignore').strip()}")
            return None

        token = stdout.decode("utf-8", errors="ignore").strip()
        return token or None


class InteractiveTokenProvider:
    """Asks the user for a personal access token."""

    def __init__(self, ui: "HostUI"):
        self.ui = ui

    async def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        token = await self.ui.show_input_box(
            f"GitHub token with the '{', '.join(scopes)}' scope",
            password=True,
            validate=lambda value: None if value.strip() else "A token is required",
        )
        if token is None:
            return None
        return token.strip() or None


class SessionTokenProvider:
    """Chains token sources and caches the first token obtained.

    Args:
        providers: Sources consulted in order
        scopes: Permission scopes requested from every source
    """

    def __init__(self, providers: List[TokenProvider], scopes: Sequence[str] = (GIST_SCOPE,)):
        self.providers = list(providers)
        self.scopes = tuple(scopes)
        self._token: Optional[str] = None

    async def get_token(self, scopes: Optional[Sequence[str]] = None) -> str:
        if self._token:
            return self._token

        requested = tuple(scopes) if scopes else self.scopes
        for provider in self.providers:
            token = await provider.get_token(requested)
            if token:
                logger.debug(f"Obtained GitHub token from {type(provider).__name__}")
                self._token = token
                return token

        raise AuthenticationError(
            "No GitHub token available. Set GIST_MANAGER_TOKEN or GITHUB_TOKEN, "
            "or log in with 'gh auth login'."
        )

    def invalidate(self) -> None:
        """Forget the cached token so the next request asks again."""
        self._token = None
