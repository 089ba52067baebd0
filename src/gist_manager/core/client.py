"""
GitHub Gist API client.

Thin async wrapper over the /gists endpoints of the GitHub REST API. Every
request carries the bearer token, the GitHub JSON media type and a pinned
API version. Any non-success response is raised as GistApiError carrying
the status code and the raw body text; nothing is retried.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging

import httpx
from pydantic import ValidationError

from gist_manager import USER_AGENT
from .auth import GIST_SCOPE, TokenProvider
from .errors import AuthenticationError, GistApiError, GistError, NetworkError
from .models import Gist, GistFile

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
GITHUB_MEDIA_TYPE = "application/vnd.github+json"

# Methods that carry a JSON body
BODY_METHODS = frozenset({"POST", "PATCH"})


def build_files_payload(files: Mapping[str, Optional[str]]) -> Dict[str, Optional[Dict[str, str]]]:
    """Map filename -> content into the wire shape filename -> {"content": ...}.

    A None content becomes JSON null, which deletes the file on update.
    """
    return {
        name: None if content is None else {"content": content}
        for name, content in files.items()
    }


class GistClient:
    """Async client for the GitHub Gist API.

    Args:
        token_provider: Source of the bearer token
        base_url: API root, without trailing slash
        api_version: Value of the X-GitHub-Api-Version header
        timeout: Request timeout in seconds; None keeps the httpx default
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        base_url: str = DEFAULT_API_BASE,
        api_version: str = DEFAULT_API_VERSION,
        timeout: Optional[float] = None,
        scope: str = GIST_SCOPE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token_provider = token_provider
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.scope = scope
        self._timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "GistClient":
        self._ensure_http()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _ensure_http(self) -> httpx.AsyncClient:
        if self._http is None:
            kwargs: Dict[str, Any] = {"transport": self._transport}
            if self._timeout is not None:
                kwargs["timeout"] = httpx.Timeout(self._timeout)
            self._http = httpx.AsyncClient(**kwargs)
        return self._http

    async def ensure_token(self) -> str:
        """Obtain the bearer token. Call before a progress display starts."""
        token = await self.token_provider.get_token([self.scope])
        if not token:
            raise AuthenticationError()
        return token

    async def _headers(self) -> Dict[str, str]:
        token = await self.ensure_token()
        return {
            "Authorization": f"Bearer {token}",
            "Accept": GITHUB_MEDIA_TYPE,
            "Content-Type": "application/json",
            "X-GitHub-Api-Version": self.api_version,
            "User-Agent": USER_AGENT,
        }

    async def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """Send one request and decode its JSON body.

        Returns:
            Decoded JSON, or None for 204 No Content

        Raises:
            GistApiError: On a non-success status or an undecodable body
            NetworkError: When no response was received
        """
        headers = await self._headers()
        http = self._ensure_http()
        url = f"{self.base_url}{path}"

        try:
            response = await http.request(
                method,
                url,
                headers=headers,
                json=body if method in BODY_METHODS else None,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request to {url} failed: {e}", original_error=e) from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if not response.is_success:
            raise GistApiError(response.status_code, response.text)

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise GistApiError(response.status_code, f"Invalid JSON response: {e}") from e

    @staticmethod
    def _decode(data: Any) -> Gist:
        try:
            return Gist.model_validate(data)
        except ValidationError as e:
            raise GistError(f"Unexpected gist payload from GitHub: {e}", code="DECODE_ERROR") from e

    async def list_gists(self) -> List[Gist]:
        """List the authenticated user's gists in server order."""
        data = await self._request("GET", "/gists")
        if not isinstance(data, list):
            raise GistError("Unexpected gist list payload from GitHub", code="DECODE_ERROR")
        return [self._decode(item) for item in data]

    async def get_gist(self, gist_id: str) -> Gist:
        data = await self._request("GET", f"/gists/{gist_id}")
        return self._decode(data)

    async def create_gist(
        self,
        description: str,
        files: Mapping[str, str],
        is_public: bool,
    ) -> Gist:
        """Create a gist.

        Args:
            description: Gist description, may be empty
            files: Filename -> content, at least one entry
            is_public: Public when True, secret otherwise

        Returns:
            The created gist, including its id and html_url
        """
        if not files:
            raise GistError("A gist needs at least one file")

        data = await self._request("POST", "/gists", {
            "description": description,
            "public": is_public,
            "files": build_files_payload(files),
        })
        gist = self._decode(data)
        logger.info(f"Created gist {gist.id}")
        return gist

    async def update_gist(
        self,
        gist_id: str,
        description: str,
        files: Mapping[str, Optional[str]],
    ) -> Gist:
        """Replace the content of the given files; other files are untouched.

        A None content deletes that file.
        """
        data = await self._request("PATCH", f"/gists/{gist_id}", {
            "description": description,
            "files": build_files_payload(files),
        })
        logger.info(f"Updated gist {gist_id}: {', '.join(files)}")
        return self._decode(data)

    async def delete_gist(self, gist_id: str) -> None:
        await self._request("DELETE", f"/gists/{gist_id}")
        logger.info(f"Deleted gist {gist_id}")

    async def get_file_content(self, gist_file: GistFile) -> str:
        """Full text of a file, fetching raw_url when the API left it out."""
        if not gist_file.needs_raw_fetch:
            return gist_file.content or ""

        if not gist_file.raw_url:
            raise GistError(f"File '{gist_file.filename}' has no content and no raw_url")

        http = self._ensure_http()
        try:
            response = await http.get(gist_file.raw_url, headers={"User-Agent": USER_AGENT})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request to {gist_file.raw_url} failed: {e}", original_error=e) from e

        if not response.is_success:
            raise GistApiError(response.status_code, response.text)
        return response.text
