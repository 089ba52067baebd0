"""
Shared fixtures: an in-memory GitHub gist endpoint and a scripted host UI.
"""

import json
import itertools
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from gist_manager.commands import GistCommands
from gist_manager.core.auth import StaticTokenProvider
from gist_manager.core.client import GistClient
from gist_manager.editor.workspace import Workspace
from gist_manager.ui.host import QuickPickItem

TEST_TOKEN = "test-token-123"
API_BASE = "https://api.github.test"


class FakeGitHub:
    """Minimal stand-in for the /gists endpoints, served through httpx.MockTransport."""

    def __init__(self):
        self.gists: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[Tuple[int, str]] = None
        self._ids = itertools.count(1)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add_gist(
        self,
        files: Dict[str, str],
        description: Optional[str] = None,
        public: bool = False,
    ) -> Dict[str, Any]:
        gist_id = f"gist{next(self._ids)}"
        gist = {
            "id": gist_id,
            "description": description,
            "public": public,
            "html_url": f"https://gist.github.com/octocat/{gist_id}",
            "files": {
                name: {"filename": name, "content": content, "raw_url": f"https://gist.githubusercontent.test/{gist_id}/{name}"}
                for name, content in files.items()
            },
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
        self.gists[gist_id] = gist
        return gist

    def api_requests(self, method: Optional[str] = None) -> List[httpx.Request]:
        return [
            request for request in self.requests
            if request.url.host == httpx.URL(API_BASE).host and (method is None or request.method == method)
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with is not None:
            status, body = self.fail_with
            return httpx.Response(status, text=body)

        if request.url.host != httpx.URL(API_BASE).host:
            return self._raw(request)

        parts = request.url.path.strip("/").split("/")
        if parts == ["gists"] and request.method == "GET":
            return httpx.Response(200, json=list(self.gists.values()))
        if parts == ["gists"] and request.method == "POST":
            body = json.loads(request.content)
            gist = self.add_gist(
                {name: file_body["content"] for name, file_body in body["files"].items()},
                description=body.get("description"),
                public=body.get("public", False),
            )
            return httpx.Response(201, json=gist)

        gist_id = parts[1]
        gist = self.gists.get(gist_id)
        if gist is None:
            return httpx.Response(404, json={"message": "Not Found"})

        if request.method == "GET":
            return httpx.Response(200, json=gist)
        if request.method == "PATCH":
            body = json.loads(request.content)
            if "description" in body:
                gist["description"] = body["description"]
            for name, file_body in body.get("files", {}).items():
                if file_body is None:
                    gist["files"].pop(name, None)
                else:
                    gist["files"][name] = {"filename": name, "content": file_body["content"]}
            return httpx.Response(200, json=gist)
        if request.method == "DELETE":
            del self.gists[gist_id]
            return httpx.Response(204)

        return httpx.Response(405)

    def _raw(self, request: httpx.Request) -> httpx.Response:
        _, gist_id, name = request.url.path.split("/", 2)
        gist = self.gists.get(gist_id)
        if gist is None or name not in gist["files"]:
            return httpx.Response(404, text="Not Found")
        entry = gist["files"][name]
        return httpx.Response(200, text=entry.get("raw_text", entry["content"]))


class FakeHostUI:
    """Host UI that answers prompts from scripted queues.

    picks holds the index to choose for each quick pick (None dismisses).
    inputs holds the answer for each input box (None dismisses).
    """

    def __init__(self):
        self.inputs: List[Optional[str]] = []
        self.picks: List[Optional[int]] = []
        self.info_actions: List[Optional[str]] = []
        self.warning_answers: List[Optional[str]] = []
        self.clipboard_available = True

        self.input_prompts: List[Dict[str, Any]] = []
        self.pick_lists: List[List[QuickPickItem]] = []
        self.infos: List[str] = []
        self.warnings: List[str] = []
        self.errors: List[str] = []
        self.progress_titles: List[str] = []
        self.shown_views: List[Any] = []
        self.clipboard: List[str] = []
        self.opened_urls: List[str] = []

    async def show_input_box(self, prompt, value=None, placeholder=None, password=False, validate=None):
        self.input_prompts.append({"prompt": prompt, "value": value, "placeholder": placeholder})
        return self.inputs.pop(0)

    async def show_quick_pick(self, items, placeholder=None):
        self.pick_lists.append(list(items))
        index = self.picks.pop(0)
        return None if index is None else items[index]

    async def show_information_message(self, message, *actions):
        self.infos.append(message)
        if actions and self.info_actions:
            return self.info_actions.pop(0)
        return None

    async def show_warning_message(self, message, *actions, modal=False):
        self.warnings.append(message)
        return self.warning_answers.pop(0) if self.warning_answers else None

    async def show_error_message(self, message):
        self.errors.append(message)

    async def with_progress(self, title, operation):
        self.progress_titles.append(title)
        return await operation

    async def show_text_document(self, view):
        self.shown_views.append(view)

    async def write_clipboard(self, text):
        if not self.clipboard_available:
            return False
        self.clipboard.append(text)
        return True

    async def open_external(self, url):
        self.opened_urls.append(url)
        return True


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def client(github: FakeGitHub) -> GistClient:
    return GistClient(StaticTokenProvider(TEST_TOKEN), base_url=API_BASE, transport=github.transport)


@pytest.fixture
def ui() -> FakeHostUI:
    return FakeHostUI()


@pytest.fixture
def workspace() -> Workspace:
    return Workspace()


@pytest.fixture
def commands(client: GistClient, ui: FakeHostUI, workspace: Workspace) -> GistCommands:
    return GistCommands(client, ui, workspace)
