"""
Tests for the GitHub Gist API client.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock

from gist_manager import USER_AGENT
from gist_manager.core.auth import StaticTokenProvider
from gist_manager.core.client import GistClient, build_files_payload
from gist_manager.core.errors import AuthenticationError, GistApiError, GistError, NetworkError
from gist_manager.core.models import GistFile

from .conftest import API_BASE, TEST_TOKEN


class TestRequestContract:
    """Headers and bodies sent with every call."""

    @pytest.mark.asyncio
    async def test_headers_on_every_request(self, client, github):
        github.add_gist({"a.txt": "hello"})
        await client.list_gists()

        request = github.requests[0]
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"
        assert request.headers["User-Agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_get_and_delete_send_no_body(self, client, github):
        gist = github.add_gist({"a.txt": "hello"})
        await client.get_gist(gist["id"])
        await client.delete_gist(gist["id"])

        assert [r.method for r in github.requests] == ["GET", "DELETE"]
        assert all(r.content == b"" for r in github.requests)

    @pytest.mark.asyncio
    async def test_create_body(self, client, github):
        created = await client.create_gist("d", {"t.py": "print(1)"}, False)

        body = json.loads(github.requests[0].content)
        assert github.requests[0].method == "POST"
        assert github.requests[0].url.path == "/gists"
        assert body == {"description": "d", "public": False, "files": {"t.py": {"content": "print(1)"}}}
        assert created.id in github.gists
        assert created.html_url.endswith(created.id)

    @pytest.mark.asyncio
    async def test_update_body_with_deletion(self, client, github):
        gist = github.add_gist({"a.txt": "hello", "b.txt": "bye"}, description="d")
        updated = await client.update_gist(gist["id"], "d", {"a.txt": "world", "b.txt": None})

        body = json.loads(github.requests[0].content)
        assert github.requests[0].method == "PATCH"
        assert body == {"description": "d", "files": {"a.txt": {"content": "world"}, "b.txt": None}}
        assert updated.file_names == ["a.txt"]

    @pytest.mark.asyncio
    async def test_token_requested_with_gist_scope(self, github):
        provider = AsyncMock()
        provider.get_token.return_value = "abc"
        client = GistClient(provider, base_url=API_BASE, transport=github.transport)

        await client.list_gists()

        provider.get_token.assert_awaited_once_with(["gist"])

    @pytest.mark.asyncio
    async def test_missing_token_fails_before_request(self, github):
        client = GistClient(StaticTokenProvider(None), base_url=API_BASE, transport=github.transport)

        with pytest.raises(AuthenticationError):
            await client.list_gists()
        assert github.requests == []


class TestResponses:
    """Decoding and error surfacing."""

    @pytest.mark.asyncio
    async def test_list_preserves_server_order(self, client, github):
        github.add_gist({"z.txt": "1"}, description="first")
        github.add_gist({"a.txt": "2"})

        gists = await client.list_gists()

        assert [g.id for g in gists] == ["gist1", "gist2"]
        assert gists[0].description == "first"

    @pytest.mark.asyncio
    async def test_unknown_gist_raises_api_error(self, client, github):
        with pytest.raises(GistApiError) as exc_info:
            await client.get_gist("missing")

        assert exc_info.value.status == 404
        assert "404" in str(exc_info.value)
        assert "Not Found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_error_body_kept_verbatim(self, client, github):
        github.fail_with = (422, '{"message": "Validation Failed"}')

        with pytest.raises(GistApiError) as exc_info:
            await client.create_gist("", {"a.txt": "x"}, True)

        assert exc_info.value.body == '{"message": "Validation Failed"}'
        assert str(exc_info.value) == 'GitHub API error: 422 {"message": "Validation Failed"}'

    @pytest.mark.asyncio
    async def test_delete_no_content_returns_none(self, client, github):
        gist = github.add_gist({"a.txt": "hello"})
        assert await client.delete_gist(gist["id"]) is None
        assert gist["id"] not in github.gists

    @pytest.mark.asyncio
    async def test_invalid_json_raises_api_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        client = GistClient(StaticTokenProvider(TEST_TOKEN), base_url=API_BASE, transport=transport)

        with pytest.raises(GistApiError) as exc_info:
            await client.list_gists()
        assert exc_info.value.status == 200

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = GistClient(StaticTokenProvider(TEST_TOKEN), base_url=API_BASE, transport=httpx.MockTransport(handler))

        with pytest.raises(NetworkError):
            await client.list_gists()

    @pytest.mark.asyncio
    async def test_invalid_url_raises_network_error(self, github):
        client = GistClient(StaticTokenProvider(TEST_TOKEN), base_url="https://api.github.test/\x01", transport=github.transport)

        with pytest.raises(NetworkError):
            await client.list_gists()
        assert github.requests == []

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises_gist_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"message": "odd"}))
        client = GistClient(StaticTokenProvider(TEST_TOKEN), base_url=API_BASE, transport=transport)

        with pytest.raises(GistError):
            await client.list_gists()

    @pytest.mark.asyncio
    async def test_create_without_files_is_rejected(self, client, github):
        with pytest.raises(GistError):
            await client.create_gist("d", {}, False)
        assert github.requests == []


class TestFileContent:
    """Truncated and omitted file content."""

    @pytest.mark.asyncio
    async def test_inline_content_needs_no_request(self, client, github):
        content = await client.get_file_content(GistFile(filename="a.txt", content="hi"))
        assert content == "hi"
        assert github.requests == []

    @pytest.mark.asyncio
    async def test_truncated_file_fetched_from_raw_url(self, client, github):
        gist = github.add_gist({"big.txt": "full text"})
        raw_url = gist["files"]["big.txt"]["raw_url"]

        content = await client.get_file_content(
            GistFile(filename="big.txt", content="full", truncated=True, raw_url=raw_url)
        )

        assert content == "full text"
        assert str(github.requests[0].url) == raw_url

    @pytest.mark.asyncio
    async def test_missing_content_without_raw_url(self, client):
        with pytest.raises(GistError):
            await client.get_file_content(GistFile(filename="a.txt"))


class TestRoundTrip:

    @pytest.mark.asyncio
    async def test_create_then_update_keeps_description(self, client):
        created = await client.create_gist("d", {"a.txt": "hello"}, False)
        updated = await client.update_gist(created.id, created.description or "", {"a.txt": "world"})

        assert updated.description == "d"
        assert updated.files["a.txt"].content == "world"
        assert updated.public is False


def test_build_files_payload():
    assert build_files_payload({"a": "x", "b": None}) == {"a": {"content": "x"}, "b": None}
