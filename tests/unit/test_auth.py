"""Tests for token providers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gist_manager.core.auth import (
    GhCliTokenProvider,
    InteractiveTokenProvider,
    SessionTokenProvider,
    StaticTokenProvider,
)
from gist_manager.core.errors import AuthenticationError


def _provider(token):
    provider = AsyncMock()
    provider.get_token.return_value = token
    return provider


class TestSessionTokenProvider:

    @pytest.mark.asyncio
    async def test_first_token_wins_and_is_cached(self):
        empty, found, unused = _provider(None), _provider("tok"), _provider("other")
        session = SessionTokenProvider([empty, found, unused])

        assert await session.get_token(["gist"]) == "tok"
        assert await session.get_token(["gist"]) == "tok"

        empty.get_token.assert_awaited_once_with(("gist",))
        found.get_token.assert_awaited_once()
        unused.get_token.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_scope(self):
        provider = _provider("tok")
        await SessionTokenProvider([provider]).get_token()
        provider.get_token.assert_awaited_once_with(("gist",))

    @pytest.mark.asyncio
    async def test_no_token(self):
        with pytest.raises(AuthenticationError):
            await SessionTokenProvider([_provider(None)]).get_token(["gist"])

    @pytest.mark.asyncio
    async def test_invalidate(self):
        provider = _provider("tok")
        session = SessionTokenProvider([provider])
        await session.get_token()
        session.invalidate()
        await session.get_token()
        assert provider.get_token.await_count == 2


@pytest.mark.asyncio
async def test_static_provider_treats_empty_as_missing():
    assert await StaticTokenProvider("").get_token(["gist"]) is None
    assert await StaticTokenProvider("abc").get_token(["gist"]) == "abc"


class TestInteractiveTokenProvider:

    @pytest.mark.asyncio
    async def test_prompts_with_password(self):
        ui = MagicMock()
        ui.show_input_box = AsyncMock(return_value="  typed  ")

        assert await InteractiveTokenProvider(ui).get_token(["gist"]) == "typed"
        assert ui.show_input_box.await_args.kwargs["password"] is True

    @pytest.mark.asyncio
    async def test_dismissed(self):
        ui = MagicMock()
        ui.show_input_box = AsyncMock(return_value=None)

        assert await InteractiveTokenProvider(ui).get_token(["gist"]) is None


class TestGhCliTokenProvider:

    @pytest.mark.asyncio
    async def test_reads_token(self):
        process = MagicMock()
        process.returncode = 0
        process.communicate = AsyncMock(return_value=(b"gho_abc\n", b""))

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            token = await GhCliTokenProvider(hostname="github.example").get_token(["gist"])

        assert token == "gho_abc"
        assert mock_exec.await_args.args == ("gh", "auth", "token", "--hostname", "github.example")

    @pytest.mark.asyncio
    async def test_not_logged_in(self):
        process = MagicMock()
        process.returncode = 1
        process.communicate = AsyncMock(return_value=(b"", b"not logged in"))

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            assert await GhCliTokenProvider().get_token(["gist"]) is None

    @pytest.mark.asyncio
    async def test_gh_not_installed(self):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError)):
            assert await GhCliTokenProvider().get_token(["gist"]) is None

    @pytest.mark.asyncio
    async def test_gh_not_executable(self, tmp_path):
        gh = tmp_path / "gh"
        gh.write_text("not a program", encoding="utf-8")
        gh.chmod(0o644)

        assert await GhCliTokenProvider(executable=str(gh)).get_token(["gist"]) is None
