"""
Outcomes and the shared list/select steps of the gist commands.

A command is a chain of steps. A step either yields a value or stops the
command by raising StopCommand with the outcome to report; the command
runner turns that into the command's result.
"""

from enum import Enum
from typing import List, Optional, TypeVar

from ..core.client import GistClient
from ..core.models import Gist
from ..ui.host import HostUI, QuickPickItem

T = TypeVar("T")

NO_GISTS_MESSAGE = "No Gists found."
LOADING_TITLE = "Loading Gists..."


class CommandOutcome(Enum):
    """Terminal states of one command invocation."""
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"


class StopCommand(Exception):
    """Ends a command early with a non-failure outcome."""

    def __init__(self, outcome: CommandOutcome):
        super().__init__(outcome.value)
        self.outcome = outcome


def required(value: Optional[T]) -> T:
    """Pass a prompt answer through, or stop the command if it was dismissed."""
    if value is None:
        raise StopCommand(CommandOutcome.CANCELLED)
    return value


def gist_items(gists: List[Gist]) -> List[QuickPickItem]:
    return [
        QuickPickItem(
            label=gist.label,
            description=gist.summary(),
            detail=", ".join(gist.file_names),
            value=gist,
        )
        for gist in gists
    ]


async def fetch_gists(ui: HostUI, client: GistClient) -> List[Gist]:
    """Fetch the gist list; an empty list ends the command successfully."""
    await client.ensure_token()
    gists = await ui.with_progress(LOADING_TITLE, client.list_gists())
    if not gists:
        await ui.show_information_message(NO_GISTS_MESSAGE)
        raise StopCommand(CommandOutcome.SUCCEEDED)
    return gists


async def pick_gist(ui: HostUI, client: GistClient, placeholder: str) -> Gist:
    gists = await fetch_gists(ui, client)
    selected = required(await ui.show_quick_pick(gist_items(gists), placeholder))
    return selected.value


async def pick_file(ui: HostUI, gist: Gist, placeholder: str) -> str:
    """The only file of a gist, or the one the user picks."""
    file_names = gist.file_names
    if len(file_names) == 1:
        return file_names[0]

    items = [QuickPickItem(label=name, value=name) for name in file_names]
    selected = required(await ui.show_quick_pick(items, placeholder))
    return selected.value
