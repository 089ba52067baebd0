"""
The four user commands: list and open, create, update, delete.

Each command prompts through the host UI, calls the GistClient and reports
one outcome. Failures surface exactly one error message; dismissing a
prompt ends the command quietly.
"""

import logging
from typing import Awaitable, Callable, Optional

from ..core.client import GistClient
from ..core.errors import GistError, GistValidationError
from ..core.models import Gist
from ..editor.languages import language_for
from ..editor.workspace import TextView, Workspace, file_name_of
from ..ui.host import HostUI, QuickPickItem
from .selection import CommandOutcome, StopCommand, pick_file, pick_gist, required
from .session import GistMetadata, SessionMetadataStore

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "untitled.txt"
OPEN_IN_BROWSER = "Open in Browser"
COPY_URL = "Copy URL"
DELETE_ACTION = "Delete"
EMPTY_CONTENT_MESSAGE = "Content cannot be empty"
NO_ACTIVE_EDITOR_MESSAGE = "No active editor. Open a Gist file first."

VISIBILITY_ITEMS = [
    QuickPickItem(
        label="Secret",
        description="Only visible to you and those you share the URL with",
        value=False,
    ),
    QuickPickItem(label="Public", description="Visible to everyone", value=True),
]


def _require_file_name(value: str) -> Optional[str]:
    return None if value.strip() else "File name is required"


class GistCommands:
    """Command handlers bound to one client, host UI and workspace.

    Args:
        client: Gist API client
        ui: Host prompt and presentation primitives
        workspace: Open views; the active one seeds create and update
        sessions: View to gist association, created if not given
        default_filename: Filename offered for unsaved content
    """

    def __init__(
        self,
        client: GistClient,
        ui: HostUI,
        workspace: Workspace,
        sessions: Optional[SessionMetadataStore] = None,
        default_filename: str = DEFAULT_FILENAME,
    ):
        self.client = client
        self.ui = ui
        self.workspace = workspace
        self.sessions = sessions or SessionMetadataStore(workspace)
        self.default_filename = default_filename

    async def list_and_open(self) -> CommandOutcome:
        """Pick a gist and one of its files, then open it in a new view."""
        return await self._run("list Gists", self._list_and_open)

    async def create(self) -> CommandOutcome:
        """Create a single-file gist from the active view or typed content."""
        return await self._run("create Gist", self._create)

    async def update(self) -> CommandOutcome:
        """Push the active view's text to the gist file it belongs to."""
        return await self._run("update Gist", self._update)

    async def delete(self) -> CommandOutcome:
        """Delete a gist after explicit confirmation."""
        return await self._run("delete Gist", self._delete)

    async def _run(self, action: str, body: Callable[[], Awaitable[None]]) -> CommandOutcome:
        try:
            await body()
        except StopCommand as stop:
            logger.debug(f"{action}: stopped ({stop.outcome.value})")
            return stop.outcome
        except GistValidationError as e:
            await self.ui.show_error_message(e.message)
            return CommandOutcome.FAILED
        except GistError as e:
            logger.debug(f"Failed to {action}: {e.to_dict()}")
            await self.ui.show_error_message(f"Failed to {action}: {e}")
            return CommandOutcome.FAILED
        return CommandOutcome.SUCCEEDED

    async def _list_and_open(self) -> None:
        gist = await pick_gist(self.ui, self.client, "Select a Gist to open")
        file_name = await pick_file(self.ui, gist, "Select a file to open")
        await self.open_gist_file(gist, file_name)

    async def open_gist_file(self, gist: Gist, file_name: str) -> TextView:
        """Open one file of a gist in a new untitled view tagged with its origin."""
        gist_file = gist.files[file_name]
        if gist_file.needs_raw_fetch:
            content = await self.ui.with_progress(
                f"Loading {file_name}...", self.client.get_file_content(gist_file)
            )
        else:
            content = gist_file.content or ""

        view = self.workspace.open_text_document(content, language_for(file_name))
        self.workspace.show(view)
        self.sessions.attach(view, GistMetadata(
            gist_id=gist.id,
            file_name=file_name,
            description=gist.description or "",
        ))
        await self.ui.show_text_document(view)
        return view

    async def _create(self) -> None:
        view = self.workspace.active_view
        content = ""
        default_filename = self.default_filename
        if view is not None:
            content = view.text_for_upload()
            if view.path is not None:
                default_filename = file_name_of(str(view.path)) or default_filename

        file_name = required(await self.ui.show_input_box(
            "Enter file name", value=default_filename, validate=_require_file_name
        )).strip()
        if not file_name:
            raise GistValidationError("File name is required", field="file_name")

        description = required(await self.ui.show_input_box(
            "Enter Gist description (optional)", placeholder="Description"
        ))
        visibility = required(await self.ui.show_quick_pick(VISIBILITY_ITEMS, "Select visibility"))

        if not content:
            content = required(await self.ui.show_input_box("Enter Gist content", placeholder="Content"))
        if not content.strip():
            raise GistValidationError(EMPTY_CONTENT_MESSAGE, field="content")

        await self.client.ensure_token()
        gist = await self.ui.with_progress(
            "Creating Gist...",
            self.client.create_gist(description, {file_name: content}, visibility.value),
        )

        action = await self.ui.show_information_message("Gist created successfully!", OPEN_IN_BROWSER, COPY_URL)
        if action == OPEN_IN_BROWSER:
            await self.ui.open_external(gist.html_url)
        elif action == COPY_URL:
            if await self.ui.write_clipboard(gist.html_url):
                await self.ui.show_information_message("URL copied to clipboard")
            else:
                await self.ui.show_information_message(f"Clipboard unavailable. Gist URL: {gist.html_url}")

    async def _update(self) -> None:
        view = self.workspace.active_view
        if view is None:
            raise GistValidationError(NO_ACTIVE_EDITOR_MESSAGE)

        metadata = self.sessions.get(view)
        if metadata is not None:
            await self.client.ensure_token()
            await self.ui.with_progress("Updating Gist...", self.client.update_gist(
                metadata.gist_id,
                metadata.description,
                {metadata.file_name: view.get_text()},
            ))
        else:
            gist = await pick_gist(self.ui, self.client, "Select a Gist to update")
            file_name = await pick_file(self.ui, gist, "Select a file to update")

            content = view.text_for_upload()
            if not content.strip():
                raise GistValidationError(EMPTY_CONTENT_MESSAGE, field="content")

            await self.ui.with_progress("Updating Gist...", self.client.update_gist(
                gist.id,
                gist.description or "",
                {file_name: content},
            ))

        await self.ui.show_information_message("Gist updated successfully!")

    async def _delete(self) -> None:
        gist = await pick_gist(self.ui, self.client, "Select a Gist to delete")

        confirmation = await self.ui.show_warning_message(
            f'Are you sure you want to delete "{gist.label}"?',
            DELETE_ACTION,
            modal=True,
        )
        if confirmation != DELETE_ACTION:
            raise StopCommand(CommandOutcome.CANCELLED)

        await self.ui.with_progress("Deleting Gist...", self.client.delete_gist(gist.id))
        self.sessions.forget_gist(gist.id)
        await self.ui.show_information_message("Gist deleted successfully!")
