"""
Interactive shell hosting the gist commands.

Views opened here live for the whole session, so a gist file opened with
`list` can be edited and pushed back with `update`.
"""

import logging
import shlex
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ..commands import CommandOutcome, GistCommands
from ..editor.workspace import LineSelection, TextView, Workspace

logger = logging.getLogger(__name__)

EXIT_WORDS = {"exit", "quit", "q"}

HELP_TEXT = """[bold]Gist commands:[/bold]

[cyan]list[/cyan]            - Pick a gist and open one of its files
[cyan]create[/cyan]          - Create a gist from the active view (or typed content)
[cyan]update[/cyan]          - Push the active view back to its gist
[cyan]delete[/cyan]          - Delete a gist

[bold]Views:[/bold]

[cyan]open PATH[/cyan]       - Open a local file as the active view
[cyan]views[/cyan]           - List open views
[cyan]switch N[/cyan]        - Make view N active
[cyan]select A:B[/cyan]      - Select lines A to B of the active view ([cyan]select[/cyan] alone clears)
[cyan]edit[/cyan]            - Edit the active view in $EDITOR
[cyan]show[/cyan]            - Print the active view
[cyan]close[/cyan]           - Close the active view
[cyan]exit[/cyan]            - Leave the shell"""


class GistShell:
    """Read-eval loop over the gist commands and the workspace."""

    def __init__(self, commands: GistCommands, workspace: Workspace, console: Console):
        self.commands = commands
        self.workspace = workspace
        self.console = console
        self.ui = commands.ui
        self.last_outcome: Optional[CommandOutcome] = None
        self._handlers: Dict[str, Callable[[List[str]], Awaitable[None]]] = {
            "list": self._list,
            "open-gist": self._list,
            "create": self._create,
            "update": self._update,
            "delete": self._delete,
            "open": self._open,
            "views": self._views,
            "switch": self._switch,
            "select": self._select,
            "edit": self._edit,
            "show": self._show,
            "close": self._close,
            "help": self._help,
        }

    async def run(self) -> None:
        self.console.print("[bold green]Gist Manager[/bold green] - Interactive Shell")
        self.console.print("[dim]Type 'help' for commands, 'exit' or Ctrl+C to leave[/dim]\n")

        while True:
            try:
                line = Prompt.ask("[bold blue]gist[/bold blue]", console=self.console)
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[dim]Goodbye![/dim]")
                break

            if not await self.execute(line):
                self.console.print("[dim]Goodbye![/dim]")
                break

    async def execute(self, line: str) -> bool:
        """Run one shell line. Returns False when the shell should exit."""
        try:
            words = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Error:[/red] {e}")
            return True

        if not words:
            return True

        name, args = words[0].lower(), words[1:]
        if name in EXIT_WORDS:
            return False

        handler = self._handlers.get(name)
        if handler is None:
            self.console.print(f"[red]Unknown command:[/red] {name} [dim](type 'help')[/dim]")
            return True

        await handler(args)
        return True

    def _require_view(self) -> Optional[TextView]:
        view = self.workspace.active_view
        if view is None:
            self.console.print("[yellow]No active view.[/yellow] Use 'open PATH' or 'list' first.")
        return view

    async def _list(self, args: List[str]) -> None:
        self.last_outcome = await self.commands.list_and_open()

    async def _create(self, args: List[str]) -> None:
        self.last_outcome = await self.commands.create()

    async def _update(self, args: List[str]) -> None:
        self.last_outcome = await self.commands.update()

    async def _delete(self, args: List[str]) -> None:
        self.last_outcome = await self.commands.delete()

    async def _open(self, args: List[str]) -> None:
        if len(args) != 1:
            self.console.print("[red]Usage:[/red] open PATH")
            return
        try:
            view = self.workspace.open_file(Path(args[0]).expanduser())
        except (OSError, UnicodeDecodeError) as e:
            self.console.print(f"[red]Error:[/red] Cannot open {args[0]}: {e}")
            return
        self.console.print(f"[green]✓[/green] Opened {view.title} [dim](view {view.view_id})[/dim]")

    async def _views(self, args: List[str]) -> None:
        views = self.workspace.views
        if not views:
            self.console.print("[dim]No open views[/dim]")
            return

        active = self.workspace.active_view
        table = Table(title="Open Views", show_header=True, header_style="bold magenta")
        table.add_column("#", style="green", justify="right")
        table.add_column("Title", style="cyan")
        table.add_column("Language", style="dim")
        table.add_column("Gist", style="yellow")
        table.add_column("Selection", style="dim")

        for index, view in enumerate(views, 1):
            metadata = self.commands.sessions.get(view)
            marker = "*" if active is view else ""
            table.add_row(
                f"{marker}{index}",
                view.title,
                view.language or "plain text",
                f"{metadata.gist_id}/{metadata.file_name}" if metadata else "",
                f"{view.selection.start_line}:{view.selection.end_line}" if view.selection else "",
            )
        self.console.print(table)

    async def _switch(self, args: List[str]) -> None:
        views = self.workspace.views
        try:
            view = views[int(args[0]) - 1] if args and int(args[0]) > 0 else None
        except (ValueError, IndexError):
            view = None
        if view is None:
            self.console.print(f"[red]Usage:[/red] switch N (1-{len(views)})")
            return
        self.workspace.show(view)
        self.console.print(f"[green]✓[/green] Active view: {view.title}")

    async def _select(self, args: List[str]) -> None:
        view = self._require_view()
        if view is None:
            return
        if not args:
            view.selection = None
            self.console.print("[dim]Selection cleared[/dim]")
            return
        try:
            view.selection = LineSelection.parse(args[0])
        except ValueError as e:
            self.console.print(f"[red]Error:[/red] {e}")
            return
        self.console.print(f"[green]✓[/green] Selected lines {view.selection.start_line}-{view.selection.end_line}")

    async def _edit(self, args: List[str]) -> None:
        view = self._require_view()
        if view is None:
            return
        extension = view.path.suffix if view.path else ".txt"
        edited = typer.edit(text=view.content, extension=extension or ".txt", require_save=True)
        if edited is None:
            self.console.print("[dim]No changes[/dim]")
            return
        view.content = edited
        self.console.print(f"[green]✓[/green] Updated {view.title}")

    async def _show(self, args: List[str]) -> None:
        view = self._require_view()
        if view is not None:
            await self.ui.show_text_document(view)

    async def _close(self, args: List[str]) -> None:
        view = self._require_view()
        if view is not None:
            self.workspace.close(view)
            self.console.print(f"[dim]Closed {view.title}[/dim]")

    async def _help(self, args: List[str]) -> None:
        self.console.print(Panel(HELP_TEXT, title="Help", border_style="blue"))
