"""Terminal implementation of the host primitives using rich."""

import asyncio
import logging
import shutil
from typing import Awaitable, List, Optional, Sequence, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ..editor.workspace import TextView
from .host import InputValidator, QuickPickItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Language identifiers whose pygments lexer goes by another name
LEXER_ALIASES = {
    "shellscript": "bash",
    "javascriptreact": "jsx",
    "typescriptreact": "tsx",
}

CLIPBOARD_COMMANDS: List[List[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class ConsoleHostUI:
    """Host primitives backed by a rich Console.

    Ctrl+C or end-of-input at any prompt counts as dismissal.
    """

    def __init__(self, console: Optional[Console] = None, theme: str = "monokai"):
        self.console = console or Console()
        self.theme = theme

    async def show_input_box(
        self,
        prompt: str,
        value: Optional[str] = None,
        placeholder: Optional[str] = None,
        password: bool = False,
        validate: Optional[InputValidator] = None,
    ) -> Optional[str]:
        label = prompt if not placeholder else f"{prompt} [dim]({placeholder})[/dim]"
        kwargs = {"password": password, "console": self.console}
        if value is not None:
            kwargs["default"] = value

        while True:
            try:
                answer = Prompt.ask(label, **kwargs)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return None

            if validate is not None:
                error = validate(answer)
                if error:
                    self.console.print(f"[red]{error}[/red]")
                    continue
            return answer

    async def show_quick_pick(
        self,
        items: Sequence[QuickPickItem],
        placeholder: Optional[str] = None,
    ) -> Optional[QuickPickItem]:
        table = Table(title=placeholder, show_header=False, box=None, padding=(0, 1))
        table.add_column("#", style="green", justify="right")
        table.add_column("Label", style="cyan bold")
        table.add_column("Description", style="dim")
        for index, item in enumerate(items, 1):
            description = item.description or ""
            if item.detail:
                description = f"{description}  {item.detail}".strip()
            table.add_row(f"{index}.", item.label, description)
        self.console.print(table)

        choices = [str(index) for index in range(1, len(items) + 1)]
        choice = self._ask_choice("Select (Enter to cancel)", choices)
        if choice is None:
            return None
        return items[int(choice) - 1]

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        self.console.print(f"[green]✓[/green] {message}")
        return self._ask_action(actions)

    async def show_warning_message(
        self,
        message: str,
        *actions: str,
        modal: bool = False,
    ) -> Optional[str]:
        if modal:
            self.console.print(Panel(Text(message, style="bold"), border_style="yellow", title="Warning"))
        else:
            self.console.print(f"[yellow]Warning:[/yellow] {message}")
        return self._ask_action(actions)

    async def show_error_message(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {message}")

    async def with_progress(self, title: str, operation: Awaitable[T]) -> T:
        with self.console.status(f"[dim]{title}[/dim]"):
            return await operation

    async def show_text_document(self, view: TextView) -> None:
        lexer = LEXER_ALIASES.get(view.language or "", view.language or "text")
        self.console.print(Panel(
            Syntax(view.content, lexer, theme=self.theme, line_numbers=True),
            title=view.title,
            subtitle=f"view {view.view_id}",
            border_style="blue",
        ))

    async def write_clipboard(self, text: str) -> bool:
        for command in CLIPBOARD_COMMANDS:
            if shutil.which(command[0]) is None:
                continue
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate(text.encode("utf-8"))
            if process.returncode == 0:
                return True
            logger.debug(f"{command[0]} failed: {stderr.decode('utf-8', errors='ignore').strip()}")
        return False

    async def open_external(self, url: str) -> bool:
        return typer.launch(url) == 0

    def _ask_action(self, actions: Sequence[str]) -> Optional[str]:
        if not actions:
            return None
        for index, action in enumerate(actions, 1):
            self.console.print(f"  [green]{index}.[/green] {action}")
        choice = self._ask_choice("Choose an action (Enter to dismiss)", [str(i) for i in range(1, len(actions) + 1)])
        if choice is None:
            return None
        return actions[int(choice) - 1]

    def _ask_choice(self, prompt: str, choices: List[str]) -> Optional[str]:
        try:
            choice = Prompt.ask(
                prompt,
                choices=choices + [""],
                default="",
                show_choices=False,
                show_default=False,
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
        return choice or None
