"""
Main CLI application entry point.

This module contains the main Typer application and command handlers
for Gist Manager.
"""

from typing import Any, List, Optional
import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gist_manager import VERSION
from gist_manager.commands import CommandOutcome, GistCommands
from gist_manager.config.env_loader import EnvFileLoader
from gist_manager.config.hierarchical import HierarchicalConfigLoader, SettingScope
from gist_manager.config.settings import GistManagerSettings
from gist_manager.core.auth import (
    GhCliTokenProvider,
    InteractiveTokenProvider,
    SessionTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)
from gist_manager.core.client import GistClient
from gist_manager.core.errors import ConfigurationError
from gist_manager.editor.workspace import LineSelection, Workspace
from gist_manager.ui.console import ConsoleHostUI
from gist_manager.ui.host import HostUI

# Create the main Typer application
app = typer.Typer(
    name="gist-manager",
    help="Gist Manager - list, open, create, update and delete GitHub gists",
    add_completion=False,
    rich_markup_mode="rich",
)

# Rich console for output
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]Gist Manager[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Gist Manager - work with your GitHub gists from the terminal.

    Authenticates with GIST_MANAGER_TOKEN, GITHUB_TOKEN, the GitHub CLI,
    or a token typed at the prompt.
    """
    pass


def load_settings(working_directory: Optional[Path] = None) -> GistManagerSettings:
    """Load .env, settings files and environment into validated settings."""
    EnvFileLoader(working_directory).load_env_file()
    try:
        settings = HierarchicalConfigLoader(working_directory).build_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(name)s:%(levelname)s:%(message)s",
    )
    return settings


def build_token_provider(settings: GistManagerSettings, ui: HostUI) -> SessionTokenProvider:
    providers: List[TokenProvider] = [StaticTokenProvider(settings.effective_token)]
    if settings.use_gh_cli:
        providers.append(GhCliTokenProvider())
    if settings.interactive_login:
        providers.append(InteractiveTokenProvider(ui))
    return SessionTokenProvider(providers, scopes=[settings.token_scope])


def build_client(settings: GistManagerSettings, ui: HostUI) -> GistClient:
    return GistClient(
        build_token_provider(settings, ui),
        base_url=settings.api_base_url,
        api_version=settings.api_version,
        timeout=settings.timeout,
        scope=settings.token_scope,
    )


def _open_active_view(workspace: Workspace, file: Optional[Path], lines: Optional[str]) -> None:
    if file is None:
        if lines:
            raise typer.BadParameter("--lines needs --file", param_hint="--lines")
        return

    try:
        view = workspace.open_file(file)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot open {file}: {e}")
        raise typer.Exit(1)

    if lines:
        try:
            view.selection = LineSelection.parse(lines)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--lines")


async def _async_run_command(command: str, file: Optional[Path], lines: Optional[str]) -> CommandOutcome:
    settings = load_settings()
    ui = ConsoleHostUI(console, theme=settings.theme)
    workspace = Workspace()
    _open_active_view(workspace, file, lines)

    async with build_client(settings, ui) as client:
        commands = GistCommands(client, ui, workspace, default_filename=settings.default_filename)
        return await getattr(commands, command)()


def _run_command(command: str, file: Optional[Path] = None, lines: Optional[str] = None) -> None:
    outcome = asyncio.run(_async_run_command(command, file, lines))
    if outcome is CommandOutcome.FAILED:
        raise typer.Exit(1)


FILE_OPTION = typer.Option(None, "--file", "-f", help="File to use as the active view", exists=True, dir_okay=False)
LINES_OPTION = typer.Option(None, "--lines", "-l", help="Line range START:END of --file to use as the selection")


@app.command("list")
def list_command() -> None:
    """Pick a gist and show one of its files."""
    _run_command("list_and_open")


@app.command("create")
def create_command(
    file: Optional[Path] = FILE_OPTION,
    lines: Optional[str] = LINES_OPTION,
) -> None:
    """Create a gist from a file, a line range of it, or typed content."""
    _run_command("create", file, lines)


@app.command("update")
def update_command(
    file: Optional[Path] = FILE_OPTION,
    lines: Optional[str] = LINES_OPTION,
) -> None:
    """Replace one file of a gist with the content of a local file."""
    _run_command("update", file, lines)


@app.command("delete")
def delete_command() -> None:
    """Delete a gist after confirmation."""
    _run_command("delete")


@app.command("shell")
def shell_command(
    file: Optional[Path] = FILE_OPTION,
) -> None:
    """Start an interactive shell where opened gists can be edited and updated."""
    asyncio.run(_async_shell_command(file))


async def _async_shell_command(file: Optional[Path]) -> None:
    from .shell import GistShell

    settings = load_settings()
    ui = ConsoleHostUI(console, theme=settings.theme)
    workspace = Workspace()
    _open_active_view(workspace, file, None)

    async with build_client(settings, ui) as client:
        commands = GistCommands(client, ui, workspace, default_filename=settings.default_filename)
        await GistShell(commands, workspace, console).run()


@app.command("config")
def config_command(
    show: bool = typer.Option(False, "--show", "-s", help="Show current configuration"),
    show_sources: bool = typer.Option(False, "--sources", help="Show configuration sources"),
    set_key: Optional[str] = typer.Option(None, "--set", help="Set configuration key=value"),
    scope: str = typer.Option("user", "--scope", help="Configuration scope (user, project)"),
    init: bool = typer.Option(False, "--init", help="Create an example .gist-manager/.env"),
) -> None:
    """Manage Gist Manager configuration."""
    loader = HierarchicalConfigLoader()

    if init:
        env_path = EnvFileLoader().create_example_env_file()
        console.print(f"[green]✓[/green] Created example .env file: {env_path}")
        console.print("[dim]Edit it to set GIST_MANAGER_TOKEN[/dim]")
        return

    if set_key:
        _set_config_value(loader, set_key, scope)
        return

    if show_sources:
        _show_config_sources(loader)
        return

    if show:
        _show_current_config(loader)
        return

    console.print("[yellow]Use one of the following options:[/yellow]")
    console.print("  --show           Show current configuration")
    console.print("  --sources        Show configuration sources and files")
    console.print("  --set <key=val>  Set configuration value")
    console.print("  --init           Create an example .env file")


def _show_current_config(loader: HierarchicalConfigLoader) -> None:
    EnvFileLoader().load_env_file()
    try:
        settings = loader.build_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Current Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    values = settings.to_dict()
    values["token"] = "Set" if settings.effective_token else "Not set"
    for key, value in values.items():
        sources = loader.get_setting_sources(key)
        source = next(
            (scope.value for scope in reversed(list(SettingScope)) if scope.value in sources),
            "default",
        )
        table.add_row(key, str(value), source)

    console.print(table)


def _show_config_sources(loader: HierarchicalConfigLoader) -> None:
    env_loader = EnvFileLoader()
    env_file = env_loader.load_env_file()
    loader.load_all_settings()
    summary = loader.get_config_summary()

    table = Table(title="Configuration Sources", show_header=True, header_style="bold magenta")
    table.add_column("Scope", style="cyan", no_wrap=True)
    table.add_column("Path", style="yellow")
    table.add_column("Exists", style="green")
    table.add_column("Settings", style="blue")
    table.add_column("Errors", style="red")

    for scope in SettingScope:
        source = summary["sources"].get(scope.value)
        if source is None:
            continue
        table.add_row(
            scope.value,
            source["path"],
            "✓" if source["exists"] else "✗",
            str(source["settings_count"]),
            str(len(source["errors"])),
        )
    console.print(table)

    console.print(Panel(
        f"Environment File: {env_file or 'None found'}\n"
        f"Variables Loaded: {len(env_loader.get_loaded_vars())}",
        title="Environment Configuration",
        border_style="blue"
    ))

    if summary["errors"]:
        console.print(Panel("\n".join(summary["errors"]), title="Configuration Errors", border_style="red"))


def _set_config_value(loader: HierarchicalConfigLoader, set_key: str, scope: str) -> None:
    if "=" not in set_key:
        console.print("[red]Error:[/red] Use format --set key=value")
        raise typer.Exit(1)

    key, value = (part.strip() for part in set_key.split("=", 1))

    try:
        setting_scope = SettingScope(scope.lower())
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid scope '{scope}'. Use: user or project")
        raise typer.Exit(1)

    converted = _convert_config_value(key, value)
    try:
        GistManagerSettings(**{key: converted})
        path = loader.save_setting(setting_scope, key, converted)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Set {key} = {converted} in {scope} scope [dim]({path})[/dim]")


def _convert_config_value(key: str, value: str) -> Any:
    """Convert string value to appropriate type based on key."""
    if key in ("use_gh_cli", "interactive_login", "debug"):
        return value.lower() in ("true", "1", "yes", "on")

    if key == "timeout":
        try:
            return float(value)
        except ValueError:
            return value

    return value


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
