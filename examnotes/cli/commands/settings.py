"""
Settings Commands.

Theme preference and app information.
"""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from examnotes import __version__
from examnotes.backend.core.exceptions import StorageWriteError
from examnotes.cli.render import build_console, detect_system_scheme
from examnotes.storage.factory import get_theme_store
from examnotes.storage.theme import ThemeMode, resolve_effective_theme

app = typer.Typer(help="Client settings")


@app.command()
def theme(
    mode: ThemeMode = typer.Argument(
        None, help="light, dark or system. Omit to show the current setting.",
    ),
) -> None:
    """
    Show or change the colour theme.

    Examples:
        examnotes settings theme
        examnotes settings theme dark
    """
    asyncio.run(_theme(mode))


async def _theme(mode: ThemeMode | None) -> None:
    store = get_theme_store()
    system_scheme = detect_system_scheme()

    if mode is not None:
        try:
            await store.set_mode(mode)
        except StorageWriteError as e:
            Console().print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)

    current = await store.get_mode()
    effective = resolve_effective_theme(current, system_scheme)
    console = build_console(current, system_scheme)

    if mode is not None:
        console.print(f"[status.ok]Theme set to {current.value}[/status.ok]")
    else:
        console.print(f"Theme: [note.title]{current.value}[/note.title]")
    if current is ThemeMode.SYSTEM:
        console.print(f"[status.muted]Following the terminal: {effective}[/status.muted]")


@app.command()
def about() -> None:
    """Show app information."""
    from examnotes.backend.core.config import get_app_config

    app_config = get_app_config().application
    table = Table(title="About", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Name", app_config.name)
    table.add_row("Version", __version__)
    table.add_row("Server", f"http://{app_config.server.host}:{app_config.server.port}")
    table.add_row("Model", get_app_config().generation.model)
    Console().print(table)
