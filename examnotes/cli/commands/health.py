"""
Health Check Commands.

Commands for checking that the notes server is reachable and ready.
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from examnotes.cli.client import get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def ping() -> None:
    """
    Check that the server is reachable.

    Examples:
        examnotes health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health")

        if response.status_code == 200:
            console.print("[green]✓ Server is reachable[/green]")
        else:
            console.print(f"[yellow]Server responded with status {response.status_code}[/yellow]")

    except httpx.HTTPError as e:
        if isinstance(e, httpx.ConnectError):
            console.print("[red]✗ Server is not reachable[/red]")
        else:
            console.print(f"[red]✗ Error: {e}[/red]")
        raise typer.Exit(1)

    finally:
        await client.close()


@app.command()
def status() -> None:
    """
    Check server readiness (language model configured).

    Examples:
        examnotes health status
    """
    asyncio.run(_status())


async def _status() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health/ready")
    except httpx.HTTPError:
        console.print("[red]Error: Cannot connect to the notes server[/red]")
        console.print("[dim]Is the server running? Start with: examnotes server start[/dim]")
        raise typer.Exit(1)
    finally:
        await client.close()

    if response.status_code not in (200, 503):
        console.print(f"[red]Unexpected response: {response.status_code}[/red]")
        raise typer.Exit(1)

    data = response.json()
    if response.status_code == 503:
        data = data.get("detail", data)
    _display_health(data)

    if response.status_code == 503:
        raise typer.Exit(1)


def _display_health(data: dict) -> None:
    status = data.get("status", "unknown")
    color = "green" if status == "healthy" else "red"

    checks = data.get("checks", {})
    if not checks:
        console.print(Panel(f"[{color}]{status.upper()}[/{color}]", title="Server Status"))
        return

    table = Table(title="Server Status", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check in checks.items():
        check_status = check.get("status", "unknown")
        check_color = "green" if check_status == "healthy" else "red"
        table.add_row(
            component,
            f"[{check_color}]{check_status}[/{check_color}]",
            check.get("error") or check.get("model") or "-",
        )

    console.print(table)
