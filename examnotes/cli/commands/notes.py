"""
Note Commands.

Generate, browse, view, export and delete saved notes.
"""

import asyncio
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from examnotes.backend.core.config import get_app_config
from examnotes.backend.core.exceptions import (
    GenerationError,
    StorageWriteError,
    ValidationError,
)
from examnotes.cli.client import get_api_client
from examnotes.cli.projection import NoteListProjection
from examnotes.cli.render import build_console, format_date, to_html, to_markdown
from examnotes.storage.factory import get_note_store, get_theme_store
from examnotes.storage.models import Note, NoteDraft, SourceType

app = typer.Typer(help="Create and manage revision notes")

EXPORT_FORMATS = {"html": to_html, "md": to_markdown}


async def _console() -> Console:
    mode = await get_theme_store().get_mode()
    return build_console(mode)


def _print_note(console: Console, note: Note) -> None:
    source = "photos" if note.source_type is SourceType.OCR else "text"
    console.print(f"[note.title]{escape(note.title)}[/note.title]")
    console.print(
        f"[note.meta]{format_date(note.created_at)} · from {source} · {note.id}[/note.meta]\n"
    )
    console.print(Markdown(note.content), style="note.body")


@app.command()
def generate(
    images: list[Path] = typer.Option(
        None, "--image", "-i", help="Image of study material (repeatable)",
    ),
    text: str = typer.Option(None, "--text", "-t", help="Study text to convert"),
    text_file: Path = typer.Option(
        None, "--text-file", "-f", help="Read study text from a file",
    ),
) -> None:
    """
    Generate revision notes from images or text and save them.

    Examples:
        examnotes notes generate -i page1.jpg -i page2.jpg
        examnotes notes generate -t "Photosynthesis converts light energy..."
        examnotes notes generate -f chapter3.txt
    """
    sources = sum(bool(s) for s in (images, text, text_file))
    if sources != 1:
        console = Console()
        console.print("[red]Provide exactly one of --image, --text or --text-file[/red]")
        raise typer.Exit(2)

    if text_file:
        try:
            text = text_file.read_text(encoding="utf-8")
        except OSError as e:
            Console().print(f"[red]Error: Cannot read {escape(str(text_file))}: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    asyncio.run(_generate(images or [], text))


async def _generate(images: list[Path], text: str | None) -> None:
    """Async implementation of generate command."""
    console = await _console()
    client = get_api_client()
    source_type = SourceType.OCR if images else SourceType.TEXT

    try:
        with console.status("Generating notes..."):
            if images:
                generated = await client.generate_notes(images)
            else:
                generated = await client.generate_notes_from_text(text or "")
    except (GenerationError, ValidationError) as e:
        console.print(f"[status.error]Failed to generate notes: {escape(e.message)}[/status.error]")
        raise typer.Exit(1)
    except httpx.HTTPError:
        console.print("[status.error]Error: Cannot connect to the notes server[/status.error]")
        console.print("[status.muted]Is the server running? Start with: examnotes server start[/status.muted]")
        raise typer.Exit(1)
    finally:
        await client.close()

    draft = NoteDraft.from_generation(
        generated.title,
        generated.content,
        source_type,
        placeholder_title=get_app_config().storage.untitled_note_title,
    )

    try:
        note = await get_note_store().create(draft)
    except StorageWriteError as e:
        console.print(f"[status.error]Failed to save note: {escape(e.message)}[/status.error]")
        raise typer.Exit(1)

    console.print(f"[status.ok]Saved[/status.ok] [note.meta]{note.id}[/note.meta]\n")
    _print_note(console, note)


@app.command("list")
def list_notes() -> None:
    """
    List saved notes, newest first.

    Examples:
        examnotes notes list
    """
    asyncio.run(_list())


async def _list() -> None:
    console = await _console()
    projection = NoteListProjection(get_note_store())
    await projection.refresh()

    if projection.state == "error":
        console.print("[status.error]Could not load notes[/status.error]")
        console.print(f"[status.muted]{escape(projection.error or '')}[/status.muted]")
        raise typer.Exit(1)

    if projection.state == "empty":
        console.print(Panel(
            "Create your first exam note by uploading textbook images or pasting study text\n"
            "[status.muted]examnotes notes generate --image page.jpg[/status.muted]",
            title="No notes yet",
        ))
        return

    items = projection.items()
    console.print(f"[bold]My Notes[/bold] [note.meta]{len(items)} "
                  f"{'note' if len(items) == 1 else 'notes'}[/note.meta]\n")

    for item in items:
        console.print(f"[note.meta]{item.date} · {item.source} · {item.id}[/note.meta]")
        console.print(f"[note.title]{escape(item.title)}[/note.title]")
        console.print(f"[note.body]{escape(item.preview)}[/note.body]\n")


@app.command()
def show(
    note_id: str = typer.Argument(..., help="ID of the note"),
) -> None:
    """
    Show a saved note.

    Examples:
        examnotes notes show 3f0c...
    """
    asyncio.run(_show(note_id))


async def _show(note_id: str) -> None:
    console = await _console()
    note = await get_note_store().get(note_id)

    if note is None:
        console.print("[status.error]No note found[/status.error]")
        raise typer.Exit(1)

    _print_note(console, note)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="ID of the note"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a saved note.

    Examples:
        examnotes notes delete 3f0c...
        examnotes notes delete 3f0c... --yes
    """
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)
    asyncio.run(_delete(note_id))


async def _delete(note_id: str) -> None:
    console = await _console()
    projection = NoteListProjection(get_note_store())

    try:
        await projection.request_delete(note_id)
    except StorageWriteError as e:
        console.print(f"[status.error]Failed to delete note: {escape(e.message)}[/status.error]")
        raise typer.Exit(1)

    remaining = len(projection.notes)
    console.print(
        f"[status.ok]Deleted[/status.ok] [status.muted]({remaining} "
        f"{'note' if remaining == 1 else 'notes'} left)[/status.muted]"
    )


@app.command()
def export(
    note_id: str = typer.Argument(..., help="ID of the note"),
    fmt: str = typer.Option("html", "--format", help="Export format: html or md"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
) -> None:
    """
    Export a note as a standalone HTML document or Markdown.

    Examples:
        examnotes notes export 3f0c... -o note.html
        examnotes notes export 3f0c... --format md
    """
    if fmt not in EXPORT_FORMATS:
        Console().print(f"[red]Unknown format: {escape(fmt)} (use html or md)[/red]")
        raise typer.Exit(2)
    asyncio.run(_export(note_id, fmt, output))


async def _export(note_id: str, fmt: str, output: Path | None) -> None:
    console = await _console()
    note = await get_note_store().get(note_id)

    if note is None:
        console.print("[status.error]No note found[/status.error]")
        raise typer.Exit(1)

    document = EXPORT_FORMATS[fmt](note)

    if output is None:
        typer.echo(document, nl=False)
        return

    try:
        output.write_text(document, encoding="utf-8")
    except OSError as e:
        console.print(f"[status.error]Error: Cannot write {escape(str(output))}: {escape(str(e))}[/status.error]")
        raise typer.Exit(1)

    console.print(f"[status.ok]Exported[/status.ok] {escape(str(output))}")
