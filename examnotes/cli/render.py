"""
Rendering helpers for the terminal client.

Display formatting for notes (previews, dates), the HTML and Markdown
export documents, and the Rich themes selected by the theme preference.
"""

import html
import os
import re

from rich.console import Console
from rich.theme import Theme

from examnotes.backend.core.utils import parse_timestamp
from examnotes.storage.models import Note, SourceType
from examnotes.storage.theme import EffectiveTheme, ThemeMode, resolve_effective_theme

PREVIEW_LENGTH = 150

_MARKDOWN_MARKERS = re.compile(r"[*_`#]")

# ANSI background indices that terminals use for dark palettes (COLORFGBG)
_DARK_BACKGROUNDS = {0, 1, 2, 3, 4, 5, 6, 8}

THEMES: dict[EffectiveTheme, Theme] = {
    "light": Theme({
        "note.title": "bold #2563EB",
        "note.meta": "grey42",
        "note.body": "black",
        "status.ok": "green4",
        "status.error": "bold red3",
        "status.muted": "grey50",
    }),
    "dark": Theme({
        "note.title": "bold #60A5FA",
        "note.meta": "grey62",
        "note.body": "grey93",
        "status.ok": "green3",
        "status.error": "bold red1",
        "status.muted": "grey58",
    }),
}

SOURCE_LABELS = {
    SourceType.OCR: "photo",
    SourceType.TEXT: "text",
}


def strip_markdown(text: str) -> str:
    """Remove markdown emphasis, code and heading markers."""
    return _MARKDOWN_MARKERS.sub("", text)


def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """First `length` characters of content with markdown markers removed."""
    stripped = strip_markdown(content).strip()
    if len(stripped) <= length:
        return stripped
    return stripped[:length].rstrip() + "..."


def format_date(created_at: str) -> str:
    """Format an ISO timestamp as e.g. "Jan 5, 2025"."""
    moment = parse_timestamp(created_at)
    return f"{moment:%b} {moment.day}, {moment.year}"


def to_markdown(note: Note) -> str:
    """Markdown export: the title as a heading followed by the content."""
    return f"# {note.title}\n\n{note.content.strip()}\n"


def to_html(note: Note) -> str:
    """Standalone HTML export: <h1> title and one paragraph per content line."""
    paragraphs = "".join(
        f"<p>{html.escape(strip_markdown(line))}</p>"
        for line in note.content.split("\n")
    )
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head><meta charset=\"utf-8\">"
        f"<title>{html.escape(note.title)}</title></head>\n"
        "<body style=\"font-family:sans-serif;padding:40px;\">\n"
        f"<h1 style=\"color:#2563EB;\">{html.escape(note.title)}</h1>\n"
        f"{paragraphs}\n"
        "</body>\n"
        "</html>\n"
    )


def detect_system_scheme(environ: dict[str, str] | None = None) -> str | None:
    """
    Guess the terminal's colour scheme from COLORFGBG.

    Returns:
        "dark", "light", or None when the terminal does not say.
    """
    env = os.environ if environ is None else environ
    value = env.get("COLORFGBG")
    if not value:
        return None

    background = value.rsplit(";", 1)[-1]
    try:
        index = int(background)
    except ValueError:
        return None
    return "dark" if index in _DARK_BACKGROUNDS else "light"


def build_console(mode: ThemeMode, system_scheme: str | None = None) -> Console:
    """Create a Console styled for the given preference."""
    if system_scheme is None:
        system_scheme = detect_system_scheme()
    effective = resolve_effective_theme(mode, system_scheme)
    return Console(theme=THEMES[effective])
