"""
Exam Notes terminal client.

Built with Typer for commands and Rich for output.

Usage:
    examnotes --help
    examnotes notes generate --image page1.jpg --image page2.jpg
    examnotes notes generate --text "Photosynthesis converts light..."
    examnotes notes list
    examnotes notes show <id>
    examnotes notes export <id> --format html -o note.html
    examnotes notes delete <id>
    examnotes settings theme dark
    examnotes health ping
    examnotes server start --reload
"""

import typer

from examnotes.backend.core.logging import setup_logging
from examnotes.cli.commands import health_app, notes_app, server_app, settings_app

app = typer.Typer(
    name="examnotes",
    help="Exam Notes - turn study material into revision notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(notes_app, name="notes")
app.add_typer(settings_app, name="settings")
app.add_typer(health_app, name="health")
app.add_typer(server_app, name="server")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Exam Notes terminal client.

    Generates notes through the server and keeps them in local storage.
    """
    if debug:
        setup_logging(level="DEBUG", format_type="console")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(enable_console=False)


if __name__ == "__main__":
    app()
