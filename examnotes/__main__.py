"""Allow `python -m examnotes`."""

from examnotes.cli.main import app

app()
