"""
CLI Commands.

Organized by feature area.
"""

from examnotes.cli.commands.health import app as health_app
from examnotes.cli.commands.notes import app as notes_app
from examnotes.cli.commands.server import app as server_app
from examnotes.cli.commands.settings import app as settings_app

__all__ = [
    "health_app",
    "notes_app",
    "server_app",
    "settings_app",
]
