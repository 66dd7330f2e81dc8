"""
Exam Notes.

- backend/: FastAPI proxy that turns photos or text into revision notes via an LLM
- storage/: Local key-value persistence for saved notes and preferences
- cli/: Terminal client (Typer + Rich) for generating, browsing and exporting notes
"""

__version__ = "0.1.0"
