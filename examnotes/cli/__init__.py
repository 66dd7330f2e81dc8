"""
Terminal client.

Typer commands over the local note store and the generation server.
"""
