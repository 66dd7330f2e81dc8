"""Backend proxy server."""
