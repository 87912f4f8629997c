"""Route handlers for the API."""

from zip2workspace.api.routes import health, workspaces

__all__ = [
    "health",
    "workspaces",
]
