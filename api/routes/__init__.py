"""API Routes Package."""

from api.routes import health, search, abstracted

__all__ = [
    "health",
    "search",
    "abstracted",
]
