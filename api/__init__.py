"""API Package.

FastAPI server exposing operation search and abstracted execution.
"""

from api.server import create_app

__all__ = [
    "create_app",
]
