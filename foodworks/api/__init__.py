"""FastAPI application layer."""

from foodworks.api.main import app, create_app

__all__ = ["app", "create_app"]
