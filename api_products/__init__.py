"""API product listing."""

from .routes import router

__all__ = ["router"]
