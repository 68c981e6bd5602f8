"""Route handlers for the API."""

from cv_studio.api.routes import cvs, exports, health, render, templates

__all__ = ["cvs", "exports", "health", "render", "templates"]
