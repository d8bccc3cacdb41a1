"""
HTTP API

FastAPI application and routes.
"""

from .app import create_app, lifespan
from .routes import router, get_guild_service

__all__ = [
    "create_app",
    "lifespan",
    "router",
    "get_guild_service",
]
