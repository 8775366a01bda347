from fastapi import FastAPI

from .collections import router as collections_router
from .moderation import router as moderation_router
from .templates import router as templates_router
from .versions import router as versions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(templates_router)
    app.include_router(versions_router)
    app.include_router(collections_router)
    app.include_router(moderation_router)
