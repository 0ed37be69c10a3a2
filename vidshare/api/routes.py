"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live          → Health check endpoints
    /api/v1/users                   → Registration, sessions, account, channels
    /api/v1/videos                  → Videos and video likes
    /api/v1/comments                → Comments and comment likes
    /api/v1/subscriptions           → Subscription toggles and lists
    /api/v1/playlists               → Playlists

Usage:
======
    from vidshare.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from vidshare.api.handlers import (
    comment_handler,
    health_handler,
    playlist_handler,
    subscription_handler,
    user_handler,
    video_handler,
)
from vidshare.config.settings import settings


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    prefix = settings.API_PREFIX

    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        user_handler.router,
        prefix=f"{prefix}/users",
        tags=["Users"],
    )

    app.include_router(
        video_handler.router,
        prefix=f"{prefix}/videos",
        tags=["Videos"],
    )

    app.include_router(
        comment_handler.router,
        prefix=f"{prefix}/comments",
        tags=["Comments"],
    )

    app.include_router(
        subscription_handler.router,
        prefix=f"{prefix}/subscriptions",
        tags=["Subscriptions"],
    )

    app.include_router(
        playlist_handler.router,
        prefix=f"{prefix}/playlists",
        tags=["Playlists"],
    )
