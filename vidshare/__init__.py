"""
VidShare Backend

Media-sharing platform backend: videos, comments, likes, subscriptions and
playlists, with viewer-personalized graph views and rotating sessions.

Package Structure:
==================
    vidshare/
    ├── api/        ← FastAPI application
    ├── shared/     ← Models, repositories, views, services, schemas
    └── config/     ← Configuration

Running the Application:
========================
    uvicorn vidshare.api.main:app --reload
"""
