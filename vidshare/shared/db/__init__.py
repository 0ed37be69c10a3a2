"""
Database Module

This module provides database connectivity and session management for VidShare.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │
        ├──► Repositories       (lookups and writes)
        └──► ViewCompiler       (client-facing reads)
        │
        ▼
    PostgreSQL (asyncpg)

Components:
===========
- session.py: Database engine, session factory, and lifecycle functions
"""

from vidshare.shared.db.session import (
    get_db,
    init_db,
    close_db,
    check_database,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "check_database",
    "AsyncSessionLocal",
    "engine",
]
