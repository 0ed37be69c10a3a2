"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from vidshare.config.settings import get_settings

    settings = get_settings()
    db_url = settings.DATABASE_URL
"""

from vidshare.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
