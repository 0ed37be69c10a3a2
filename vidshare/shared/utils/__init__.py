"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing, JWT management, token fingerprints
- identifiers: Strict UUID parsing for request parameters

Usage:
======
    from vidshare.shared.utils.security import SecurityUtils
    from vidshare.shared.utils.identifiers import parse_identifier
"""

from vidshare.shared.utils.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    SecurityUtils,
)
from vidshare.shared.utils.identifiers import parse_identifier

__all__ = [
    "SecurityUtils",
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "parse_identifier",
]
