"""
Security Utilities

Password hashing, JWT token management and token fingerprints.

Password Hashing:
=================
Uses bcrypt (through passlib) for secure password hashing with automatic
salt generation. The work factor comes from settings.BCRYPT_ROUNDS.

JWT Tokens:
===========
Uses PyJWT for JSON Web Token creation and validation. Every token carries
a "type" claim ("access" or "refresh") and decoding can insist on one, so a
refresh token is never accepted where an access token is expected.

Token Fingerprints:
===================
Refresh tokens are never stored verbatim; the session record keeps their
SHA-256 hex digest (hash_token).

Usage:
======
    from vidshare.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("password123")
    SecurityUtils.verify_password("password123", hashed)  # True

    token = SecurityUtils.create_token(
        claims={"sub": str(user.id)},
        token_type="access",
        secret_key=settings.ACCESS_TOKEN_SECRET,
        expires_delta=timedelta(minutes=15),
    )
    payload = SecurityUtils.decode_token(token, settings.ACCESS_TOKEN_SECRET, "access")
"""

from datetime import datetime, timedelta, timezone
import hashlib
from typing import Any, Optional
import uuid

import jwt
from passlib.context import CryptContext

from vidshare.config.settings import settings


ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT token creation and validation
    - Refresh token fingerprints
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against bcrypt hash.

        Returns:
            True if password matches, False otherwise
        """
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_token(
        claims: dict[str, Any],
        token_type: str,
        secret_key: str,
        expires_delta: timedelta,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT.

        Args:
            claims: Payload data to encode (e.g., sub, username)
            token_type: "access" or "refresh"
            secret_key: Secret key for signing
            expires_delta: Token lifetime
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        to_encode = dict(claims)
        to_encode.update({
            "type": token_type,
            "iat": now,
            "exp": now + expires_delta,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_token(
        token: str,
        secret_key: str,
        expected_type: Optional[str] = None,
        algorithm: str = "HS256",
    ) -> dict[str, Any]:
        """
        Decode and verify a JWT.

        Args:
            token: JWT token string
            secret_key: Secret key used for signing
            expected_type: Required "type" claim, if any
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired, invalid, or of the wrong type

        Example:
            try:
                payload = SecurityUtils.decode_token(token, secret, "access")
            except ValueError as e:
                raise AuthenticationError(str(e))
        """
        try:
            payload = jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

        if expected_type is not None and payload.get("type") != expected_type:
            raise ValueError(f"Expected {expected_type} token")

        return payload

    # ═══════════════════════════════════════════════════════════════════════════
    # TOKEN FINGERPRINTS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_token(token: str) -> str:
        """SHA-256 hex digest of a token, as stored in session records."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    @staticmethod
    def new_token_id() -> str:
        """Random jti so two tokens issued in the same second still differ."""
        return uuid.uuid4().hex
