"""
Session Authority

Issues, rotates and revokes login sessions.

Session States:
===============
    Anonymous ──login──► Authenticated(0) ──refresh──► Authenticated(1) ──► ... (n)
                               │                              │
                               └──────── logout / reuse ──────┴──► Revoked (no record)

Tokens:
=======
    access   JWT signed with ACCESS_TOKEN_SECRET, short-lived
             claims: sub, username, email, full_name, type=access, iat, exp
             verified by signature and expiry only (no database hit)

    refresh  JWT signed with REFRESH_TOKEN_SECRET, long-lived
             claims: sub, gen, jti, type=refresh, iat, exp
             only its SHA-256 digest is stored, one per user

Refresh Protocol:
=================
    1. Verify signature, expiry and type           → AuthenticationError
    2. Compare digest with the session record
         no record / mismatch                     → destroy record, SessionRevokedError
    3. Compare-and-swap the record to the next token
         lost race (0 rows)                       → destroy record, SessionRevokedError
    4. Return a fresh access/refresh pair

A refresh token that is correctly signed but not current has been used
before: whoever holds it, the session is compromised, so every token in the
chain stops working. The destruction is committed before the error is
raised; the request-level rollback must not resurrect the session.

Usage:
======
    authority = SessionAuthority(db, settings)
    user, tokens = await authority.login(username="alice", password="...")
    tokens = await authority.refresh(tokens.refresh_token)
    await authority.logout(user.id)
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import NoReturn, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import AuthenticationError, SessionRevokedError, ValidationError
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.user import User
from vidshare.shared.repositories.session_repository import SessionRepository
from vidshare.shared.repositories.user_repository import UserRepository
from vidshare.shared.utils.security import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, SecurityUtils


logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class Principal:
    """Identity carried by a verified access token."""

    id: UUID
    username: str
    email: str
    full_name: str


class SessionAuthority:
    """
    Owner of session records and token issuance.

    Attributes:
        session: Database session
        config: Settings with token secrets and lifetimes
    """

    def __init__(self, session: AsyncSession, config: Settings) -> None:
        self.session = session
        self.config = config
        self.sessions = SessionRepository(session)
        self.users = UserRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # TOKEN ISSUANCE
    # ═══════════════════════════════════════════════════════════════════════════

    def issue_access_token(self, user: User) -> str:
        return SecurityUtils.create_token(
            claims={
                "sub": str(user.id),
                "username": user.username,
                "email": user.email,
                "full_name": user.full_name,
            },
            token_type=ACCESS_TOKEN_TYPE,
            secret_key=self.config.ACCESS_TOKEN_SECRET,
            expires_delta=timedelta(minutes=self.config.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=self.config.JWT_ALGORITHM,
        )

    def _issue_refresh_token(self, user_id: UUID, generation: int) -> str:
        return SecurityUtils.create_token(
            claims={
                "sub": str(user_id),
                "gen": generation,
                "jti": SecurityUtils.new_token_id(),
            },
            token_type=REFRESH_TOKEN_TYPE,
            secret_key=self.config.REFRESH_TOKEN_SECRET,
            expires_delta=timedelta(days=self.config.REFRESH_TOKEN_EXPIRE_DAYS),
            algorithm=self.config.JWT_ALGORITHM,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # LOGIN / LOGOUT
    # ═══════════════════════════════════════════════════════════════════════════

    async def login(
        self,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> tuple[User, TokenPair]:
        """
        Authenticate by username or email and start a fresh session.

        Any previous session of the user is replaced, so tokens issued
        before this login no longer refresh.

        Raises:
            ValidationError: Neither username nor email given
            AuthenticationError: Unknown user or wrong password
        """
        if not (username or email):
            raise ValidationError("Username or email is required")

        user = await self.users.get_by_login(username=username, email=email)
        if user is None or not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid user credentials")

        refresh_token = self._issue_refresh_token(user.id, 0)
        await self.sessions.replace(user.id, SecurityUtils.hash_token(refresh_token))

        logger.info("User logged in", user_id=str(user.id))
        return user, TokenPair(self.issue_access_token(user), refresh_token)

    async def logout(self, user_id: UUID) -> None:
        """Destroy the user's session. Logging out twice is not an error."""
        existed = await self.sessions.delete(user_id)
        logger.info("User logged out", user_id=str(user_id), had_session=existed)

    # ═══════════════════════════════════════════════════════════════════════════
    # REFRESH
    # ═══════════════════════════════════════════════════════════════════════════

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Rotate a refresh token.

        Raises:
            AuthenticationError: Bad signature, expired, or not a refresh token
            SessionRevokedError: Valid token that is no longer current
        """
        if not refresh_token:
            raise AuthenticationError("Refresh token is required")

        try:
            payload = SecurityUtils.decode_token(
                refresh_token,
                self.config.REFRESH_TOKEN_SECRET,
                expected_type=REFRESH_TOKEN_TYPE,
                algorithm=self.config.JWT_ALGORITHM,
            )
            user_id = UUID(str(payload["sub"]))
        except ValueError as e:
            raise AuthenticationError(str(e))

        presented = SecurityUtils.hash_token(refresh_token)
        record = await self.sessions.get(user_id)

        if record is None:
            await self._revoke(user_id, reason="no_session")
        if record.token_hash != presented:
            await self._revoke(user_id, reason="token_reuse")

        user = await self.users.get(user_id)
        if user is None:
            raise AuthenticationError("Invalid refresh token")

        next_refresh = self._issue_refresh_token(user_id, record.generation + 1)
        rotated = await self.sessions.rotate(
            user_id,
            expected_hash=presented,
            expected_generation=record.generation,
            new_hash=SecurityUtils.hash_token(next_refresh),
        )
        if not rotated:
            await self._revoke(user_id, reason="rotation_race")

        logger.info("Session rotated", user_id=str(user_id), generation=record.generation + 1)
        return TokenPair(self.issue_access_token(user), next_refresh)

    async def _revoke(self, user_id: UUID, reason: str) -> NoReturn:
        await self.sessions.delete(user_id)
        await self.session.commit()
        logger.warning("Session revoked", user_id=str(user_id), reason=reason)
        raise SessionRevokedError()

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCESS TOKEN VERIFICATION
    # ═══════════════════════════════════════════════════════════════════════════

    def verify_access_token(self, token: str) -> Principal:
        """
        Verify an access token and return the principal it names.

        Raises:
            AuthenticationError: Bad signature, expired, or not an access token
        """
        try:
            payload = SecurityUtils.decode_token(
                token,
                self.config.ACCESS_TOKEN_SECRET,
                expected_type=ACCESS_TOKEN_TYPE,
                algorithm=self.config.JWT_ALGORITHM,
            )
            return Principal(
                id=UUID(str(payload["sub"])),
                username=payload.get("username", ""),
                email=payload.get("email", ""),
                full_name=payload.get("full_name", ""),
            )
        except ValueError as e:
            raise AuthenticationError(str(e))
