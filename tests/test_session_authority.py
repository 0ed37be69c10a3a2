"""Login, refresh rotation with reuse detection, logout."""

from types import SimpleNamespace

import pytest
from sqlalchemy import insert

from vidshare.shared.core.exceptions import (
    AuthenticationError,
    SessionRevokedError,
    ValidationError,
)
from vidshare.shared.models import UserSession, utcnow
from vidshare.shared.repositories import SessionRepository
from vidshare.shared.services import SessionAuthority
from vidshare.shared.utils.security import SecurityUtils

from tests.factories import PASSWORD


@pytest.fixture
def authority(session, config) -> SessionAuthority:
    return SessionAuthority(session, config)


async def test_login_by_username_or_email(authority, alice):
    user, tokens = await authority.login(password=PASSWORD, username="alice")
    assert user.id == alice.id
    assert tokens.access_token and tokens.refresh_token

    user, _ = await authority.login(password=PASSWORD, email="ALICE@example.com")
    assert user.id == alice.id


async def test_login_stores_only_a_digest(session, authority, alice):
    _, tokens = await authority.login(password=PASSWORD, username="alice")

    record = await SessionRepository(session).get(alice.id)
    assert record.generation == 0
    assert record.token_hash == SecurityUtils.hash_token(tokens.refresh_token)
    assert record.token_hash != tokens.refresh_token


async def test_bad_credentials(authority, alice):
    with pytest.raises(AuthenticationError):
        await authority.login(password="wrong", username="alice")
    with pytest.raises(AuthenticationError):
        await authority.login(password=PASSWORD, username="nobody")
    with pytest.raises(ValidationError):
        await authority.login(password=PASSWORD)


async def test_refresh_rotates(session, authority, alice):
    _, r0 = await authority.login(password=PASSWORD, username="alice")

    r1 = await authority.refresh(r0.refresh_token)
    r2 = await authority.refresh(r1.refresh_token)

    assert len({r0.refresh_token, r1.refresh_token, r2.refresh_token}) == 3
    record = await SessionRepository(session).get(alice.id)
    assert record.generation == 2
    assert record.rotated_at is not None


async def test_reused_refresh_token_revokes_the_whole_session(session, authority, alice):
    _, r0 = await authority.login(password=PASSWORD, username="alice")
    r1 = await authority.refresh(r0.refresh_token)

    with pytest.raises(SessionRevokedError):
        await authority.refresh(r0.refresh_token)

    # The legitimate successor dies with the session
    with pytest.raises(SessionRevokedError):
        await authority.refresh(r1.refresh_token)
    assert await SessionRepository(session).get(alice.id) is None


async def test_new_login_invalidates_previous_refresh_tokens(authority, alice):
    _, first = await authority.login(password=PASSWORD, username="alice")
    _, second = await authority.login(password=PASSWORD, username="alice")

    with pytest.raises(SessionRevokedError):
        await authority.refresh(first.refresh_token)
    with pytest.raises(SessionRevokedError):
        await authority.refresh(second.refresh_token)


async def test_logout_is_idempotent_and_ends_refresh(authority, alice):
    _, tokens = await authority.login(password=PASSWORD, username="alice")

    await authority.logout(alice.id)
    await authority.logout(alice.id)

    with pytest.raises(SessionRevokedError):
        await authority.refresh(tokens.refresh_token)


@pytest.mark.parametrize("token", ["", "not-a-jwt"])
async def test_malformed_refresh_token_is_unauthorized_not_revoked(authority, alice, token):
    with pytest.raises(AuthenticationError) as excinfo:
        await authority.refresh(token)
    assert not isinstance(excinfo.value, SessionRevokedError)


async def test_access_token_cannot_refresh(authority, alice):
    _, tokens = await authority.login(password=PASSWORD, username="alice")

    with pytest.raises(AuthenticationError) as excinfo:
        await authority.refresh(tokens.access_token)
    assert not isinstance(excinfo.value, SessionRevokedError)


async def test_verify_access_token(authority, alice):
    _, tokens = await authority.login(password=PASSWORD, username="alice")

    principal = authority.verify_access_token(tokens.access_token)
    assert principal.id == alice.id
    assert principal.username == "alice"

    with pytest.raises(AuthenticationError):
        authority.verify_access_token(tokens.refresh_token)
    with pytest.raises(AuthenticationError):
        authority.verify_access_token(tokens.access_token + "x")


async def test_losing_a_rotation_race_revokes_the_session(session, authority, monkeypatch, alice):
    _, tokens = await authority.login(password=PASSWORD, username="alice")
    read_record = authority.sessions.get

    async def _read_then_lose(user_id):
        record = await read_record(user_id)
        seen = SimpleNamespace(token_hash=record.token_hash, generation=record.generation)
        # A concurrent refresh with the same token rotates first
        await authority.sessions.rotate(user_id, record.token_hash, record.generation, "winner-hash")
        return seen

    monkeypatch.setattr(authority.sessions, "get", _read_then_lose)

    with pytest.raises(SessionRevokedError):
        await authority.refresh(tokens.refresh_token)
    assert await SessionRepository(session).get(alice.id) is None


async def test_concurrent_first_logins_keep_the_last_record(session, monkeypatch, alice):
    repo = SessionRepository(session)
    read_record = repo.get
    await session.execute(
        insert(UserSession).values(
            user_id=alice.id, token_hash="other-login", generation=3, issued_at=utcnow()
        )
    )
    reads = []

    async def _missing_on_first_read(user_id):
        reads.append(user_id)
        if len(reads) == 1:
            return None
        return await read_record(user_id)

    monkeypatch.setattr(repo, "get", _missing_on_first_read)

    await repo.replace(alice.id, "this-login")

    record = await read_record(alice.id)
    assert (record.token_hash, record.generation, record.rotated_at) == ("this-login", 0, None)
