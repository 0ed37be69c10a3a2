"""End-to-end requests through the FastAPI application."""

import uuid

import pytest

from vidshare.shared.models.enums import MediaKind


API = "/api/v1"
PASSWORD = "s3cret-password"


async def signup(client, username: str) -> dict:
    """Register over HTTP and log in; returns the user body plus auth headers."""
    response = await client.post(
        f"{API}/users/register",
        data={
            "username": username,
            "email": f"{username}@example.com",
            "full_name": username.title(),
            "password": PASSWORD,
        },
        files={"avatar": ("avatar.png", b"\x89PNG avatar", "image/png")},
    )
    assert response.status_code == 201, response.text

    response = await client.post(f"{API}/users/login", json={"username": username, "password": PASSWORD})
    assert response.status_code == 200, response.text
    body = response.json()
    return {
        "id": body["user"]["id"],
        "refresh_token": body["refresh_token"],
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }


async def publish(client, user: dict, title: str, *, published: bool = True) -> str:
    response = await client.post(
        f"{API}/videos",
        headers=user["headers"],
        data={"title": title, "description": f"About {title}", "duration": "42.5"},
        files={
            "video_file": ("clip.mp4", b"video bytes", "video/mp4"),
            "thumbnail": ("thumb.png", b"thumb bytes", "image/png"),
        },
    )
    assert response.status_code == 201, response.text
    video_id = response.json()["id"]
    if published:
        response = await client.patch(f"{API}/videos/{video_id}/publish", headers=user["headers"])
        assert response.json()["is_published"] is True
    return video_id


def error_code(response) -> str:
    return response.json()["error"]["code"]


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH
# ═══════════════════════════════════════════════════════════════════════════════


async def test_health_and_liveness(client):
    health = await client.get("/health")
    live = await client.get("/live")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert live.json() == {"status": "alive"}


async def test_readiness_reports_database_outage(client, monkeypatch):
    async def database_down() -> bool:
        return False

    monkeypatch.setattr("vidshare.api.handlers.health_handler.check_database", database_down)

    response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["checks"] == {"database": False}


async def test_responses_carry_request_id(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


async def test_register_login_and_current_user(client, blob_store):
    user = await signup(client, "erin")

    response = await client.get(f"{API}/users/current-user", headers=user["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "erin"
    assert body["avatar_url"].startswith("https://blobs.test/avatar/")
    assert "password_hash" not in body
    assert len(blob_store.objects) == 1


async def test_register_without_avatar_is_rejected(client):
    response = await client.post(
        f"{API}/users/register",
        data={"username": "erin", "email": "erin@example.com", "full_name": "Erin", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert error_code(response) == "VALIDATION_ERROR"


async def test_duplicate_registration_conflicts(client):
    await signup(client, "erin")

    response = await client.post(
        f"{API}/users/register",
        data={"username": "ERIN", "email": "other@example.com", "full_name": "Erin", "password": PASSWORD},
        files={"avatar": ("avatar.png", b"avatar", "image/png")},
    )

    assert response.status_code == 409


async def test_failed_upload_surfaces_as_bad_gateway(client, blob_store):
    blob_store.fail_on.add(MediaKind.AVATAR)

    response = await client.post(
        f"{API}/users/register",
        data={"username": "erin", "email": "erin@example.com", "full_name": "Erin", "password": PASSWORD},
        files={"avatar": ("avatar.png", b"avatar", "image/png")},
    )

    assert response.status_code == 502
    assert error_code(response) == "UPSTREAM_FAILURE"


async def test_login_requires_username_or_email(client):
    response = await client.post(f"{API}/users/login", json={"password": PASSWORD})

    assert response.status_code == 400


async def test_wrong_password_is_unauthorized(client):
    await signup(client, "erin")

    response = await client.post(f"{API}/users/login", json={"email": "erin@example.com", "password": "nope"})

    assert response.status_code == 401
    assert error_code(response) == "AUTHENTICATION_ERROR"


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-token"}, {"Authorization": "Basic abc"}],
)
async def test_protected_endpoints_require_access_token(client, headers):
    response = await client.get(f"{API}/users/current-user", headers=headers)

    assert response.status_code == 401


async def test_refresh_rotation_and_reuse(client):
    user = await signup(client, "erin")
    first = user["refresh_token"]

    rotated = await client.post(f"{API}/users/refresh-token", json={"refresh_token": first})
    assert rotated.status_code == 200
    second = rotated.json()["refresh_token"]
    assert second != first

    replayed = await client.post(f"{API}/users/refresh-token", json={"refresh_token": first})
    assert replayed.status_code == 401
    assert error_code(replayed) == "SESSION_REVOKED"

    # The replay destroyed the session, so the legitimate token is dead too
    after = await client.post(f"{API}/users/refresh-token", json={"refresh_token": second})
    assert after.status_code == 401
    assert error_code(after) == "SESSION_REVOKED"


async def test_logout_ends_refresh(client):
    user = await signup(client, "erin")

    response = await client.post(f"{API}/users/logout", headers=user["headers"])
    assert response.status_code == 200

    response = await client.post(f"{API}/users/refresh-token", json={"refresh_token": user["refresh_token"]})
    assert response.status_code == 401


async def test_change_password(client):
    user = await signup(client, "erin")

    wrong = await client.post(
        f"{API}/users/change-password",
        headers=user["headers"],
        json={"old_password": "nope", "new_password": "another-password", "confirm_password": "another-password"},
    )
    changed = await client.post(
        f"{API}/users/change-password",
        headers=user["headers"],
        json={"old_password": PASSWORD, "new_password": "another-password", "confirm_password": "another-password"},
    )
    login = await client.post(f"{API}/users/login", json={"username": "erin", "password": "another-password"})

    assert wrong.status_code == 401
    assert changed.status_code == 200
    assert login.status_code == 200


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTIFIERS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_malformed_id_differs_from_missing_id(client):
    malformed = await client.get(f"{API}/videos/not-a-uuid")
    missing = await client.get(f"{API}/videos/{uuid.uuid4()}")

    assert malformed.status_code == 400
    assert error_code(malformed) == "INVALID_IDENTIFIER"
    assert missing.status_code == 404
    assert error_code(missing) == "NOT_FOUND"


# ═══════════════════════════════════════════════════════════════════════════════
# VIDEOS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_draft_is_visible_only_to_owner(client):
    owner = await signup(client, "erin")
    other = await signup(client, "finn")
    video_id = await publish(client, owner, "Draft", published=False)

    as_owner = await client.get(f"{API}/videos/{video_id}", headers=owner["headers"])
    as_other = await client.get(f"{API}/videos/{video_id}", headers=other["headers"])
    anonymous = await client.get(f"{API}/videos/{video_id}")

    assert as_owner.status_code == 200
    assert as_other.status_code == 404
    assert anonymous.status_code == 404


async def test_watching_video_returns_viewer_relative_view(client):
    owner = await signup(client, "erin")
    viewer = await signup(client, "finn")
    video_id = await publish(client, owner, "Hello")

    await client.post(f"{API}/videos/{video_id}/like", headers=viewer["headers"])
    await client.post(f"{API}/subscriptions/c/{owner['id']}", headers=viewer["headers"])
    response = await client.get(f"{API}/videos/{video_id}", headers=viewer["headers"])

    body = response.json()
    assert body["views"] == 1
    assert body["duration"] == 42.5
    assert body["likes_count"] == 1
    assert body["is_liked"] is True
    assert body["owner"]["subscribers_count"] == 1
    assert body["owner"]["is_subscribed"] is True

    history = await client.get(f"{API}/users/history", headers=viewer["headers"])
    assert [item["id"] for item in history.json()["items"]] == [video_id]


async def test_listing_clamps_pagination(client):
    owner = await signup(client, "erin")
    for title in ("One", "Two", "Three"):
        await publish(client, owner, title)
    await publish(client, owner, "Hidden draft", published=False)

    response = await client.get(f"{API}/videos", params={"page": 0, "limit": 1000})

    body = response.json()
    assert body["page"] == 1
    assert body["limit"] == 100
    assert body["total_items"] == 3
    assert body["total_pages"] == 1
    assert body["has_next_page"] is False


async def test_listing_paginates_and_sorts(client):
    owner = await signup(client, "erin")
    for title in ("Bravo", "Alpha", "Charlie"):
        await publish(client, owner, title)

    response = await client.get(
        f"{API}/videos",
        params={"sort_by": "title", "sort_type": "asc", "limit": 2, "page": 2, "user_id": owner["id"]},
    )

    body = response.json()
    assert [item["title"] for item in body["items"]] == ["Charlie"]
    assert body["total_pages"] == 2
    assert body["prev_page"] == 1
    assert body["next_page"] is None


async def test_listing_rejects_unknown_sort_field(client):
    response = await client.get(f"{API}/videos", params={"sort_by": "password_hash"})

    assert response.status_code == 400


async def test_only_owner_can_modify_video(client):
    owner = await signup(client, "erin")
    other = await signup(client, "finn")
    video_id = await publish(client, owner, "Mine")

    patched = await client.patch(f"{API}/videos/{video_id}", headers=other["headers"], data={"title": "Theirs"})
    deleted = await client.delete(f"{API}/videos/{video_id}", headers=other["headers"])
    toggled = await client.patch(f"{API}/videos/{video_id}/publish", headers=other["headers"])

    assert patched.status_code == 403
    assert deleted.status_code == 403
    assert toggled.status_code == 403
    assert error_code(patched) == "AUTHORIZATION_ERROR"


async def test_delete_video_removes_media(client, blob_store):
    owner = await signup(client, "erin")
    video_id = await publish(client, owner, "Short lived")

    response = await client.delete(f"{API}/videos/{video_id}", headers=owner["headers"])

    assert response.status_code == 200
    assert len(blob_store.deleted) == 2
    assert (await client.get(f"{API}/videos/{video_id}")).status_code == 404


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS, LIKES, SUBSCRIPTIONS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_comment_flow(client):
    owner = await signup(client, "erin")
    other = await signup(client, "finn")
    video_id = await publish(client, owner, "Talk")

    created = await client.post(f"{API}/comments/{video_id}", headers=other["headers"], json={"content": "First!"})
    assert created.status_code == 201
    comment_id = created.json()["id"]

    liked = await client.post(f"{API}/comments/c/{comment_id}/like", headers=owner["headers"])
    assert liked.json() == {"active": True}

    page = await client.get(f"{API}/comments/{video_id}", headers=owner["headers"])
    item = page.json()["items"][0]
    assert item["content"] == "First!"
    assert item["owner"]["username"] == "finn"
    assert item["likes_count"] == 1
    assert item["is_liked"] is True

    forbidden = await client.patch(
        f"{API}/comments/c/{comment_id}", headers=owner["headers"], json={"content": "edited"}
    )
    assert forbidden.status_code == 403

    edited = await client.patch(
        f"{API}/comments/c/{comment_id}", headers=other["headers"], json={"content": "edited"}
    )
    assert edited.json()["content"] == "edited"


async def test_empty_comment_is_rejected(client):
    owner = await signup(client, "erin")
    video_id = await publish(client, owner, "Talk")

    response = await client.post(f"{API}/comments/{video_id}", headers=owner["headers"], json={"content": ""})

    assert response.status_code == 400
    assert error_code(response) == "VALIDATION_ERROR"


async def test_like_toggles_back_and_forth(client):
    owner = await signup(client, "erin")
    video_id = await publish(client, owner, "Likeable")

    first = await client.post(f"{API}/videos/{video_id}/like", headers=owner["headers"])
    liked = await client.get(f"{API}/videos/liked", headers=owner["headers"])
    second = await client.post(f"{API}/videos/{video_id}/like", headers=owner["headers"])

    assert first.json() == {"active": True}
    assert [item["id"] for item in liked.json()["items"]] == [video_id]
    assert second.json() == {"active": False}


async def test_self_subscription_is_rejected(client):
    user = await signup(client, "erin")

    response = await client.post(f"{API}/subscriptions/c/{user['id']}", headers=user["headers"])

    assert response.status_code == 400


async def test_channel_profile(client):
    owner = await signup(client, "erin")
    fan = await signup(client, "finn")
    await client.post(f"{API}/subscriptions/c/{owner['id']}", headers=fan["headers"])

    as_fan = await client.get(f"{API}/users/c/erin", headers=fan["headers"])
    anonymous = await client.get(f"{API}/users/c/ERIN")
    missing = await client.get(f"{API}/users/c/nobody")

    assert as_fan.json()["subscribers_count"] == 1
    assert as_fan.json()["is_subscribed"] is True
    assert anonymous.json()["is_subscribed"] is False
    assert missing.status_code == 404

    channels = await client.get(f"{API}/subscriptions/u/{fan['id']}/channels")
    assert [item["username"] for item in channels.json()["items"]] == ["erin"]


# ═══════════════════════════════════════════════════════════════════════════════
# PLAYLISTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_playlist_flow(client):
    owner = await signup(client, "erin")
    video_id = await publish(client, owner, "Track")

    created = await client.post(
        f"{API}/playlists", headers=owner["headers"], json={"name": "Favourites", "description": "best"}
    )
    assert created.status_code == 201
    playlist_id = created.json()["id"]

    added = await client.post(f"{API}/playlists/{playlist_id}/videos/{video_id}", headers=owner["headers"])
    assert [item["id"] for item in added.json()["videos"]["items"]] == [video_id]

    again = await client.post(f"{API}/playlists/{playlist_id}/videos/{video_id}", headers=owner["headers"])
    assert again.status_code == 409

    listed = await client.get(f"{API}/users/{owner['id']}/playlists")
    assert listed.json()["items"][0]["videos_count"] == 1

    removed = await client.delete(f"{API}/playlists/{playlist_id}/videos/{video_id}", headers=owner["headers"])
    assert removed.json()["videos"]["total_items"] == 0
