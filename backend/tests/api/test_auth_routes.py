"""Auth Routes — sign-up, sign-in, sign-out and bearer-token handling.

Invariants:
    - Sign-up returns 201 with a redacted user; conflicts are 409
    - Sign-in failures are one generic 401
    - Missing/invalid tokens are 401 with WWW-Authenticate: Bearer
"""

from huddle.api.dependencies import get_token_service
from huddle.config import get_settings
from huddle.services.token_service import TokenService


async def test_sign_up_returns_user_without_credential(client, sign_up):
    body = await sign_up("alice")
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert body["online"] is False
    assert "credential" not in body
    assert "password" not in body


async def test_sign_up_duplicate_username(client, sign_up):
    await sign_up("alice")
    res = await client.post("/api/v1/auth/signup", json={
        "username": "alice", "email": "alice@example.com", "password": "secret-pw",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "USERNAME_TAKEN"


async def test_sign_up_duplicate_email(client, sign_up):
    await sign_up("alice")
    res = await client.post("/api/v1/auth/signup", json={
        "username": "bob", "email": "alice@example.com", "password": "secret-pw",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "EMAIL_TAKEN"


async def test_sign_up_invalid_body(client):
    res = await client.post("/api/v1/auth/signup", json={
        "username": "al", "email": "nope", "password": "x",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_sign_in_returns_token_and_online_user(client, sign_up):
    await sign_up("alice")
    res = await client.post("/api/v1/auth/signin", json={
        "username": "alice", "password": "secret-pw",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "Bearer"
    assert body["expires_in"] == 24 * 60 * 60
    assert body["user"]["online"] is True
    assert get_token_service().validate(body["access_token"]) == "alice"


async def test_sign_in_failures_are_indistinguishable(client, sign_up):
    await sign_up("alice")
    wrong = await client.post("/api/v1/auth/signin", json={
        "username": "alice", "password": "wrong-pw",
    })
    unknown = await client.post("/api/v1/auth/signin", json={
        "username": "nobody", "password": "wrong-pw",
    })
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["error"]["code"] == unknown.json()["error"]["code"]
    assert wrong.json()["error"]["message"] == unknown.json()["error"]["message"]


async def test_sign_out_marks_user_offline(client, auth_headers):
    headers = await auth_headers("alice")
    res = await client.post("/api/v1/auth/signout", headers=headers)
    assert res.status_code == 200
    assert res.json()["message"] == "User signed out successfully"

    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["online"] is False


# ─── bearer token ────────────────────────────────────────────────

async def test_missing_token_is_401(client):
    res = await client.get("/api/v1/channels")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_garbage_token_is_401(client):
    res = await client.get(
        "/api/v1/channels", headers={"Authorization": "Bearer garbage"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_token_for_deleted_or_unknown_user_is_401(client):
    token = get_token_service().issue("ghost")
    res = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_expired_token_is_401(client, sign_up, clock):
    await sign_up("alice")
    expired = TokenService(get_settings().jwt_secret_key, clock=clock).issue("alice")
    res = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {expired}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_EXPIRED"


# ─── input normalization ─────────────────────────────────────────

async def test_sign_in_with_padded_username(client):
    res = await client.post("/api/v1/auth/signup", json={
        "username": " alice ", "email": "alice@example.com", "password": "secret-pw",
    })
    assert res.json()["username"] == "alice"
    res = await client.post("/api/v1/auth/signin", json={
        "username": " alice ", "password": "secret-pw",
    })
    assert res.status_code == 200
    assert res.json()["user"]["username"] == "alice"


async def test_sign_up_password_over_72_bytes_is_400(client):
    res = await client.post("/api/v1/auth/signup", json={
        "username": "alice", "email": "alice@example.com", "password": "p" * 73,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
