"""
Tests for identity tokens and user resolution.
"""
from datetime import timedelta
from app.core.security import create_identity_token, decode_identity_token
from app.models.user import User
from app.services.user_service import get_or_create_user, resolve_users


def test_token_round_trip_keeps_identity():
    """Test that a minted token decodes to the same identity."""
    token = create_identity_token("user_123", "Sam", "sam@example.com")
    payload = decode_identity_token(token)
    assert payload["sub"] == "user_123"
    assert payload["name"] == "Sam"
    assert payload["email"] == "sam@example.com"


def test_expired_token_is_rejected():
    """Test that expired tokens do not decode."""
    token = create_identity_token("user_123", expires_delta=timedelta(minutes=-5))
    assert decode_identity_token(token) is None


def test_missing_token_returns_401(client):
    """Test that API routes require a token."""
    response = client.get("/api/users/me")
    assert response.status_code == 401


def test_invalid_token_returns_401(client):
    """Test that a garbage token is rejected."""
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_me_creates_user_once(client, alice_headers, db_session):
    """Test that repeated requests resolve to the same local user."""
    first = client.get("/api/users/me", headers=alice_headers)
    second = client.get("/api/users/me", headers=alice_headers)
    assert first.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert first.json()["clerk_id"] == "user_alice"
    assert db_session.query(User).filter(User.clerk_id == "user_alice").count() == 1


def test_sync_fills_missing_profile(client):
    """Test that sync completes a profile the token did not carry."""
    headers = {"Authorization": f"Bearer {create_identity_token('user_carol')}"}
    response = client.post(
        "/api/users/sync",
        json={"name": "Carol", "email": "carol@example.com"},
        headers=headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Carol"
    assert response.json()["email"] == "carol@example.com"


def test_get_unknown_user_returns_404(client, alice_headers):
    """Test user lookup by a missing ID."""
    response = client.get("/api/users/999", headers=alice_headers)
    assert response.status_code == 404


def test_get_or_create_returns_existing_user(db_session):
    """Test that an existing identity is reused, keeping its profile."""
    existing = get_or_create_user("user_dan", db_session, name="Dan")
    again = get_or_create_user("user_dan", db_session, name="Someone else")
    assert again.id == existing.id
    assert again.name == "Dan"


def test_resolve_users_keeps_order(db_session):
    """Test resolving several identities at once."""
    users = resolve_users(["user_x", "user_y", "user_x"], db_session)
    assert [user.clerk_id for user in users] == ["user_x", "user_y", "user_x"]
    assert users[0].id == users[2].id


def test_sync_rejects_malformed_email(client, alice_headers):
    response = client.post("/api/users/sync", json={"email": "not-an-email"}, headers=alice_headers)
    assert response.status_code == 422
