"""
Tests for authentication endpoints.
"""
from datetime import timedelta
from moodbuddy.core.security import create_access_token, decode_access_token, hash_password, check_password


def test_register(register):
    """Test user registration."""
    response = register(username="testuser", email="Test@Example.com")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["username"] == "testuser"
    assert user["email"] == "test@example.com"
    assert user["streak"] == {"current": 0, "longest": 0, "last_entry_date": None}
    assert user["settings"]["theme"] == "auto"
    assert user["profile"]["gender"] == "prefer-not-to-say"
    assert body["data"]["access_token"]
    assert "password" not in response.text
    assert "hashed_password" not in response.text


def test_register_duplicate_username(register):
    """Test that a taken username is rejected."""
    assert register(username="taken", email="first@example.com").status_code == 201
    response = register(username="taken", email="second@example.com")
    assert response.status_code == 409
    assert response.json()["success"] is False
    assert response.json()["message"] == "Username already exists"


def test_register_duplicate_email(register):
    """Test that a taken email is rejected regardless of case."""
    assert register(username="first", email="same@example.com").status_code == 201
    response = register(username="second", email="SAME@example.com")
    assert response.status_code == 409
    assert response.json()["message"] == "Email already exists"


def test_register_validation(client):
    """Test field-level validation messages."""
    response = client.post(
        "/api/auth/register",
        json={"username": "a!", "email": "not-an-email", "password": "123"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert fields == {"username", "email", "password"}
    messages = {error["field"]: error["message"] for error in body["errors"]}
    assert messages["password"] == "Password must be at least 6 characters"


def test_login(client, register):
    """Test user login."""
    register(username="testuser2", email="test2@example.com")

    response = client.post(
        "/api/auth/login",
        json={"email": "test2@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["last_login"] is not None


def test_login_invalid_credentials(client, register):
    """Test login with invalid credentials."""
    register(username="someone")

    unknown = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "wrongpassword"}
    )
    assert unknown.status_code == 401

    wrong = client.post(
        "/api/auth/login",
        json={"email": "someone@example.com", "password": "wrongpassword"}
    )
    assert wrong.status_code == 401
    assert wrong.json()["success"] is False


def test_me(client, auth_headers):
    """Test fetching the current profile."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "alice"
    assert "hashed_password" not in response.text


def test_me_requires_valid_token(client, register):
    """Test missing, malformed and expired tokens."""
    assert client.get("/api/auth/me").status_code == 401

    bad = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401
    assert bad.json()["success"] is False

    user_id = register().json()["data"]["user"]["id"]
    expired = create_access_token(user_id, expires_delta=timedelta(seconds=-1))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


def test_update_profile(client, auth_headers):
    """Test partial profile and settings update."""
    response = client.put(
        "/api/auth/profile",
        headers=auth_headers,
        json={
            "profile": {"first_name": "Alice", "gender": "female"},
            "settings": {"theme": "dark", "reminder_time": "07:30"}
        }
    )
    assert response.status_code == 200
    user = response.json()["data"]
    assert user["profile"]["first_name"] == "Alice"
    assert user["profile"]["gender"] == "female"
    assert user["settings"]["theme"] == "dark"
    assert user["settings"]["reminder_time"] == "07:30"
    # Untouched settings keep their defaults
    assert user["settings"]["daily_reminder"] is True
    assert user["settings"]["week_starts_on"] == "sunday"


def test_update_profile_validation(client, auth_headers):
    """Test enum and length constraints on profile updates."""
    response = client.put(
        "/api/auth/profile",
        headers=auth_headers,
        json={"profile": {"last_name": "x" * 51}, "settings": {"theme": "neon"}}
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"profile.last_name", "settings.theme"}


def test_change_password(client, auth_headers):
    """Test password rotation."""
    wrong = client.put(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": "nope-nope", "new_password": "newsecret"}
    )
    assert wrong.status_code == 401

    response = client.put(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": "secret123", "new_password": "newsecret"}
    )
    assert response.status_code == 200

    old = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "newsecret"})
    assert new.status_code == 200


def test_deactivate(client, auth_headers):
    """Test that a deactivated account can no longer authenticate."""
    response = client.put("/api/auth/deactivate", headers=auth_headers)
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert login.status_code == 401

    # Tokens issued before deactivation stop working too
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 401


def test_password_hashing():
    """Test hashing, including passphrases past bcrypt's 72-byte limit."""
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert check_password("secret123", hashed)
    assert not check_password("secret124", hashed)

    long_phrase = "a" * 80
    assert not check_password("a" * 72, hash_password(long_phrase))


def test_access_token_carries_user_id():
    """Test that tokens resolve back to their user id and forgeries do not."""
    assert decode_access_token(create_access_token(42)) == 42
    assert decode_access_token(create_access_token(42, expires_delta=timedelta(seconds=-1))) is None
    assert decode_access_token("not-a-token") is None
