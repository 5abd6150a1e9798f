from datetime import timedelta

from fastapi_jwt import JwtAccessBearer
from sqlmodel import select, func

from storefront.core.security import access_security, hash_password, verify_password
from storefront.models.user import User, UserRole, utc_now
from tests.helpers import auth_header, register, login


def count_users(db) -> int:
    return db.exec(select(func.count()).select_from(User)).one()


# === Password hashing ===

def test_hash_password_is_salted():
    first = hash_password("pw123456")
    second = hash_password("pw123456")

    assert first != second
    assert verify_password("pw123456", first)
    assert verify_password("pw123456", second)
    assert not verify_password("wrong", first)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("pw123456", "not-a-hash")


# === Register ===

def test_register_returns_token_and_public_user(client, db):
    body = register(client, "Alice", "alice@example.com")

    assert body["success"] is True
    assert body["token"]
    user = body["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert user["role"] == "user"
    assert user["is_active"] is True
    assert "password" not in user
    assert "password_hash" not in user

    stored = db.exec(select(User).where(User.email == "alice@example.com")).one()
    assert stored.password_hash != "pw123456"
    assert verify_password("pw123456", stored.password_hash)


def test_register_then_login_succeeds(client):
    register(client, "Alice", "alice@example.com")

    body = login(client, "alice@example.com")

    assert body["success"] is True
    assert body["user"]["email"] == "alice@example.com"
    assert "password_hash" not in body["user"]


def test_register_keeps_email_as_typed(client, db):
    registered = register(client, "Carol", "Carol@Example.COM")

    body = login(client, "Carol@Example.COM")

    assert registered["user"]["email"] == body["user"]["email"] == "Carol@Example.COM"
    assert db.exec(select(User).where(User.email == "Carol@Example.COM")).one()

    # case-sensitive as stored
    response = client.post(
        "/api/auth/login", json={"email": "carol@example.com", "password": "pw123456"}
    )
    assert response.status_code == 401


def test_register_duplicate_email_creates_nothing(client, db):
    register(client, "Alice", "alice@example.com")

    response = client.post(
        "/api/auth/register",
        json={"name": "Other Alice", "email": "alice@example.com", "password": "other-pass"},
    )

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "User already exists"}
    assert count_users(db) == 1


def test_register_requires_name_email_password(client, db):
    response = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "pw123456"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["message"] == "Name, email, and password are required"

    response = client.post(
        "/api/auth/register",
        json={"name": "   ", "email": "alice@example.com", "password": "pw123456"},
    )
    assert response.status_code == 400
    assert count_users(db) == 0


def test_register_cannot_choose_role(client, db):
    response = client.post(
        "/api/auth/register",
        json={"name": "Mallory", "email": "m@example.com", "password": "pw123456", "role": "admin"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert count_users(db) == 0


def test_register_rejects_invalid_email(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "not-an-email", "password": "pw123456"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_keeps_optional_profile_fields(client):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Alice",
            "email": "alice@example.com",
            "password": "pw123456",
            "phone": "+91 9876543210",
            "address": "Mumbai, Maharashtra, India",
        },
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["phone"] == "+91 9876543210"
    assert user["address"] == "Mumbai, Maharashtra, India"


# === Login ===

def test_login_records_sign_in(client, db):
    register(client, "Alice", "alice@example.com")

    login(client, "alice@example.com")
    body = login(client, "alice@example.com")

    assert body["user"]["login_count"] == 2
    assert body["user"]["last_login"] is not None
    stored = db.exec(select(User).where(User.email == "alice@example.com")).one()
    assert stored.login_count == 2


def test_timestamps_are_timezone_aware_utc():
    user = User(name="Alice", email="alice@example.com", password_hash="x")

    assert user.created_at.utcoffset() == timedelta(0)
    assert user.updated_at.utcoffset() == timedelta(0)
    assert utc_now().tzinfo is not None


def test_login_failures_are_indistinguishable(client):
    register(client, "Alice", "alice@example.com")

    wrong_password = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "pw123456"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "message": "Invalid credentials",
    }


def test_login_inactive_account_is_forbidden(client, db):
    register(client, "Alice", "alice@example.com")
    stored = db.exec(select(User).where(User.email == "alice@example.com")).one()
    stored.is_active = False
    db.add(stored)
    db.commit()

    response = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "pw123456"}
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Account is inactive"


# === Token verification ===

def test_profile_with_valid_token(client, alice):
    response = client.get("/api/user/profile", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["user"]["email"] == "alice@example.com"
    assert "password_hash" not in response.json()["user"]


def test_auth_me_matches_profile(client, alice):
    response = client.get("/api/auth/me", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["user"]["id"] == alice["user"]["id"]


def test_missing_token_is_unauthenticated(client):
    response = client.get("/api/user/profile")

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.json()["message"]


def test_malformed_token_is_unauthenticated(client):
    response = client.get("/api/user/profile", headers=auth_header("not.a.jwt"))

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_token_signed_with_other_key_is_unauthenticated(client, alice):
    forged = JwtAccessBearer(secret_key="some-other-secret").create_access_token(
        subject={"id": alice["user"]["id"], "role": "admin"}
    )

    response = client.get("/api/user/profile", headers=auth_header(forged))

    assert response.status_code == 401


def test_expired_token_is_unauthenticated(client, alice):
    expired = access_security.create_access_token(
        subject={"id": alice["user"]["id"], "role": "user"},
        expires_delta=timedelta(seconds=-60),
    )

    response = client.get("/api/user/profile", headers=auth_header(expired))

    assert response.status_code == 401


def test_token_of_deleted_user_is_unauthenticated(client, db, alice):
    stored = db.get(User, alice["user"]["id"])
    db.delete(stored)
    db.commit()

    response = client.get("/api/user/profile", headers=alice["headers"])

    assert response.status_code == 401


def test_token_of_deactivated_user_is_unauthenticated(client, db, alice):
    stored = db.get(User, alice["user"]["id"])
    stored.is_active = False
    db.add(stored)
    db.commit()

    response = client.get("/api/user/profile", headers=alice["headers"])

    assert response.status_code == 401


def test_admin_route_requires_admin_role(client, alice):
    response = client.get("/api/admin/dashboard", headers=alice["headers"])

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Not authorized as admin"}


# === Profile ===

def test_update_profile(client, alice):
    response = client.patch(
        "/api/user/profile",
        json={"name": "Alice Smith", "phone": "+1 555 0100"},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Alice Smith"
    assert user["phone"] == "+1 555 0100"
    assert user["role"] == "user"


def test_update_profile_cannot_change_role(client, alice, db):
    response = client.patch(
        "/api/user/profile", json={"role": "admin"}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert db.get(User, alice["user"]["id"]).role == UserRole.USER


def test_update_profile_rejects_blank_name(client, alice):
    response = client.patch("/api/user/profile", json={"name": ""}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Name cannot be empty"
