from datetime import timedelta

from jose import jwt

from readhub.config import settings
from readhub.models.user import User
from readhub.models.enums import Role
from readhub.services.auth import create_access_token, decode_access_token, verify_password
from tests.helpers import auth_header, login, register


def test_register(client, db_session):
    response = register(client, "new@example.com")
    assert response.status_code == 200
    assert response.json()["message"] == "User registered successfully!"

    user = db_session.query(User).filter(User.email == "new@example.com").one()
    assert user.role == Role.BORROWER
    assert user.password_hash != "password123"
    assert verify_password("password123", user.password_hash)


def test_register_duplicate_email(client, db_session):
    assert register(client, "dup@example.com").status_code == 200
    response = register(client, "dup@example.com", first_name="Other")
    assert response.status_code == 400
    assert "already in use" in response.json()["detail"]
    assert db_session.query(User).filter(User.email == "dup@example.com").count() == 1


def test_register_rejects_malformed_payload(client):
    response = client.post(
        "/api/auth/register",
        json={"firstName": "A", "lastName": "B", "email": "not-an-email", "password": "x"}
    )
    assert response.status_code == 400


def test_login_returns_token_for_email(client):
    register(client, "login@example.com")
    token = login(client, "login@example.com")

    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert payload["sub"] == "login@example.com"
    assert payload["role"] == "BORROWER"
    assert "exp" in payload


def test_login_wrong_password(client):
    register(client, "wrong@example.com")
    response = client.post("/api/auth/login", json={"email": "wrong@example.com", "password": "nope1234"})
    assert response.status_code == 401


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "password123"})
    assert response.status_code == 401


def test_me(client, borrower_headers):
    response = client.get("/api/auth/me", headers=borrower_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "alice@x.com"
    assert "password" not in response.json()


def test_missing_token_rejected(client):
    response = client.get("/api/users/profile")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_expired_token_rejected(client):
    register(client, "late@example.com")
    token = create_access_token(
        {"sub": "late@example.com", "role": "BORROWER", "uid": "1"},
        expires_delta=timedelta(seconds=-30)
    )
    response = client.get("/api/users/profile", headers=auth_header(token))
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_token_with_wrong_signature_rejected(client):
    token = jwt.encode(
        {"sub": "mallory@example.com", "role": "ADMIN", "uid": "1"},
        "not-the-secret",
        algorithm="HS256"
    )
    response = client.get("/api/users/profile", headers=auth_header(token))
    assert response.status_code == 401


def test_bad_token_fails_public_endpoint(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "a@example.com", "password": "password123"},
        headers=auth_header("garbage")
    )
    assert response.status_code == 401


def test_decode_access_token_round_trip():
    token = create_access_token({"sub": "bob@example.com", "role": "ADMIN", "uid": "7"})
    caller = decode_access_token(token)
    assert caller.email == "bob@example.com"
    assert caller.role == Role.ADMIN
    assert caller.user_id == 7


def test_health_is_public(client):
    assert client.get("/api/health").json() == {"status": "healthy"}


def test_token_of_deleted_user_rejected(client, borrower_headers):
    assert client.delete("/api/users/profile", headers=borrower_headers).status_code == 200
    response = client.get("/api/auth/me", headers=borrower_headers)
    assert response.status_code == 401


def test_old_token_cannot_reach_reregistered_email(client, borrower_headers):
    response = client.put(
        "/api/users/profile",
        json={"firstName": "Alice", "lastName": "Reader", "email": "alice@new.com"},
        headers=borrower_headers
    )
    assert response.status_code == 200
    assert register(client, "alice@x.com", first_name="Mallory").status_code == 200

    assert client.get("/api/users/profile", headers=borrower_headers).status_code == 401
    assert client.put(
        "/api/users/profile",
        json={"firstName": "Owned", "lastName": "Reader", "email": "alice@x.com"},
        headers=borrower_headers
    ).status_code == 401
    assert client.delete("/api/users/profile", headers=borrower_headers).status_code == 401

    mallory = auth_header(login(client, "alice@x.com"))
    assert client.get("/api/users/profile", headers=mallory).json()["firstName"] == "Mallory"


def test_token_with_unknown_user_id_rejected(client):
    register(client, "zoe@example.com")
    token = create_access_token({"sub": "zoe@example.com", "role": "BORROWER", "uid": "999"})
    assert client.get("/api/users/profile", headers=auth_header(token)).status_code == 401


def test_role_comes_from_stored_user(client, db_session):
    register(client, "sneaky@example.com")
    user = db_session.query(User).filter(User.email == "sneaky@example.com").one()
    token = create_access_token({"sub": user.email, "role": "ADMIN", "uid": str(user.user_id)})
    response = client.post(
        "/api/books",
        json={"title": "Emma", "author": "Jane Austen", "isbn": "978-1", "category": "Classic"},
        headers=auth_header(token)
    )
    assert response.status_code == 403
