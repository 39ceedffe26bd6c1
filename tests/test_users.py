from readhub.models.transaction import Transaction
from readhub.models.user import User
from tests.helpers import login, register


def test_get_profile(client, borrower_headers):
    response = client.get("/api/users/profile", headers=borrower_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["firstName"] == "Alice"
    assert body["lastName"] == "Reader"
    assert body["email"] == "alice@x.com"
    assert set(body) == {"id", "firstName", "lastName", "email"}


def test_get_profile_twice_is_identical(client, borrower_headers):
    first = client.get("/api/users/profile", headers=borrower_headers).json()
    second = client.get("/api/users/profile", headers=borrower_headers).json()
    assert first == second


def test_update_profile(client, borrower_headers):
    response = client.put(
        "/api/users/profile",
        json={"firstName": "Alicia", "lastName": "Reads", "email": "alice@x.com"},
        headers=borrower_headers
    )
    assert response.status_code == 200
    assert response.json()["firstName"] == "Alicia"
    assert client.get("/api/users/profile", headers=borrower_headers).json()["lastName"] == "Reads"


def test_update_profile_email(client, borrower_headers):
    response = client.put(
        "/api/users/profile",
        json={"firstName": "Alice", "lastName": "Reader", "email": "alice@y.com"},
        headers=borrower_headers
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice@y.com"
    # Tokens issued for the old email stop working
    assert client.get("/api/users/profile", headers=borrower_headers).status_code == 401
    assert login(client, "alice@y.com", password="pw1234")


def test_update_profile_email_taken(client, borrower_headers, db_session):
    register(client, "bob@x.com")
    response = client.put(
        "/api/users/profile",
        json={"firstName": "Alice", "lastName": "Reader", "email": "bob@x.com"},
        headers=borrower_headers
    )
    assert response.status_code == 400
    assert client.get("/api/users/profile", headers=borrower_headers).json()["email"] == "alice@x.com"
    assert db_session.query(User).filter(User.email == "bob@x.com").count() == 1


def test_update_profile_validation(client, borrower_headers):
    response = client.put(
        "/api/users/profile",
        json={"firstName": "", "lastName": "Reader", "email": "alice@x.com"},
        headers=borrower_headers
    )
    assert response.status_code == 400


def test_delete_profile(client, borrower_headers):
    response = client.delete("/api/users/profile", headers=borrower_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "User profile deleted successfully."
    assert client.get("/api/users/profile", headers=borrower_headers).status_code == 401
    assert client.delete("/api/users/profile", headers=borrower_headers).status_code == 401


def test_delete_profile_with_open_transaction(client, borrower_headers, book):
    client.post("/api/transactions", json={"bookId": book["id"]}, headers=borrower_headers)
    response = client.delete("/api/users/profile", headers=borrower_headers)
    assert response.status_code == 400
    assert client.get("/api/users/profile", headers=borrower_headers).status_code == 200


def test_delete_profile_removes_closed_history(client, borrower_headers, admin_headers, book, db_session):
    created = client.post("/api/transactions", json={"bookId": book["id"]}, headers=borrower_headers).json()
    client.post(f"/api/transactions/{created['id']}/reject", headers=admin_headers)

    assert client.delete("/api/users/profile", headers=borrower_headers).status_code == 200
    assert db_session.query(Transaction).count() == 0


def test_admin_can_read_own_profile(client, admin_headers):
    response = client.get("/api/users/profile", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "admin@readhub.com"
