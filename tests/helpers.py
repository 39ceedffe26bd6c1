def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email, password="password123", first_name="Test", last_name="User"):
    return client.post(
        "/api/auth/register",
        json={"firstName": first_name, "lastName": last_name, "email": email, "password": password}
    )


def login(client, email, password="password123"):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]
