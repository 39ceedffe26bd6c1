import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from readhub.database import Base, build_engine, get_db
from readhub.main import app
from readhub.services.auth import ensure_admin
from tests.helpers import auth_header, login, register

ADMIN_EMAIL = "admin@readhub.com"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture(scope="function")
def session_factory():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def borrower_headers(client):
    register(client, "alice@x.com", password="pw1234", first_name="Alice", last_name="Reader")
    return auth_header(login(client, "alice@x.com", password="pw1234"))


@pytest.fixture
def admin_headers(client, db_session):
    ensure_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD, "Library", "Admin")
    return auth_header(login(client, ADMIN_EMAIL, password=ADMIN_PASSWORD))


@pytest.fixture
def book(client, admin_headers):
    response = client.post(
        "/api/books",
        json={"title": "Dune", "author": "Frank Herbert", "isbn": "978-0", "category": "Fiction"},
        headers=admin_headers
    )
    assert response.status_code == 201, response.text
    return response.json()
