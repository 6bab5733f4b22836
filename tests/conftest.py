"""
Pytest configuration and shared fixtures for the Collexa API tests.

MongoDB is replaced by mongomock (same indexes as production), settings by a
test instance pointing uploads at a temp dir. The TestClient is used without a
context manager so the startup hook never reaches for a real MongoDB.
"""
import mongomock
import pytest
from fastapi.testclient import TestClient

from collexa.core.config import Settings, get_settings
from collexa.core.rate_limit import limiter
from collexa.db.mongodb import get_mongo_db, init_mongo_indexes
from collexa.main import app
from tests.helpers import login, register


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key="test-secret-key-for-jwt-tokens",
        admin_email="admin@collexa.com",
        admin_password="admin123",
        upload_dir=str(tmp_path / "uploads"),
        smtp_email="",
        smtp_password="",
        environment="development",
    )


@pytest.fixture
def db():
    database = mongomock.MongoClient()["collexa_test"]
    init_mongo_indexes(database)
    return database


@pytest.fixture
def client(db, settings):
    """Test client with overridden database and settings dependencies."""
    app.dependency_overrides[get_mongo_db] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    limiter.reset()
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# ------------------------------------------------------------
# User fixtures
# ------------------------------------------------------------

@pytest.fixture
def student(client):
    user_id = register(client, "student@example.com")
    return {"id": user_id, "email": "student@example.com", "headers": login(client, "student@example.com")}


@pytest.fixture
def employer(client):
    user_id = register(client, "employer@example.com", role="employer")
    return {"id": user_id, "email": "employer@example.com", "headers": login(client, "employer@example.com")}


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/auth/admin/login", json={"email": "admin@collexa.com", "password": "admin123"})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


# ------------------------------------------------------------
# Content fixtures
# ------------------------------------------------------------

@pytest.fixture
def company(client, admin_headers):
    response = client.post("/api/companies", headers=admin_headers, json={
        "name": "Acme Corp",
        "description": "Makes everything",
        "website": "https://acme.example.com",
        "location": "Bengaluru",
    })
    assert response.status_code == 201, response.text
    return response.json()["company"]


@pytest.fixture
def job(client, employer, company):
    response = client.post("/api/jobs", headers=employer["headers"], json={
        "title": "Backend Engineer",
        "description": "Build APIs",
        "location": "Remote",
        "type": "full-time",
        "skills_required": ["python", "mongodb"],
        "company": company["_id"],
    })
    assert response.status_code == 201, response.text
    return response.json()["job"]


@pytest.fixture
def internship(client, employer, company):
    response = client.post("/api/internships", headers=employer["headers"], json={
        "title": "Data Intern",
        "description": "Clean data",
        "location": "Pune",
        "duration": "3 months",
        "mode": "hybrid",
        "company": company["_id"],
    })
    assert response.status_code == 201, response.text
    return response.json()["internship"]
