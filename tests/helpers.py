"""Request helpers shared by the API tests."""
from pathlib import Path

PDF_BYTES = b"%PDF-1.4 test resume"


def register(client, email, role="student", password="secret123", first_name="Test", last_name="User"):
    response = client.post("/api/auth/register", json={
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone_number": "+91 98765 43210",
        "password": password,
        "role": role,
    })
    assert response.status_code == 201, response.text
    return response.json()["user_id"]


def login(client, email, password="secret123"):
    """Log in and return bearer headers.

    The session cookie is dropped so several users can share one client.
    """
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


def uploaded_files(settings):
    upload_dir = Path(settings.upload_dir)
    return sorted(upload_dir.iterdir()) if upload_dir.exists() else []


def application_form(**overrides):
    form = {
        "full_name": "Asha Rao",
        "email": "asha@example.com",
        "phone_number": "9876543210",
        "why_hire_you": "I ship things.",
    }
    form.update(overrides)
    return form


def resume_file(name="cv.pdf", content=PDF_BYTES, content_type="application/pdf"):
    return {"resume": (name, content, content_type)}
