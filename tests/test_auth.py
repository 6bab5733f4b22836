"""
Authentication flow: registration, login, admin login, access gate, password reset.
"""
from unittest.mock import patch

from collexa.core.config import get_settings
from collexa.core.security import verify_password
from collexa.db.mongodb import COLLECTIONS
from collexa.main import app
from collexa.utils.mailer import EmailDeliveryError
from tests.helpers import login, register


class TestRegistration:
    def test_stored_hash_is_not_plaintext(self, client, db):
        register(client, "hash@example.com", password="plainpass")
        user = db[COLLECTIONS["users"]].find_one({"email": "hash@example.com"})
        assert user["password_hash"] != "plainpass"
        assert verify_password("plainpass", user["password_hash"])
        assert user["is_active"] is True

    def test_email_is_stored_lower_case_and_unique(self, client):
        register(client, "Mixed@Example.com")
        response = client.post("/api/auth/register", json={
            "first_name": "Other",
            "last_name": "Person",
            "email": "mixed@example.com",
            "phone_number": "9876543210",
            "password": "secret123",
        })
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email already registered"}

    def test_company_role_not_self_assignable(self, client):
        response = client.post("/api/auth/register", json={
            "first_name": "Sneaky",
            "last_name": "User",
            "email": "sneaky@example.com",
            "phone_number": "9876543210",
            "password": "secret123",
            "role": "company",
        })
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation Error"
        assert {"field": "role", "message": "Role must be student or employer"} in body["errors"]

    def test_all_field_errors_reported_together(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "x"})
        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"first_name", "last_name", "email", "phone_number", "password"} <= fields

    def test_password_longer_than_bcrypt_limit_is_rejected(self, client, db):
        response = client.post("/api/auth/register", json={
            "first_name": "Long",
            "last_name": "Password",
            "email": "long@example.com",
            "phone_number": "9876543210",
            "password": "a" * 72 + "CORRECT",
        })
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "password", "message": "Password must be at most 72 bytes"},
        ]
        assert db[COLLECTIONS["users"]].count_documents({}) == 0

    def test_password_limit_counts_bytes_not_characters(self, client):
        response = client.post("/api/auth/register", json={
            "first_name": "Multi",
            "last_name": "Byte",
            "email": "multibyte@example.com",
            "phone_number": "9876543210",
            "password": "\u00e9" * 37,
        })
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"

    def test_join_as_company_splits_owner_name(self, client, db):
        response = client.post("/api/auth/join-as-company", json={
            "company_name": "Globex",
            "registration_number": "REG-42",
            "company_email": "hello@globex.example.com",
            "owner_full_name": "Hank Scorpio Senior",
            "owner_email": "hank@globex.example.com",
            "password": "secret123",
            "terms_accepted": True,
        })
        assert response.status_code == 201, response.text
        user = db[COLLECTIONS["users"]].find_one({"email": "hank@globex.example.com"})
        assert user["role"] == "company"
        assert user["first_name"] == "Hank"
        assert user["last_name"] == "Scorpio Senior"
        assert user["company_details"]["company_name"] == "Globex"

    def test_join_as_company_requires_terms(self, client):
        response = client.post("/api/auth/join-as-company", json={
            "company_name": "Globex",
            "registration_number": "REG-42",
            "company_email": "hello@globex.example.com",
            "owner_full_name": "Hank Scorpio",
            "owner_email": "hank@globex.example.com",
            "password": "secret123",
        })
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "terms_accepted"


class TestLogin:
    def test_login_with_correct_password(self, client):
        user_id = register(client, "login@example.com")
        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["id"] == user_id
        assert body["user"]["role"] == "student"
        assert "token" in response.cookies

    def test_login_with_wrong_password(self, client):
        register(client, "login@example.com")
        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "wrong"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_login_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
        assert response.status_code == 401

    def test_overlong_password_cannot_log_in(self, client):
        register(client, "login@example.com", password="a" * 72)
        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "a" * 72 + "WRONG!!"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"

    def test_deactivated_user_cannot_login(self, client, db):
        register(client, "off@example.com")
        db[COLLECTIONS["users"]].update_one({"email": "off@example.com"}, {"$set": {"is_active": False}})
        response = client.post("/api/auth/login", json={"email": "off@example.com", "password": "secret123"})
        assert response.status_code == 403

    def test_admin_login(self, client):
        response = client.post("/api/auth/admin/login", json={"email": "admin@collexa.com", "password": "admin123"})
        assert response.status_code == 200
        assert response.json()["user"] == {
            "id": "admin_id_001", "role": "admin", "first_name": "Admin", "last_name": "User",
        }

    def test_admin_login_wrong_password(self, client):
        response = client.post("/api/auth/admin/login", json={"email": "admin@collexa.com", "password": "nope"})
        assert response.status_code == 401


class TestAccessGate:
    def test_missing_token(self, client):
        response = client.get("/api/userprofile")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token missing"

    def test_garbage_token(self, client):
        response = client.get("/api/userprofile", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token failed"

    def test_token_for_deleted_user(self, client, student, db):
        db[COLLECTIONS["users"]].delete_many({})
        response = client.get("/api/userprofile", headers=student["headers"])
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_user_deactivated_after_token_issuance_is_rejected(self, client, student, admin_headers):
        assert client.get("/api/userprofile", headers=student["headers"]).status_code == 200

        response = client.patch(f"/api/admin/users/{student['id']}/toggle-active", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["user"]["is_active"] is False

        response = client.get("/api/userprofile", headers=student["headers"])
        assert response.status_code == 403

    def test_virtual_admin_never_checked_against_store(self, client, admin_headers, db):
        db[COLLECTIONS["users"]].delete_many({})
        response = client.get("/api/admin/users", headers=admin_headers)
        assert response.status_code == 200

    def test_cookie_takes_precedence_over_bearer(self, client, student, employer):
        response = client.post("/api/auth/login", json={"email": student["email"], "password": "secret123"})
        assert response.status_code == 200

        # Cookie now carries the student session; the bearer header is ignored
        response = client.get("/api/userprofile", headers=employer["headers"])
        assert response.status_code == 200
        assert response.json()["user"]["email"] == student["email"]

    def test_role_check_runs_after_authentication(self, client, student):
        assert client.get("/api/admin/users").status_code == 401
        assert client.get("/api/admin/users", headers=student["headers"]).status_code == 403


class TestPasswords:
    def test_change_password(self, client, student):
        response = client.post("/api/auth/changePassword", headers=student["headers"], json={
            "current_password": "secret123", "new_password": "newsecret",
        })
        assert response.status_code == 200
        login(client, student["email"], "newsecret")

    def test_new_password_over_limit(self, client, student):
        response = client.post("/api/auth/changePassword", headers=student["headers"], json={
            "current_password": "secret123", "new_password": "b" * 73,
        })
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "new_password"

    def test_change_password_wrong_current(self, client, student):
        response = client.post("/api/auth/changePassword", headers=student["headers"], json={
            "current_password": "wrong", "new_password": "newsecret",
        })
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "current_password"

    def test_forget_and_reset_password(self, client, student):
        with patch("collexa.api.routes.auth_routes.send_email") as send:
            response = client.post("/api/auth/forgetPassword", json={"email": student["email"]})
        assert response.status_code == 200
        assert send.call_count == 1

        text = send.call_args[0][3]
        otp = text.split("code is ")[1][:6]
        assert otp.isdigit()

        response = client.post("/api/auth/resetPassword", json={
            "email": student["email"], "otp": otp, "password": "brandnew",
        })
        assert response.status_code == 200
        login(client, student["email"], "brandnew")

        # Code is single use
        response = client.post("/api/auth/resetPassword", json={
            "email": student["email"], "otp": otp, "password": "another1",
        })
        assert response.status_code == 400

    def test_reset_with_wrong_code(self, client, student):
        with patch("collexa.api.routes.auth_routes.send_email") as send:
            client.post("/api/auth/forgetPassword", json={"email": student["email"]})
        otp = send.call_args[0][3].split("code is ")[1][:6]
        wrong = "111111" if otp == "000000" else "000000"

        response = client.post("/api/auth/resetPassword", json={
            "email": student["email"], "otp": wrong, "password": "brandnew",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired code"

    def test_forget_password_unknown_email(self, client):
        with patch("collexa.api.routes.auth_routes.send_email") as send:
            response = client.post("/api/auth/forgetPassword", json={"email": "ghost@example.com"})
        assert response.status_code == 404
        send.assert_not_called()

    def test_email_failure_outside_development_clears_code(self, client, student, settings, db):
        app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"environment": "production"})
        with patch("collexa.api.routes.auth_routes.send_email", side_effect=EmailDeliveryError("down")):
            response = client.post("/api/auth/forgetPassword", json={"email": student["email"]})
        assert response.status_code == 500
        assert response.json()["message"] == "Email could not be sent"

        user = db[COLLECTIONS["users"]].find_one({"email": student["email"]})
        assert "reset_otp_hash" not in user

    def test_email_failure_in_development_keeps_code(self, client, student, db):
        with patch("collexa.api.routes.auth_routes.send_email", side_effect=EmailDeliveryError("down")):
            response = client.post("/api/auth/forgetPassword", json={"email": student["email"]})
        assert response.status_code == 200

        user = db[COLLECTIONS["users"]].find_one({"email": student["email"]})
        assert user["reset_otp_hash"]

    def test_forget_password_rate_limited(self, client, student):
        with patch("collexa.api.routes.auth_routes.send_email"):
            codes = [
                client.post("/api/auth/forgetPassword", json={"email": student["email"]}).status_code
                for _ in range(6)
            ]
        assert codes[:5] == [200] * 5
        assert codes[5] == 429
