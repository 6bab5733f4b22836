"""
Unit tests for token service, password hashing, error flattening and upload helpers.
"""
from datetime import timedelta

import pytest
from jose import jwt

from collexa.core.errors import pydantic_errors_to_fields
from collexa.core.security import (
    InvalidToken, TokenService, generate_otp, hash_otp, hash_password, verify_password,
)
from collexa.services.content_service import slugify
from collexa.utils.file_upload import clean_filename, get_file_extension


@pytest.fixture
def tokens(settings):
    return TokenService(settings)


class TestTokenService:
    def test_round_trip(self, tokens):
        claims = tokens.verify(tokens.issue("abc123", "student"))
        assert claims.principal_id == "abc123"
        assert claims.role == "student"

    def test_expired(self, tokens):
        token = tokens.issue("abc123", "student", expires_delta=timedelta(seconds=-1))
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_wrong_signature(self, tokens, settings):
        forged = TokenService(settings.model_copy(update={"jwt_secret_key": "other"})).issue("abc123", "admin")
        with pytest.raises(InvalidToken):
            tokens.verify(forged)

    def test_missing_role_claim(self, tokens, settings):
        token = jwt.encode({"sub": "abc123"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_malformed(self, tokens):
        with pytest.raises(InvalidToken):
            tokens.verify("garbage")


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_empty_hash_never_matches(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "")

    def test_otp(self):
        otp = generate_otp()
        assert len(otp) == 6 and otp.isdigit()
        assert hash_otp(otp) != otp
        assert hash_otp(otp) == hash_otp(otp)


def test_pydantic_errors_flattened():
    errors = [
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("body", "role"), "msg": "Value error, Role must be student or employer"},
        {"loc": ("body",), "msg": "Field required"},
    ]
    assert pydantic_errors_to_fields(errors) == [
        {"field": "email", "message": "value is not a valid email address"},
        {"field": "role", "message": "Role must be student or employer"},
        {"field": "body", "message": "Field required"},
    ]


@pytest.mark.parametrize("filename, expected", [
    ("cv.PDF", ".pdf"),
    ("my.resume.docx", ".docx"),
    ("noext", ""),
])
def test_file_extension(filename, expected):
    assert get_file_extension(filename) == expected


def test_clean_filename_strips_paths_and_symbols():
    assert clean_filename("../../etc/my cv (final).pdf") == "my_cv__final_.pdf"


def test_slugify():
    assert slugify("Interview Tips 101!") == "interview-tips-101"
