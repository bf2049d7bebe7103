import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the 'backend' directory is on sys.path so we can import bookstore modules when running tests from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bookstore.core.errors import AuthError
from bookstore.core.security import JwtUtil, hash_password, verify_password

SECRET = "unit-test-secret-with-enough-length-0123456789"


def test_hash_password_is_salted_and_verifies():
    h1 = hash_password("correct horse")
    h2 = hash_password("correct horse")

    # Salted: same input, different hashes
    assert h1 != h2
    assert verify_password("correct horse", h1)
    assert verify_password("correct horse", h2)
    assert not verify_password("wrong horse", h1)


def test_verify_password_with_unknown_hash_format_is_false():
    assert verify_password("anything", "seeded-password-hash") is False
    assert verify_password("", hash_password("x" * 8)) is False


def test_hash_password_rejects_empty():
    with pytest.raises(ValueError):
        hash_password("")


def test_token_round_trip_returns_subject():
    util = JwtUtil(SECRET)
    token = util.generate_token("reader@mail.com")

    assert util.is_valid_token(token)
    assert util.get_username(token) == "reader@mail.com"


def test_expired_token_is_rejected():
    util = JwtUtil(SECRET, expiration=timedelta(minutes=5))
    token = util.generate_token("reader@mail.com", now=datetime.now(timezone.utc) - timedelta(hours=1))

    assert not util.is_valid_token(token)
    with pytest.raises(AuthError) as excinfo:
        util.get_username(token)
    assert excinfo.value.message == "Token expired"


def test_token_signed_with_another_secret_is_rejected():
    token = JwtUtil("another-secret-that-is-also-long-enough-987654").generate_token("reader@mail.com")

    with pytest.raises(AuthError) as excinfo:
        JwtUtil(SECRET).get_username(token)
    assert excinfo.value.message == "Invalid token"


def test_tampered_token_is_rejected():
    util = JwtUtil(SECRET)
    header, payload, signature = util.generate_token("reader@mail.com").split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    assert not util.is_valid_token(tampered)


def test_jwt_util_requires_secret():
    with pytest.raises(ValueError):
        JwtUtil("")
