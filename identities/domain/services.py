"""
Password and token hashing helpers for identities.

Passwords use Django's configured password hashers; bearer tokens are
high-entropy random strings, so a plain sha256 digest is enough to store
them.
"""
import hashlib
import secrets

from django.contrib.auth.hashers import check_password, make_password

MIN_PASSWORD_LENGTH = 8


def hash_password(raw_password: str) -> str:
    return make_password(raw_password)


def verify_password(raw_password: str, password_hash: str) -> bool:
    return check_password(raw_password, password_hash)


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()
