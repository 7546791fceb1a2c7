"""
Key string and secret generation for license keys.
"""
import hashlib
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits


def generate_key_string(prefix: str) -> str:
    """
    Generate a public key string in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Deployment-wide prefix (e.g., 'LK')

    Returns:
        Generated key string
    """
    parts = ["".join(secrets.choice(KEY_ALPHABET) for _ in range(4)) for _ in range(4)]
    return f"{prefix}-{'-'.join(parts)}"


def generate_secret() -> str:
    """Random secret revealed to the key holder exactly once."""
    return secrets.token_urlsafe(32)


def hash_secret(secret: str) -> str:
    return hashlib.sha256(secret.encode()).hexdigest()


def secret_matches(presented: str, secret_hash: str) -> bool:
    """Constant-time comparison of a presented secret against a stored hash."""
    return secrets.compare_digest(hash_secret(presented or ""), secret_hash)
