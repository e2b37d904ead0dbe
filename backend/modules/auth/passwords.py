"""
Password and reset-reference hashing.

Passwords use bcrypt; reset references are random hex secrets of which
only the sha256 digest is stored.
"""

import hashlib
import secrets

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def generate_reset_token() -> str:
    """Random reset reference handed to the user."""
    return secrets.token_hex(20)


def hash_reset_token(reset_token: str) -> str:
    """Irreversible digest of a reset reference, as stored."""
    return hashlib.sha256(reset_token.encode("utf-8")).hexdigest()
