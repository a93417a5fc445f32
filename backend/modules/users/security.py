"""Password hashing for email credentials."""

import bcrypt

from shared.exceptions import ValidationError

DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a plaintext password with a fresh bcrypt salt.

    Raises:
        ValidationError: If the password is longer than bcrypt accepts
    """
    encoded = password.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        message = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        raise ValidationError(
            message,
            code="VALIDATION_FAILED",
            details={"fields": {"password": message}},
        )
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    return bcrypt.checkpw(password.encode(), password_hash.encode())
