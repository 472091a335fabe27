"""Password hashing utilities using bcrypt."""

import bcrypt

# bcrypt only reads this many bytes of input and newer releases reject more
MAX_PASSWORD_BYTES = 72

# Checked against when the account does not exist, so an unknown email
# costs the same bcrypt work as a wrong password.
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt()).decode("utf-8")


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password, at most MAX_PASSWORD_BYTES when encoded

    Returns:
        Bcrypt hash string

    Raises:
        ValueError: If the password is longer than MAX_PASSWORD_BYTES
    """
    if password_too_long(password):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against a hash.

    A missing hash (federated account) or an over-long password still
    burns one bcrypt check and then fails.

    Args:
        plain_password: Plain text password to check
        hashed_password: Bcrypt hash to check against, or None

    Returns:
        True if password matches hash
    """
    if not plain_password:
        return False
    encoded = plain_password.encode("utf-8")
    if hashed_password is None or len(encoded) > MAX_PASSWORD_BYTES:
        bcrypt.checkpw(encoded[:MAX_PASSWORD_BYTES], _DUMMY_HASH.encode("utf-8"))
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))
