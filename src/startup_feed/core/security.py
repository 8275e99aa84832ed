"""Password hashing and bearer-token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from startup_feed.core.settings import Settings, settings as default_settings

# bcrypt only reads the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash password using bcrypt with a fresh salt."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if `password` matches the stored bcrypt hash."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, hashed.encode("utf-8"))
    except ValueError:
        # Empty or non-bcrypt value stored for the account.
        return False


def create_access_token(email: str, config: Settings | None = None) -> str:
    """Create a JWT access token whose subject is the user's email."""
    config = config or default_settings
    expire = datetime.now(UTC) + timedelta(minutes=config.access_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": email, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        config.secret_key,
        algorithm=config.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str, config: Settings | None = None) -> str | None:
    """Return the email carried by `token`, or None when it does not verify."""
    config = config or default_settings
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None
