"""
Security helpers - password hashing and access tokens.

Passwords are hashed with bcrypt. Access tokens are HS256 JWTs
carrying the user's id and username.
"""
import time
from typing import Any, Dict

import bcrypt
import jwt

from weather_api.core.exceptions import InvalidTokenError

JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


def create_access_token(
    user_id: int,
    username: str,
    secret: str,
    expires_hours: int = 24,
) -> str:
    """
    Mint a signed access token.

    Args:
        user_id: Numeric user identifier
        username: User name embedded in the token
        secret: Signing secret
        expires_hours: Token lifetime

    Returns:
        Encoded JWT string
    """
    now = int(time.time())
    payload = {
        "id": user_id,
        "username": username,
        "iat": now,
        "exp": now + expires_hours * 3600,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify a token and return its payload.

    Raises:
        InvalidTokenError: If the signature is wrong, the token expired,
            or the payload lacks the user fields.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    if "id" not in payload or "username" not in payload:
        raise InvalidTokenError()
    return payload
