"""JWT access token creation and verification.

The ``sub`` claim carries the caller identity (an opaque address string).
Tokens are normally minted by the identity provider that shares
``JWT_SECRET_KEY``; ``create_access_token`` exists for that provider, the
seed script and tests.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from roomblock.config import settings


def create_access_token(identity: str, expires_delta: timedelta | None = None) -> str:
    """Create a short-lived access token for ``identity``.

    Args:
        identity: Caller identity, stored in the ``sub`` claim.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_access_token_expire_minutes`` minutes.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))
    to_encode = {"sub": identity, "exp": expire, "iat": now, "type": "access"}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
