"""Token manager for issuing and verifying admin JWTs."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt

from blogku.configs import settings
from blogku.schemas.admin import TokenData

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    subject_id: int,
    role: str = "admin",
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new access token.

    Args:
        subject_id: Admin id, stored in the ``sub`` claim
        role: Role granted to the bearer
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {
        "sub": str(subject_id),
        "role": role,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    subject: str | None = payload.get("sub")
    role: str | None = payload.get("role")
    jti: str | None = payload.get("jti")

    if not subject or not role or not jti or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    if not subject.isdigit():
        return None

    return TokenData(sub=int(subject), role=role, jti=jti)
