"""JWT access token creation and verification.

Tokens are issued by the account service that fronts this API; this module
only needs to verify them. ``create_access_token`` exists for local tooling
and tests and uses the same secret and claim layout.

MVP NOTE: HS256 (symmetric HMAC) with one shared JWT_SECRET.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.fm_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(user_id: str, expires_in: timedelta | None = None) -> str:
    """Issue an access token for ``user_id`` (default lifetime from settings)."""
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "type": "access",
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else _ACCESS_EXPIRE),
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_access_token(token: str) -> str:
    """Validate an access token and return its subject (the user id).

    Raises:
        InvalidCredentialsError: bad signature, expired, wrong type, or no sub.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    subject = payload.get("sub")
    if payload.get("type") != "access" or not subject:
        raise InvalidCredentialsError()
    return str(subject)
