import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.config import Settings
from ..core.exceptions import Unauthorized
from .models import TokenClaims

logger = logging.getLogger(__name__)


def issue_token(username: str, settings: Settings, now: Optional[datetime] = None) -> str:
    """Sign a bearer token for ``username``.

    Tokens only expire when ``JWT_EXPIRE_MINUTES`` is configured.
    """
    issued_at = now or datetime.now(timezone.utc)
    claims = {"sub": username, "username": username, "iat": issued_at}
    if settings.JWT_EXPIRE_MINUTES is not None:
        claims["exp"] = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Settings) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["iat"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid token: {type(e).__name__}")
        raise Unauthorized("Invalid token")

    username = payload.get("username") or payload.get("sub")
    if not isinstance(username, str) or not username:
        raise Unauthorized("Invalid token")

    exp = payload.get("exp")
    return TokenClaims(
        username=username,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp is not None else None,
    )
