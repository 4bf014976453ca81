"""Identity Tokens — bearer JWT verification (and minting for tests/local runs).

Invariants:
    - Signature, expiry, and algorithm checked by python-jose; any failure → AuthenticationError
    - Roles merged from the "role" claim (str or list) and the "roles" claim, order preserved
    - Tokens are issued by the identity provider in production; create_access_token exists
      for the test-suite and local development only

Design Decisions:
    - Stateless verification: no user table lookup, the token claims are the principal
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import ValidationError

from villa_api.config import Settings
from villa_api.core.errors import AuthenticationError
from villa_api.schemas.auth import CurrentUser, TokenPayload

logger = logging.getLogger(__name__)


def decode_access_token(token: str, settings: Settings) -> CurrentUser:
    """Verify a bearer token and resolve the principal it names."""
    try:
        claims = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm],
        )
        payload = TokenPayload.model_validate(claims)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Access token rejected: {e}")
        raise AuthenticationError("Invalid or expired token") from e

    roles: list[str] = []
    if isinstance(payload.role, str):
        roles.append(payload.role)
    elif payload.role:
        roles.extend(payload.role)
    roles.extend(r for r in payload.roles if r not in roles)
    return CurrentUser(username=payload.sub, roles=roles)


def create_access_token(
    subject: str,
    roles: list[str],
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    now = datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "roles": roles,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
