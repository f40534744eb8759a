from fastapi import Cookie, Header
from jose import JWTError, jwt
from pydantic import ValidationError

from catalog.core.config import settings
from catalog.core.errors import Unauthorized
from catalog.core.logging import get_logger
from catalog.security.context import ActorClaim

logger = get_logger(__name__)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def decode_actor_claim(token: str) -> ActorClaim:
    """
    Verify the access token and turn its claims into an ActorClaim.
    Raises Unauthorized if the token is invalid or incomplete.
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise Unauthorized("Invalid access token")

    try:
        return ActorClaim(
            subject=str(claims.get("sub") or ""),
            role=claims.get("role"),
            tenant_id=claims.get("tenant") or claims.get("tenantId") or None,
        )
    except ValidationError:
        raise Unauthorized("Invalid access token")


async def get_actor_claim(
    authorization: str | None = Header(default=None),
    access_token: str | None = Cookie(default=None, alias="accessToken"),
) -> ActorClaim:
    """
    FastAPI dependency that authenticates the request.
    All mutating routes depend on this.
    """
    token = _bearer_token(authorization) or access_token
    if not token:
        raise Unauthorized("Authentication required")

    claim = decode_actor_claim(token)
    if not claim.subject:
        raise Unauthorized("Invalid access token")
    return claim
