from fastapi import Depends

from catalog.core.config import settings
from catalog.core.errors import Forbidden
from catalog.core.logging import get_logger
from catalog.security.context import ActorClaim
from catalog.security.dependencies import get_actor_claim

logger = get_logger(__name__)


def allowed_roles(route: str) -> frozenset[str]:
    """Resolve a route's allow-list from settings at request time."""
    return frozenset(settings.ROUTE_ROLES.get(route, ()))


def can_access(route: str):
    """
    Factory dependency to enforce the per-route allow-list.
    Usage in route: Depends(can_access("products:write"))

    Runs after authentication, so a missing claim is already a 401 here.
    """
    def guard(actor: ActorClaim = Depends(get_actor_claim)) -> ActorClaim:
        if actor.role not in allowed_roles(route):
            logger.warning(f"Role {actor.role} denied on {route}")
            raise Forbidden("You are not allowed to access this resource")
        return actor
    return guard
