"""
Tenant scoping for mutations.

Managers are confined to their own tenant; admins bypass scoping. Existence
is checked before ownership, so an unknown ID is always NotFound, while a
foreign one is Forbidden.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from catalog.core.errors import Forbidden, InternalServerError, NotFound
from catalog.core.logging import get_logger
from catalog.security.context import ActorClaim

logger = get_logger(__name__)

ResourceT = TypeVar("ResourceT")


class TenantScopingPolicy:
    def __init__(self, resource_label: str, *, tenant_scoped: bool = True) -> None:
        self.resource_label = resource_label
        self.tenant_scoped = tenant_scoped

    def assign_ownership(self, actor: ActorClaim, payload: dict[str, Any]) -> dict[str, Any]:
        """On create a manager always owns what they create, whatever the client sent."""
        if not self.tenant_scoped or not actor.is_manager:
            return payload

        if not actor.tenant_id:
            logger.error(f"{self.resource_label} creation failed: Tenant ID missing in auth")
            raise InternalServerError("Tenant ID is missing in auth")

        if payload.get("tenantId") not in (None, "", actor.tenant_id):
            logger.info(f"Overriding client tenantId for manager {actor.subject}")
        payload["tenantId"] = actor.tenant_id
        return payload

    def restrict_patch(self, actor: ActorClaim, patch: dict[str, Any]) -> dict[str, Any]:
        """Only an admin may move a resource to another tenant."""
        if self.tenant_scoped and not actor.is_admin:
            patch.pop("tenantId", None)
        return patch

    def ensure_owner(self, actor: ActorClaim, resource: Any, action: str) -> None:
        if not self.tenant_scoped or not actor.is_manager:
            return
        if getattr(resource, "tenant_id", None) != actor.tenant_id:
            logger.warning(
                f"Manager {actor.subject} denied {action} on {self.resource_label} {resource.id}"
            )
            raise Forbidden(f"You are not authorised to {action} this {self.resource_label}.")

    async def load_for_mutation(
        self,
        actor: ActorClaim,
        resource_id: str,
        fetch: Callable[[str], Awaitable[ResourceT | None]],
        *,
        action: str,
    ) -> ResourceT:
        resource = await fetch(resource_id)
        if resource is None:
            logger.warning(f"{self.resource_label} not found for {action}: {resource_id}")
            raise NotFound(f"{self.resource_label.capitalize()} not found")

        self.ensure_owner(actor, resource, action)
        return resource


category_policy = TenantScopingPolicy("category", tenant_scoped=False)
product_policy = TenantScopingPolicy("product")
topping_policy = TenantScopingPolicy("topping")
