from __future__ import annotations

from typing import Any

from catalog.core.errors import BadRequest, NotFound
from catalog.core.logging import get_logger
from catalog.models.category import Category
from catalog.security.context import ActorClaim
from catalog.security.tenancy import category_policy
from catalog.services.document_store import DocumentStore, to_columns
from catalog.validators.category import create_category_rules, update_category_rules

logger = get_logger(__name__)

CATEGORY_FIELDS = {
    "name": "name",
    "priceConfiguration": "price_configuration",
    "attributes": "attributes",
}


class CategoryService:
    def __init__(self, store: DocumentStore[Category]) -> None:
        self.store = store

    async def list_categories(self) -> list[Category]:
        return await self.store.find()

    async def get_category(self, category_id: str) -> Category:
        category = await self.store.find_by_id(category_id)
        if category is None:
            logger.warning(f"Category not found with ID: {category_id}")
            raise NotFound("Category not found")
        return category

    async def create_category(self, actor: ActorClaim, payload: dict[str, Any]) -> Category:
        if not payload:
            raise BadRequest("Category data is required")

        outcome = await create_category_rules.validate(payload, categories=self.store)
        if not outcome.valid:
            logger.warning("Category creation failed: input validation failed")
        outcome.raise_for_errors()

        category = await self.store.create(to_columns(payload, CATEGORY_FIELDS))
        logger.info(f"Category {category.id} created by {actor.subject}")
        return category

    async def update_category(
        self,
        actor: ActorClaim,
        category_id: str,
        payload: dict[str, Any],
    ) -> Category:
        patch = category_policy.restrict_patch(actor, dict(payload))

        outcome = await update_category_rules.validate(
            patch, categories=self.store, resource_id=category_id
        )
        outcome.raise_for_errors()

        if not to_columns(patch, CATEGORY_FIELDS):
            raise BadRequest("At least one field (name, priceConfiguration, attributes) is required to update")

        await category_policy.load_for_mutation(
            actor, category_id, self.store.find_by_id, action="update"
        )

        updated = await self.store.find_by_id_and_update(
            category_id, to_columns(patch, CATEGORY_FIELDS)
        )
        if updated is None:
            raise NotFound("Category not found")
        logger.info(f"Category {category_id} updated by {actor.subject}")
        return updated

    async def delete_category(self, actor: ActorClaim, category_id: str) -> None:
        await category_policy.load_for_mutation(
            actor, category_id, self.store.find_by_id, action="delete"
        )
        deleted = await self.store.find_by_id_and_delete(category_id)
        if deleted is None:
            raise NotFound("Category not found")
        logger.info(f"Category {category_id} deleted by {actor.subject}")
