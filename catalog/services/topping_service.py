from __future__ import annotations

from typing import Any

from catalog.core.errors import BadRequest, NotFound
from catalog.core.logging import get_logger
from catalog.models.topping import Topping
from catalog.security.context import ActorClaim
from catalog.security.tenancy import topping_policy
from catalog.services.document_store import DocumentStore, to_columns
from catalog.services.image_service import (
    ImageOutcome,
    UploadedImage,
    discard_image,
    replace_image,
    upload_image,
)
from catalog.services.storage import FileStorage
from catalog.validators.rules import is_absent
from catalog.validators.topping import create_topping_rules, update_topping_rules

logger = get_logger(__name__)

TOPPING_FIELDS = {
    "name": "name",
    "price": "price",
    "image": "image",
    "tenantId": "tenant_id",
}

IMAGE_SUFFIX = "t"


class ToppingService:
    def __init__(self, store: DocumentStore[Topping], storage: FileStorage) -> None:
        self.store = store
        self.storage = storage

    async def list_toppings(self) -> list[Topping]:
        toppings = await self.store.find()
        logger.info(f"Fetched {len(toppings)} toppings")
        return toppings

    async def get_topping(self, topping_id: str) -> Topping:
        topping = await self.store.find_by_id(topping_id)
        if topping is None:
            logger.warning(f"Topping with ID: {topping_id} not found")
            raise NotFound("Topping not found")
        return topping

    async def create_topping(
        self,
        actor: ActorClaim,
        payload: dict[str, Any],
        image: UploadedImage | None,
    ) -> Topping:
        logger.info("Entering create_topping")
        payload = topping_policy.assign_ownership(actor, dict(payload))

        outcome = await create_topping_rules.validate(payload)
        if not outcome.valid:
            logger.warning("Topping creation failed: input validation failed")
        outcome.raise_for_errors()

        if image is None:
            logger.warning("No image file provided for topping creation")
            raise BadRequest("Topping image is required")

        payload["image"] = await upload_image(self.storage, image, suffix=IMAGE_SUFFIX)

        topping = await self.store.create(to_columns(payload, TOPPING_FIELDS))
        logger.info(f"Topping created with ID: {topping.id}")
        return topping

    async def update_topping(
        self,
        actor: ActorClaim,
        topping_id: str,
        payload: dict[str, Any],
        image: UploadedImage | None = None,
    ) -> Topping:
        logger.info(f"Updating topping with ID: {topping_id}")
        patch = topping_policy.restrict_patch(actor, dict(payload))
        # the image reference only ever comes from an upload
        patch.pop("image", None)

        outcome = await update_topping_rules.validate(patch, resource_id=topping_id)
        outcome.raise_for_errors()

        existing = await topping_policy.load_for_mutation(
            actor, topping_id, self.store.find_by_id, action="update"
        )

        if is_absent(patch.get("name")) and is_absent(patch.get("price")) and image is None:
            logger.warning("Topping update failed: no fields to update provided")
            raise BadRequest("At least one field (name, price, image) is required to update")

        swap = await replace_image(self.storage, image, existing.image, suffix=IMAGE_SUFFIX)
        if swap.outcome is not ImageOutcome.no_image:
            patch["image"] = swap.uri

        updated = await self.store.find_by_id_and_update(
            topping_id, to_columns(patch, TOPPING_FIELDS)
        )
        if updated is None:
            raise NotFound("Topping not found")

        logger.info(f"Topping updated with ID: {topping_id}")
        return updated

    async def delete_topping(self, actor: ActorClaim, topping_id: str) -> None:
        await topping_policy.load_for_mutation(
            actor, topping_id, self.store.find_by_id, action="delete"
        )

        deleted = await self.store.find_by_id_and_delete(topping_id)
        if deleted is None:
            raise NotFound("Topping not found")

        await discard_image(self.storage, deleted.image)
        logger.info(f"Topping deleted with ID: {topping_id}")
