from __future__ import annotations

from typing import Any

from catalog.core.errors import BadRequest, NotFound
from catalog.core.logging import get_logger
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.security.context import ActorClaim
from catalog.security.tenancy import product_policy
from catalog.services.document_store import DocumentStore, to_columns
from catalog.services.image_service import (
    ImageOutcome,
    UploadedImage,
    discard_image,
    replace_image,
    upload_image,
)
from catalog.services.storage import FileStorage
from catalog.validators.product import product_rules, update_product_rules

logger = get_logger(__name__)

PRODUCT_FIELDS = {
    "name": "name",
    "description": "description",
    "imageUrl": "image_url",
    "priceConfiguration": "price_configuration",
    "attributes": "attributes",
    "tenantId": "tenant_id",
    "categoryId": "category_id",
    "isPublished": "is_published",
}

IMAGE_SUFFIX = "p"


def _published_flag(payload: dict[str, Any]) -> None:
    # form fields arrive as strings
    value = payload.get("isPublished")
    if isinstance(value, str):
        payload["isPublished"] = value.strip().lower() in ("1", "true", "yes", "on")


class ProductService:
    def __init__(
        self,
        store: DocumentStore[Product],
        categories: DocumentStore[Category],
        storage: FileStorage,
    ) -> None:
        self.store = store
        self.categories = categories
        self.storage = storage

    async def list_products(self) -> list[Product]:
        products = await self.store.find()
        logger.info(f"Fetched {len(products)} products")
        return products

    async def get_product(self, product_id: str) -> Product:
        product = await self.store.find_by_id(product_id)
        if product is None:
            logger.warning(f"Product not found with ID: {product_id}")
            raise NotFound("Product not found")
        return product

    async def create_product(
        self,
        actor: ActorClaim,
        payload: dict[str, Any],
        image: UploadedImage | None = None,
    ) -> Product:
        logger.info("Entering create_product")
        if not payload:
            raise BadRequest("Product data is required")

        payload = product_policy.assign_ownership(actor, dict(payload))
        _published_flag(payload)

        rules = product_rules(has_image=image is not None)
        outcome = await rules.validate(payload, categories=self.categories)
        if not outcome.valid:
            logger.warning("Product creation failed: input validation failed")
        outcome.raise_for_errors()

        # no image, no product: an upload error fails the whole request
        if image is not None:
            payload["imageUrl"] = await upload_image(self.storage, image, suffix=IMAGE_SUFFIX)

        product = await self.store.create(to_columns(payload, PRODUCT_FIELDS))
        logger.info(f"Product created successfully with ID: {product.id}")
        return product

    async def update_product(
        self,
        actor: ActorClaim,
        product_id: str,
        payload: dict[str, Any],
        image: UploadedImage | None = None,
    ) -> Product:
        logger.info(f"Updating product with ID: {product_id}")
        patch = product_policy.restrict_patch(actor, dict(payload))
        _published_flag(patch)

        outcome = await update_product_rules.validate(
            patch, categories=self.categories, resource_id=product_id
        )
        outcome.raise_for_errors()

        existing = await product_policy.load_for_mutation(
            actor, product_id, self.store.find_by_id, action="update"
        )

        swap = await replace_image(
            self.storage, image, existing.image_url, suffix=IMAGE_SUFFIX
        )
        if swap.outcome is not ImageOutcome.no_image:
            patch["imageUrl"] = swap.uri

        # a directly supplied imageUrl leaves the previous object unreferenced
        superseded = None
        if swap.outcome is ImageOutcome.no_image and patch.get("imageUrl") not in (None, existing.image_url):
            superseded = existing.image_url

        updated = await self.store.find_by_id_and_update(
            product_id, to_columns(patch, PRODUCT_FIELDS)
        )
        if updated is None:
            logger.warning(f"Product not found for update with ID: {product_id}")
            raise NotFound("Product not found")

        await discard_image(self.storage, superseded)

        logger.info(f"Product updated successfully with ID: {product_id}")
        return updated

    async def delete_product(self, actor: ActorClaim, product_id: str) -> None:
        logger.info(f"Deleting product with ID: {product_id}")
        await product_policy.load_for_mutation(
            actor, product_id, self.store.find_by_id, action="delete"
        )

        deleted = await self.store.find_by_id_and_delete(product_id)
        if deleted is None:
            logger.warning(f"Product not found for deletion with ID: {product_id}")
            raise NotFound("Product not found")

        await discard_image(self.storage, deleted.image_url)
        logger.info(f"Product deleted successfully with ID: {product_id}")
