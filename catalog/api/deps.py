from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import BadRequest
from catalog.db.base import is_valid_object_id
from catalog.db.session import get_db
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.topping import Topping
from catalog.services.document_store import DocumentStore
from catalog.services.storage import FileStorage, S3Storage


def get_category_store(db: AsyncSession = Depends(get_db)) -> DocumentStore[Category]:
    return DocumentStore(db, Category)


def get_product_store(db: AsyncSession = Depends(get_db)) -> DocumentStore[Product]:
    return DocumentStore(db, Product)


def get_topping_store(db: AsyncSession = Depends(get_db)) -> DocumentStore[Topping]:
    return DocumentStore(db, Topping)


@lru_cache
def get_storage() -> FileStorage:
    return S3Storage()


def check_object_id(value: str, label: str) -> str:
    if not is_valid_object_id(value):
        raise BadRequest(f"Invalid {label} ID")
    return value
