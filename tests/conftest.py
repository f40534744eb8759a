from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from catalog.api.deps import get_category_store, get_product_store, get_storage, get_topping_store
from catalog.core.config import settings
from catalog.db.base import generate_object_id
from catalog.main import app
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.topping import Topping
from catalog.services.storage import FileData


class InMemoryStore:
    """Dict-backed stand-in for DocumentStore, holding real (transient) model objects."""

    def __init__(self, model) -> None:
        self.model = model
        self.items: dict[str, Any] = {}

    def _apply_defaults(self, instance) -> None:
        for column in self.model.__table__.columns:
            if getattr(instance, column.key) is None and column.default is not None:
                default = column.default
                value = default.arg(None) if default.is_callable else default.arg
                setattr(instance, column.key, value)

    async def find(self, **filters):
        return [
            item for item in self.items.values()
            if all(getattr(item, attr) == value for attr, value in filters.items())
        ]

    async def find_by_id(self, doc_id):
        return self.items.get(doc_id)

    async def create(self, doc):
        instance = self.model(**doc)
        if instance.id is None:
            instance.id = generate_object_id()
        self._apply_defaults(instance)
        self.items[instance.id] = instance
        return instance

    async def find_by_id_and_update(self, doc_id, patch):
        instance = self.items.get(doc_id)
        if instance is None:
            return None
        for attr, value in patch.items():
            setattr(instance, attr, value)
        instance.updated_at = datetime.now(timezone.utc)
        return instance

    async def find_by_id_and_delete(self, doc_id):
        return self.items.pop(doc_id, None)


class RecordingStorage:
    def __init__(self, *, fail_upload: bool = False, fail_delete: bool = False) -> None:
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete
        self.uploads: list[FileData] = []
        self.deletes: list[str] = []

    async def upload(self, file: FileData) -> None:
        if self.fail_upload:
            raise RuntimeError("storage unavailable")
        self.uploads.append(file)

    async def delete(self, name_or_url: str) -> None:
        self.deletes.append(name_or_url)
        if self.fail_delete:
            raise RuntimeError("delete refused")

    def get_object_uri(self, name: str) -> str:
        return f"https://assets.test/{name}"


def make_token(role: str, tenant: str | None = None, sub: str = "user-1") -> str:
    claims = {"sub": sub, "role": role}
    if tenant is not None:
        claims["tenant"] = tenant
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_headers(role: str, tenant: str | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(role, tenant)}"}


@pytest.fixture
def category_store():
    return InMemoryStore(Category)


@pytest.fixture
def product_store():
    return InMemoryStore(Product)


@pytest.fixture
def topping_store():
    return InMemoryStore(Topping)


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def client(category_store, product_store, topping_store, storage):
    app.dependency_overrides[get_category_store] = lambda: category_store
    app.dependency_overrides[get_product_store] = lambda: product_store
    app.dependency_overrides[get_topping_store] = lambda: topping_store
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def pizza_category(category_store):
    category = Category(
        id=generate_object_id(),
        name="Pizza",
        price_configuration={"Size": {"priceType": "base", "availableOptions": ["Small", "Large"]}},
        attributes=[
            {
                "name": "Spiciness",
                "widgetType": "radio",
                "defaultValue": "Mild",
                "availableOptions": ["Mild", "Hot"],
            }
        ],
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    category_store.items[category.id] = category
    return category
