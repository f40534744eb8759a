from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog.models.topping import Topping
from catalog.services.document_store import DocumentStore, to_columns


@pytest.mark.asyncio
async def test_malformed_id_never_reaches_the_database():
    db = MagicMock()
    db.execute = AsyncMock()
    store = DocumentStore(db, Topping)

    assert await store.find_by_id("not-an-object-id") is None
    assert await store.find_by_id_and_update("nope", {"name": "x"}) is None
    assert await store.find_by_id_and_delete("nope") is None
    db.execute.assert_not_called()


@pytest.mark.asyncio
async def test_create_adds_commits_and_refreshes():
    db = MagicMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    store = DocumentStore(db, Topping)

    topping = await store.create({"name": "Olives", "price": 20.0, "image": "u", "tenant_id": "T1"})

    assert isinstance(topping, Topping)
    db.add.assert_called_once_with(topping)
    db.commit.assert_awaited_once()
    db.refresh.assert_awaited_once_with(topping)


def test_to_columns_drops_unknown_keys():
    fields = {"name": "name", "tenantId": "tenant_id"}
    assert to_columns({"name": "Olives", "tenantId": "T1", "hack": 1}, fields) == {
        "name": "Olives",
        "tenant_id": "T1",
    }
