import pytest

from catalog.api.deps import check_object_id
from catalog.core.errors import BadRequest
from catalog.db.base import is_valid_object_id
from catalog.validators.product import product_rules, update_product_rules


def product_payload(category_id, **overrides):
    payload = {
        "name": "Margherita",
        "description": "Classic tomato and mozzarella",
        "imageUrl": "https://cdn.example.com/margherita.png",
        "tenantId": "T1",
        "categoryId": category_id,
        "priceConfiguration": {
            "Size": {"priceType": "base", "availableOptions": {"Small": 400, "Large": 650}},
        },
        "attributes": [{"name": "isHot", "value": False}],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_valid_product(category_store, pizza_category):
    outcome = await product_rules().validate(
        product_payload(pizza_category.id), categories=category_store
    )
    assert outcome.valid


@pytest.mark.asyncio
async def test_category_id_must_be_object_id(category_store):
    outcome = await product_rules().validate(
        product_payload("not-an-id"), categories=category_store
    )
    assert outcome.messages_for("categoryId") == ["Invalid category ID"]


@pytest.mark.asyncio
async def test_category_must_exist(category_store):
    outcome = await product_rules().validate(
        product_payload("a" * 24), categories=category_store
    )
    assert outcome.messages_for("categoryId") == ["Category not found"]


@pytest.mark.asyncio
async def test_tenant_id_required_on_create(category_store, pizza_category):
    payload = product_payload(pizza_category.id)
    del payload["tenantId"]
    outcome = await product_rules().validate(payload, categories=category_store)
    assert outcome.messages_for("tenantId") == ["Tenant ID is required"]


@pytest.mark.asyncio
async def test_image_url_optional_when_file_uploaded(category_store, pizza_category):
    payload = product_payload(pizza_category.id)
    del payload["imageUrl"]

    without_file = await product_rules().validate(dict(payload), categories=category_store)
    assert without_file.messages_for("imageUrl") == ["Image URL must be a valid URL"]

    with_file = await product_rules(has_image=True).validate(dict(payload), categories=category_store)
    assert with_file.valid


@pytest.mark.asyncio
async def test_price_options_must_be_numbers(category_store, pizza_category):
    payload = product_payload(
        pizza_category.id,
        priceConfiguration={"Size": {"priceType": "base", "availableOptions": {"Small": "cheap"}}},
    )
    outcome = await product_rules().validate(payload, categories=category_store)
    assert outcome.messages_for("priceConfiguration") == [
        'Option value in availableOptions must be a valid number for key "Size"'
    ]


@pytest.mark.asyncio
async def test_discount_is_not_a_product_price_type(category_store, pizza_category):
    payload = product_payload(
        pizza_category.id,
        priceConfiguration={"Size": {"priceType": "discount", "availableOptions": {"Small": 1}}},
    )
    outcome = await product_rules().validate(payload, categories=category_store)
    assert outcome.messages_for("priceConfiguration") == ['Invalid or missing priceType for key "Size"']


@pytest.mark.asyncio
async def test_attribute_values_must_be_scalars(category_store, pizza_category):
    payload = product_payload(pizza_category.id, attributes=[{"name": "toppings", "value": ["a"]}])
    outcome = await product_rules().validate(payload, categories=category_store)
    assert outcome.messages_for("attributes") == [
        "Attribute at index 0 must have a valid value (string, number, or boolean)"
    ]


@pytest.mark.asyncio
async def test_short_description(category_store, pizza_category):
    payload = product_payload(pizza_category.id, description="Too short")
    outcome = await product_rules().validate(payload, categories=category_store)
    assert outcome.messages_for("description") == [
        "Description must be between 10 and 1000 characters long"
    ]


@pytest.mark.asyncio
async def test_update_accepts_partial_payload(category_store):
    outcome = await update_product_rules.validate({"name": "Veggie"}, categories=category_store)
    assert outcome.valid


@pytest.mark.asyncio
async def test_category_id_with_trailing_newline_is_rejected(category_store, pizza_category):
    outcome = await product_rules().validate(
        product_payload(pizza_category.id + "\n"), categories=category_store
    )
    assert outcome.messages_for("categoryId") == ["Invalid category ID"]


def test_path_id_with_trailing_newline_is_rejected():
    assert is_valid_object_id("a" * 24)
    assert not is_valid_object_id("a" * 24 + "\n")
    with pytest.raises(BadRequest):
        check_object_id("a" * 24 + "\n", "product")


@pytest.mark.asyncio
async def test_update_rejects_empty_configuration_and_attributes(category_store):
    outcome = await update_product_rules.validate(
        {"priceConfiguration": {}, "attributes": []}, categories=category_store
    )
    assert outcome.messages_for("priceConfiguration") == ["priceConfiguration cannot be empty"]
    assert outcome.messages_for("attributes") == ["Attributes cannot be empty"]
