import pytest

from catalog.core.errors import ValidationFailed
from catalog.validators.rules import (
    RuleSet,
    RuleViolation,
    ValidationRule,
    is_absent,
    is_float,
    is_string,
    is_url,
    length,
)


def name_rule(optional=False):
    return ValidationRule(
        field="name",
        message="Name is required",
        optional=optional,
        checks=(is_string("Name must be a string"), length(3, 10, "Name must be 3-10 chars")),
    )


def price_rule(optional=False):
    return ValidationRule(
        field="price",
        message="Price must be a number greater than 0",
        optional=optional,
        checks=(is_float(gt=0),),
    )


@pytest.mark.asyncio
async def test_valid_payload_passes():
    outcome = await RuleSet.of(name_rule(), price_rule()).validate({"name": "Cheese", "price": 10})
    assert outcome.valid
    assert outcome.errors == ()


@pytest.mark.asyncio
async def test_all_failures_are_collected():
    outcome = await RuleSet.of(name_rule(), price_rule()).validate({"name": "ab", "price": -1})
    assert not outcome.valid
    assert outcome.messages_for("name") == ["Name must be 3-10 chars"]
    assert outcome.messages_for("price") == ["Price must be a number greater than 0"]


@pytest.mark.asyncio
async def test_field_chain_stops_at_first_failure():
    outcome = await RuleSet.of(name_rule()).validate({"name": 12})
    assert outcome.messages_for("name") == ["Name must be a string"]


@pytest.mark.asyncio
async def test_required_field_missing_reports_rule_message():
    outcome = await RuleSet.of(name_rule(), price_rule()).validate({"price": 5})
    assert [e.to_dict() for e in outcome.errors] == [
        {"field": "name", "message": "Name is required"}
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("empty", [None, "", 0, False])
async def test_optional_rule_accepts_falsy_values(empty):
    payload = {"price": empty} if empty is not None else {}
    outcome = await RuleSet.of(price_rule(optional=True)).validate(payload)
    assert outcome.valid
    assert "price" not in payload


@pytest.mark.asyncio
async def test_optional_rule_still_checks_present_values():
    outcome = await RuleSet.of(price_rule(optional=True)).validate({"price": "abc"})
    assert outcome.messages_for("price") == ["Price must be a number greater than 0"]


@pytest.mark.asyncio
async def test_optional_rule_ignores_other_invalid_fields():
    outcome = await RuleSet.of(price_rule(optional=True), name_rule()).validate({"name": "x"})
    assert outcome.messages_for("price") == []
    assert outcome.messages_for("name") == ["Name must be 3-10 chars"]


@pytest.mark.asyncio
async def test_rule_normalises_only_its_own_field():
    payload = {"price": "12.5", "name": "Olives"}
    outcome = await RuleSet.of(price_rule()).validate(payload)
    assert outcome.valid
    assert payload == {"price": 12.5, "name": "Olives"}


@pytest.mark.asyncio
async def test_async_checks_are_awaited():
    async def not_taken(value, ctx):
        if value == "Taken":
            raise RuleViolation("Already exists")
        return value

    rules = RuleSet.of(ValidationRule(field="name", message="Name is required", checks=(not_taken,)))
    assert (await rules.validate({"name": "Free"})).valid
    assert (await rules.validate({"name": "Taken"})).messages_for("name") == ["Already exists"]


@pytest.mark.asyncio
async def test_raise_for_errors_carries_every_error():
    outcome = await RuleSet.of(name_rule(), price_rule()).validate({})
    with pytest.raises(ValidationFailed) as excinfo:
        outcome.raise_for_errors()
    assert [e["field"] for e in excinfo.value.errors] == ["name", "price"]


@pytest.mark.asyncio
async def test_is_url():
    rules = RuleSet.of(ValidationRule(field="imageUrl", message="Image URL must be a valid URL", checks=(is_url(),)))
    assert (await rules.validate({"imageUrl": "https://cdn.example.com/a.png"})).valid
    assert not (await rules.validate({"imageUrl": "not a url"})).valid


def test_is_absent():
    assert is_absent(None)
    assert is_absent("")
    assert is_absent(0)
    assert is_absent(0.0)
    assert not is_absent("0")
    assert not is_absent([])
    assert not is_absent({})
