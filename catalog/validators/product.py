from __future__ import annotations

from catalog.models.product import ProductPriceType
from catalog.validators.rules import (
    RuleSet,
    RuleViolation,
    ValidationContext,
    ValidationRule,
    is_list,
    is_mapping,
    is_object_id,
    is_string,
    is_url,
    length,
    not_empty,
)

PRICE_TYPES = {p.value for p in ProductPriceType}


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def _check_config_entry(key: str, config) -> None:
    if not isinstance(config, dict) or config.get("priceType") not in PRICE_TYPES:
        raise RuleViolation(f'Invalid or missing priceType for key "{key}"')

    options = config.get("availableOptions")
    if not isinstance(options, dict) or not options:
        raise RuleViolation(
            f'availableOptions must be a non-empty map of option to price for key "{key}"'
        )

    for option, price in options.items():
        if not _is_number(price):
            raise RuleViolation(
                f'Option value in availableOptions must be a valid number for key "{key}"'
            )


async def category_exists(value: str, ctx: ValidationContext) -> str:
    if ctx.categories is None:
        raise RuntimeError("Category check needs a category lookup")
    if not await ctx.categories.find(id=value):
        raise RuleViolation("Category not found")
    return value


def price_configuration(value: dict, _ctx) -> dict:
    if not value:
        raise RuleViolation("priceConfiguration cannot be empty")
    for key, config in value.items():
        _check_config_entry(key, config)
    return value


def product_attributes(value: list, _ctx) -> list:
    if not value:
        raise RuleViolation("Attributes cannot be empty")
    for index, attr in enumerate(value):
        if not isinstance(attr, dict):
            raise RuleViolation(f"Attribute at index {index} must be an object")
        name = attr.get("name")
        if not name or not isinstance(name, str):
            raise RuleViolation(f"Attribute at index {index} must have a valid name")
        if not isinstance(attr.get("value"), (str, int, float, bool)):
            raise RuleViolation(
                f"Attribute at index {index} must have a valid value (string, number, or boolean)"
            )
    return value


def product_rules(*, is_update: bool = False, has_image: bool = False) -> RuleSet:
    """
    ``has_image``: an image file came with the request, so ``imageUrl``
    will be filled in from the upload rather than supplied directly.
    """
    return RuleSet.of(
        ValidationRule(
            field="name",
            message="Name must be between 3 and 100 characters long",
            optional=is_update,
            checks=(
                is_string(),
                length(3, 100),
            ),
        ),
        ValidationRule(
            field="description",
            message="Description must be between 10 and 1000 characters long",
            optional=is_update,
            checks=(
                is_string(),
                length(10, 1000),
            ),
        ),
        ValidationRule(
            field="imageUrl",
            message="Image URL must be a valid URL",
            optional=is_update or has_image,
            checks=(is_url(),),
        ),
        ValidationRule(
            field="tenantId",
            message="Tenant ID is required",
            optional=is_update,
            checks=(is_string(), not_empty()),
        ),
        ValidationRule(
            field="categoryId",
            message="Invalid category ID",
            optional=is_update,
            checks=(is_object_id(), category_exists),
        ),
        ValidationRule(
            field="priceConfiguration",
            message="priceConfiguration must be an object",
            optional=is_update,
            checks=(is_mapping(), price_configuration),
        ),
        ValidationRule(
            field="attributes",
            message="Attributes must be an array",
            optional=is_update,
            checks=(is_list(), product_attributes),
        ),
    )


update_product_rules = product_rules(is_update=True)
