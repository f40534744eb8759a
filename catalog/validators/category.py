from __future__ import annotations

from typing import Any

from catalog.models.category import CategoryPriceType, WidgetType
from catalog.validators.rules import (
    RuleSet,
    RuleViolation,
    ValidationContext,
    ValidationRule,
    is_list,
    is_mapping,
    length,
    matches,
)

PRICE_TYPES = {p.value for p in CategoryPriceType}
WIDGET_TYPES = {w.value for w in WidgetType}


def as_option(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def unique_category_name(value: str, ctx: ValidationContext) -> str:
    """Reject when another category already uses this name."""
    if ctx.categories is None:
        raise RuntimeError("Category name check needs a category lookup")

    existing = await ctx.categories.find(name=value)
    if any(category.id != ctx.resource_id for category in existing):
        raise RuleViolation("Category with this name already exists")
    return value


def price_configuration(value: dict, _ctx) -> dict:
    # an empty object would wipe the stored configuration on update
    if not value:
        raise RuleViolation("Price configuration cannot be empty")

    normalised = {}
    for key, config in value.items():
        if not isinstance(config, dict) or config.get("priceType") not in PRICE_TYPES:
            raise RuleViolation(f"Invalid price type for key {key}")

        options = config.get("availableOptions")
        if not isinstance(options, list) or not options:
            raise RuleViolation(
                f"Available options must be a non-empty array for key {key}"
            )

        normalised[key] = {**config, "availableOptions": [as_option(o) for o in options]}
    return normalised


def category_attributes(value: list, _ctx) -> list:
    if not value:
        raise RuleViolation("Attributes cannot be empty")

    normalised = []
    for index, attr in enumerate(value):
        if not isinstance(attr, dict):
            raise RuleViolation(f"Attribute at index {index} must be an object")

        name = attr.get("name")
        if not name or not isinstance(name, str):
            raise RuleViolation(f"Attribute at index {index} must have a valid name")

        if attr.get("widgetType") not in WIDGET_TYPES:
            raise RuleViolation(f"Invalid widget type for attribute at index {index}")

        options = attr.get("availableOptions")
        if not isinstance(options, list) or not options:
            raise RuleViolation(
                f"Available options must be a non-empty array for attribute at index {index}"
            )
        options = [as_option(o) for o in options]

        default = attr.get("defaultValue")
        if default is None:
            raise RuleViolation(f"Attribute at index {index} must have a default value")
        default = as_option(default)

        if default not in options:
            raise RuleViolation(
                f"Default value for attribute at index {index} must be one of the available options"
            )

        normalised.append(
            {**attr, "availableOptions": options, "defaultValue": default}
        )
    return normalised


def category_rules(*, is_update: bool = False) -> RuleSet:
    return RuleSet.of(
        ValidationRule(
            field="name",
            message="Category name is required",
            optional=is_update,
            checks=(
                matches(
                    r"^[A-Za-z0-9\s]+$",
                    "Name can only contain alphanumeric characters and spaces",
                ),
                length(3, 100, "Name must be between 3 and 100 characters long"),
                unique_category_name,
            ),
        ),
        ValidationRule(
            field="priceConfiguration",
            message="Price configuration is required",
            optional=is_update,
            checks=(
                is_mapping("Price configuration must be an object"),
                price_configuration,
            ),
        ),
        ValidationRule(
            field="attributes",
            message="Attributes are required",
            optional=is_update,
            checks=(
                is_list("Attributes must be an array"),
                category_attributes,
            ),
        ),
    )


create_category_rules = category_rules(is_update=False)
update_category_rules = category_rules(is_update=True)
