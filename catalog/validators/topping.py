from __future__ import annotations

from catalog.validators.rules import (
    RuleSet,
    ValidationRule,
    is_float,
    is_string,
    length,
    not_empty,
)


def topping_rules(*, is_update: bool = False) -> RuleSet:
    return RuleSet.of(
        ValidationRule(
            field="name",
            message="Name cannot be empty",
            optional=is_update,
            checks=(
                is_string("Name must be a string"),
                length(3, message="Name cannot be empty"),
            ),
        ),
        ValidationRule(
            field="price",
            message="Price must be a number greater than 0",
            optional=is_update,
            checks=(is_float(gt=0),),
        ),
        # admins may move a topping between tenants on update
        ValidationRule(
            field="tenantId",
            message="Tenant ID is required",
            optional=is_update,
            checks=(is_string(), not_empty()),
        ),
    )


create_topping_rules = topping_rules(is_update=False)
update_topping_rules = topping_rules(is_update=True)
