"""
Composable field validation.

A ``ValidationRule`` owns one payload field and a chain of checks. Each check
receives the current value plus a ``ValidationContext`` and either returns the
(possibly normalised) value or raises ``RuleViolation``. Checks may be plain
functions or coroutines, so a rule can query storage mid-validation.

``RuleSet.validate`` runs every rule and collects every failure. Only a single
field's chain stops at its first failing check.
"""
from __future__ import annotations

import asyncio
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol
from urllib.parse import urlparse

from catalog.core.errors import ValidationFailed
from catalog.db.base import is_valid_object_id


class RuleViolation(ValueError):
    """Raised by a check. An empty message falls back to the rule's message."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class CategoryLookup(Protocol):
    async def find(self, **filters: Any) -> list[Any]: ...


@dataclass
class ValidationContext:
    """Per-call collaborators. Rules themselves hold no request state."""
    payload: dict[str, Any]
    categories: CategoryLookup | None = None
    resource_id: str | None = None


# returns the (possibly normalised) value, or an awaitable of it
Check = Callable[[Any, ValidationContext], Any]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationOutcome:
    errors: tuple[FieldError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def messages_for(self, field_name: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field_name]

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationFailed([e.to_dict() for e in self.errors])


def is_absent(value: Any) -> bool:
    """Falsy in the form-data sense: missing, None, "", 0 or False."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


@dataclass(frozen=True)
class ValidationRule:
    field: str
    message: str
    checks: tuple[Check, ...] = ()
    optional: bool = False

    async def run(self, ctx: ValidationContext) -> FieldError | None:
        value = ctx.payload.get(self.field)
        if is_absent(value):
            if self.optional:
                ctx.payload.pop(self.field, None)
                return None
            return FieldError(self.field, self.message)

        for check in self.checks:
            try:
                result = check(value, ctx)
                if inspect.isawaitable(result):
                    result = await result
            except RuleViolation as e:
                return FieldError(self.field, e.message or self.message)
            value = result

        # a rule may normalise its own field, never another one
        ctx.payload[self.field] = value
        return None


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[ValidationRule, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *rules: ValidationRule) -> "RuleSet":
        return cls(rules=tuple(rules))

    async def validate(
        self,
        payload: dict[str, Any],
        *,
        categories: CategoryLookup | None = None,
        resource_id: str | None = None,
    ) -> ValidationOutcome:
        ctx = ValidationContext(payload=payload, categories=categories, resource_id=resource_id)
        results = await asyncio.gather(*(rule.run(ctx) for rule in self.rules))
        return ValidationOutcome(errors=tuple(r for r in results if r is not None))


# -----------------------------
# Check builders
# -----------------------------
def is_string(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not isinstance(value, str):
            raise RuleViolation(message)
        return value
    return check


def length(min_len: int = 0, max_len: int | None = None, message: str | None = None) -> Check:
    def check(value, _ctx):
        size = len(str(value))
        if size < min_len or (max_len is not None and size > max_len):
            raise RuleViolation(message)
        return value
    return check


def matches(pattern: str, message: str | None = None) -> Check:
    compiled = re.compile(pattern)

    def check(value, _ctx):
        if not compiled.match(str(value)):
            raise RuleViolation(message)
        return value
    return check


def not_empty(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not str(value).strip():
            raise RuleViolation(message)
        return value
    return check


def is_url(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not isinstance(value, str):
            raise RuleViolation(message)
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise RuleViolation(message)
        return value
    return check


def is_float(*, gt: float | None = None, message: str | None = None) -> Check:
    """Numbers or numeric strings; normalises to float."""
    def check(value, _ctx):
        if isinstance(value, bool):
            raise RuleViolation(message)
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise RuleViolation(message)
        if number != number or (gt is not None and number <= gt):
            raise RuleViolation(message)
        return number
    return check


def is_object_id(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not is_valid_object_id(value):
            raise RuleViolation(message)
        return value
    return check


def is_mapping(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not isinstance(value, dict):
            raise RuleViolation(message)
        return value
    return check


def is_list(message: str | None = None) -> Check:
    def check(value, _ctx):
        if not isinstance(value, list):
            raise RuleViolation(message)
        return value
    return check
