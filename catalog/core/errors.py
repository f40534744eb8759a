"""
Error taxonomy shared by controllers, policies and the app-level handlers.
"""
from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def type(self) -> str:
        return type(self).__name__


class BadRequest(CatalogError):
    status_code = 400


class Unauthorized(CatalogError):
    status_code = 401


class Forbidden(CatalogError):
    status_code = 403


class NotFound(CatalogError):
    status_code = 404


class PayloadTooLarge(CatalogError):
    status_code = 413


class InternalServerError(CatalogError):
    status_code = 500


class ValidationFailed(BadRequest):
    """Raised with every collected field error, never a subset."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Invalid input data")
        self.errors = errors
