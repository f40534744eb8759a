"""
Database base configuration
"""
import re
import secrets

from sqlalchemy.orm import declarative_base

# Create declarative base for SQLAlchemy models
Base = declarative_base()

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def generate_object_id() -> str:
    """24 hex characters, the identifier format every document uses."""
    return secrets.token_hex(12)


def is_valid_object_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def import_models():
    """Import all models to register them with SQLAlchemy"""
    from catalog.models import category, product, topping  # noqa: F401
