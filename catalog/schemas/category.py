from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any


class AttributeRead(BaseModel):
    name: str
    widget_type: str
    default_value: str
    available_options: list[str]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CategoryRead(BaseModel):
    id: str
    name: str
    price_configuration: dict[str, Any]
    attributes: list[AttributeRead]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class CategoryListItem(BaseModel):
    """Category without its pricing and attribute detail."""
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
