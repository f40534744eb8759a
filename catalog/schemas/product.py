from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any


class ProductRead(BaseModel):
    id: str
    name: str
    description: str
    image_url: str
    price_configuration: dict[str, Any]
    attributes: list[dict[str, Any]]
    tenant_id: str
    category_id: str
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
