from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime


class ToppingRead(BaseModel):
    id: str
    name: str
    price: float
    image: str
    tenant_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
