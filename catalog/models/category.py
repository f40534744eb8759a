from sqlalchemy import String, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
import enum

from catalog.db.base import Base, generate_object_id


class CategoryPriceType(str, enum.Enum):
    base = "base"
    additional = "additional"
    discount = "discount"


class WidgetType(str, enum.Enum):
    radio = "radio"
    switch = "switch"


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
    )

    # {"Small": {"priceType": "base", "availableOptions": ["8", "10"]}}
    price_configuration: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
    )

    # [{"name", "widgetType", "defaultValue", "availableOptions"}]
    attributes: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name}>"
