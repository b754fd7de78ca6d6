"""
PC Builder Catalog API — Product SQLAlchemy Model
==================================================

What:  ORM model for the `products` table.
Who:   Queried by ProductService; tracked by Alembic for migrations.

Table Design Rationale:
    - UUID primary key: stable identifier exposed as `_id` in the API
    - category: plain label compared against categories.title (no FK — products
      with an unknown label belong to the "others" bucket instead of failing)
    - reviews / key_features: embedded documents stored as JSONB, read whole
    - individual_rating: legacy per-product rating; NULL means the field is absent
      and the maintenance endpoint clears it on every row

    Index on category:
        Every category page filters on this column.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import Float, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from pcbuilder.database import Base


class Product(Base):
    """
    A purchasable PC component.

    Products are created and edited outside this service; the API only reads
    them, apart from clearing `individual_rating`.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )

    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Display label, e.g. "Processor"; NULL products fall into "others"
    category: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # e.g. "In Stock", "Out of stock"
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="In Stock",
        server_default=text("'In Stock'"),
    )

    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    key_features: Mapped[Dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        server_default=text("'{}'::jsonb"),
    )

    # Ordered list of {"rating": <number>, ...}
    reviews: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        server_default=text("'[]'::jsonb"),
    )

    # Legacy: superseded by the averageRating computed from reviews
    individual_rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("idx_products_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.product_name}', category='{self.category}')>"
