"""
PC Builder Catalog API — Category SQLAlchemy Model
===================================================

What:  ORM model for the `categories` table.
Why:   Categories give each product label (title) a URL-safe slug for routing.

    - title: canonical label, matched verbatim against products.category
    - slug:  unique; used in /api/v1/products/categories/{slug}
"""

import uuid
from typing import Optional

from sqlalchemy import String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from pcbuilder.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )

    title: Mapped[str] = mapped_column(String(120), nullable=False)

    slug: Mapped[str] = mapped_column(String(120), nullable=False)

    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("slug", name="uq_categories_slug"),
    )

    def __repr__(self) -> str:
        return f"<Category(slug='{self.slug}', title='{self.title}')>"
