"""Create products and categories tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `categories` and `products` tables.
How:   UUID primary keys (gen_random_uuid), JSONB for the embedded reviews
       and key features, a nullable legacy `individual_rating` column.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("slug", sa.String(120), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )

    op.create_table(
        "products",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("product_name", sa.String(255), nullable=False),
        # Free-text label matched against categories.title; deliberately no FK
        sa.Column("category", sa.String(120), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column(
            "status",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'In Stock'"),
        ),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "key_features",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "reviews",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        # Legacy per-product rating, cleared by PATCH /api/v1/mon-moto-update
        sa.Column("individual_rating", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_products_category", "products", ["category"])


def downgrade() -> None:
    op.drop_index("idx_products_category", table_name="products")
    op.drop_table("products")
    op.drop_table("categories")
