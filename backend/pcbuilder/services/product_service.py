"""
PC Builder Catalog API — Product Service
=========================================

What:  Builds the product queries and reshapes rows into response models.
Why:   Keeps SQL and rating/category logic out of the route handlers.
Who:   Called by routes/products.py and routes/maintenance.py.

Operations:
    list_products()         SELECT * FROM products
    featured_products()     random sample, projected columns, + averageRating
    products_by_category()  category scan → CategoryScope → filtered products
    get_product()           primary-key lookup, + averageRating
    strip_legacy_rating()   UPDATE products SET individual_rating = NULL

Error Handling Strategy:
    Anything the driver raises (and any stored document that does not fit the
    response schema) is logged and re-raised as DatabaseError, which the global
    handler turns into a generic 500. NotFoundError / ValidationError pass
    through untouched.

Design Decision:
    ProductService is stateless — the session arrives with each call from the
    `get_db_session` dependency, so tests drive it with a mock session.
"""

import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pcbuilder.exceptions import CatalogError, DatabaseError, NotFoundError, ValidationError
from pcbuilder.models.category import Category
from pcbuilder.models.product import Product
from pcbuilder.schemas.catalog import (
    FeaturedProductResponse,
    ProductResponse,
    RatedProductResponse,
)
from pcbuilder.services.category_resolver import resolve_category
from pcbuilder.services.ratings import apply_average_rating, apply_average_ratings

logger = logging.getLogger(__name__)

# Columns the featured carousel needs; nothing else leaves the database
FEATURED_COLUMNS = (
    Product.id,
    Product.image,
    Product.product_name,
    Product.category,
    Product.price,
    Product.status,
    Product.reviews,
)


def _product_fields(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "product_name": product.product_name,
        "category": product.category,
        "price": product.price,
        "status": product.status,
        "image": product.image,
        "description": product.description,
        "key_features": product.key_features or {},
        "reviews": product.reviews or [],
        "individual_rating": product.individual_rating,
    }


def parse_product_id(raw_id: str) -> uuid.UUID:
    """
    Validates the path identifier before any query runs.

    Raises:
        ValidationError: the value is not a UUID (→ 400)
    """
    try:
        return uuid.UUID(raw_id)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            message=f"'{raw_id}' is not a valid product id",
            field="product_id",
        )


class ProductService:
    """
    Business logic for product reads and the legacy-rating cleanup.
    """

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """Every product, unmodified (no averageRating)."""
        try:
            result = await db.execute(select(Product))
            products = result.scalars().all()
            return [ProductResponse(**_product_fields(p)) for p in products]
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def featured_products(
        self, db: AsyncSession, sample_size: int = 6
    ) -> List[FeaturedProductResponse]:
        """
        Random sample of `sample_size` products for the storefront carousel.

        Sampling is done by the database (ORDER BY random() LIMIT n); fewer
        rows come back when the catalog is smaller than the sample.
        """
        try:
            result = await db.execute(
                select(*FEATURED_COLUMNS).order_by(func.random()).limit(sample_size)
            )
            rows = result.mappings().all()
            featured = [
                FeaturedProductResponse(**{**dict(row), "reviews": row["reviews"] or []})
                for row in rows
            ]
            return apply_average_ratings(featured)
        except Exception as e:
            logger.error("Database error sampling featured products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve featured products. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def products_by_category(
        self, db: AsyncSession, slug: str
    ) -> List[RatedProductResponse]:
        """
        Products for one category page.

        Categories are re-read on every call. An unknown slug returns an
        empty list without querying products.
        """
        try:
            category_result = await db.execute(select(Category))
            scope = resolve_category(slug, category_result.scalars().all())

            if scope is None:
                logger.info("No category with slug '%s'", slug)
                return []

            result = await db.execute(select(Product).where(scope.clause()))
            products = [
                RatedProductResponse(**_product_fields(p))
                for p in result.scalars().all()
            ]
            return apply_average_ratings(products)
        except Exception as e:
            logger.error(
                "Database error listing products for category '%s': %s",
                slug, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Could not retrieve products for this category. Please try again.",
                context={"slug": slug, "error_type": type(e).__name__},
            )

    async def get_product(self, db: AsyncSession, product_id: str) -> RatedProductResponse:
        """
        Single product with its averageRating.

        Raises:
            ValidationError: product_id is not a UUID (→ 400)
            NotFoundError: no product with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        pid = parse_product_id(product_id)

        try:
            result = await db.execute(select(Product).where(Product.id == pid))
            product = result.scalar_one_or_none()

            if product is None:
                raise NotFoundError(resource="product", resource_id=str(pid))

            return apply_average_rating(RatedProductResponse(**_product_fields(product)))

        except CatalogError:
            raise
        except Exception as e:
            logger.error("Database error fetching product %s: %s", pid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the product. Please try again.",
                context={"product_id": str(pid), "error_type": type(e).__name__},
            )

    async def strip_legacy_rating(self, db: AsyncSession) -> int:
        """
        Clears `individual_rating` on every product that still has it.

        Only rows carrying the field are counted, so the return value matches
        the number of products actually changed. No other column is touched.
        Concurrent readers may see a mix of cleared and uncleared rows until
        the request's transaction commits.
        """
        try:
            result = await db.execute(
                update(Product)
                .where(Product.individual_rating.is_not(None))
                .values(individual_rating=None)
                .execution_options(synchronize_session=False)
            )
            modified = result.rowcount
            logger.info("%d documents updated", modified)
            return modified
        except Exception as e:
            logger.error("Database error clearing legacy ratings: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update products. Please try again.",
                context={"error_type": type(e).__name__},
            )


product_service = ProductService()
