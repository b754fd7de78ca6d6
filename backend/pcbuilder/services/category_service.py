"""
PC Builder Catalog API — Category Service
==========================================

What:  Lists categories for the storefront navigation.
Who:   Called by GET /api/v1/categories.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pcbuilder.exceptions import DatabaseError
from pcbuilder.models.category import Category
from pcbuilder.schemas.catalog import CategoryResponse

logger = logging.getLogger(__name__)


class CategoryService:

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        try:
            result = await db.execute(select(Category))
            return [
                CategoryResponse(
                    id=category.id,
                    title=category.title,
                    slug=category.slug,
                    image=category.image,
                )
                for category in result.scalars().all()
            ]
        except Exception as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            )


category_service = CategoryService()
