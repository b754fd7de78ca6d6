"""
PC Builder Catalog API — Category Route Handler
================================================

What:  GET /api/v1/categories for the storefront navigation.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pcbuilder.database import get_db_session
from pcbuilder.schemas.catalog import CategoryResponse, ErrorResponse
from pcbuilder.services.category_service import category_service

router = APIRouter(prefix="/api/v1", tags=["Categories"])


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all categories",
)
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> List[CategoryResponse]:
    return await category_service.list_categories(db)
