"""
PC Builder Catalog API — Product Route Handlers
================================================

What:  GET endpoints under /api/v1/products.
How:   Each handler takes the per-request session and delegates to ProductService.

Route order matters:
    /products/featured and /products/categories/{category} are registered
    before /products/{product_id}, otherwise "featured" would be treated as an id.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pcbuilder.config import settings
from pcbuilder.database import get_db_session
from pcbuilder.schemas.catalog import (
    ErrorResponse,
    FeaturedProductResponse,
    ProductResponse,
    RatedProductResponse,
)
from pcbuilder.services.product_service import product_service

router = APIRouter(prefix="/api/v1/products", tags=["Products"])


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(db: AsyncSession = Depends(get_db_session)) -> List[ProductResponse]:
    return await product_service.list_products(db)


@router.get(
    "/featured",
    response_model=List[FeaturedProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Random sample of featured products",
    description=(
        "Returns a random sample of products (6 by default) with only the fields "
        "the featured carousel shows, plus the computed averageRating."
    ),
)
async def featured_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[FeaturedProductResponse]:
    return await product_service.featured_products(db, settings.featured_sample_size)


@router.get(
    "/categories/{category}",
    response_model=List[RatedProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List the products of a category",
    description=(
        "Resolves the category slug to its title and returns the matching products "
        "with averageRating. The reserved slug 'others' returns every product whose "
        "category is not a known title, plus products labelled 'Others'. "
        "An unknown slug returns an empty list."
    ),
)
async def products_by_category(
    category: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[RatedProductResponse]:
    return await product_service.products_by_category(db, category)


@router.get(
    "/{product_id}",
    response_model=RatedProductResponse,
    responses={
        400: {"description": "Malformed product id", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single product by ID",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> RatedProductResponse:
    """
    Get one product with its averageRating.

    Args:
        product_id: Taken as a plain string so a malformed id is answered by
                    our own 400 ValidationError instead of FastAPI's 422.
    """
    return await product_service.get_product(db, product_id)
