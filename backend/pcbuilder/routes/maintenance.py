"""
PC Builder Catalog API — Maintenance Route Handler
===================================================

What:  PATCH /api/v1/mon-moto-update, the one mutation the API exposes.
Why:   Products used to store a per-product `individualRating`; it has been
       replaced by the averageRating computed from reviews. This endpoint
       clears the old field on every product.
When:  Run once after deploying; repeated calls are harmless (0 rows change).

No filter, no body. Readers running concurrently may see some products
cleared and others not until the update commits.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pcbuilder.database import get_db_session
from pcbuilder.schemas.catalog import ErrorResponse, StatusResponse
from pcbuilder.services.product_service import product_service

router = APIRouter(prefix="/api/v1", tags=["Maintenance"])


@router.patch(
    "/mon-moto-update",
    response_model=StatusResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Remove the legacy individualRating field from every product",
)
async def strip_legacy_rating(db: AsyncSession = Depends(get_db_session)) -> StatusResponse:
    await product_service.strip_legacy_rating(db)
    return StatusResponse(status="done")
