"""
PC Builder Catalog API — Pydantic Request/Response Schemas
===========================================================

What:  Pydantic models defining the JSON contract with the storefront.
Why:   Field names on the wire are camelCase (`productName`, `averageRating`)
       and the identifier is `_id`, which is what the storefront already reads.
       Python code uses snake_case through the alias generator.
How:   FastAPI validates handler return values against these models and
       serializes them by alias.

Design Decision:
    Schemas are separate from the SQLAlchemy models because the API adds a
    computed field (`averageRating`) and hides absent legacy fields, neither of
    which belongs in the table definition.
"""

import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    StrictFloat,
    StrictInt,
    model_serializer,
)
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Shared config: camelCase aliases on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Embedded Documents
# ══════════════════════════════════════════════════════════════════════════


class Review(BaseModel):
    """
    One customer review embedded in a product.

    Only `rating` is interpreted; any other keys (reviewer, comment, date)
    are kept and echoed back unchanged.

    Why strict numbers:
        A rating stored as "4" or true would otherwise be coerced or produce
        NaN in the average. Rejecting it at the schema keeps averageRating a
        plain mean of real numbers.
    """

    model_config = ConfigDict(extra="allow")

    rating: Union[StrictInt, StrictFloat]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(CatalogModel):
    """
    What:  Full product document.
    Who:   GET /api/v1/products (as-is, no computed rating).

    `individualRating` is only present for products that still carry the
    legacy field; a NULL column is serialized as an absent key.

    Reviews are passed through as stored. Nothing here reads `rating`, so a
    review without one does not stop the listing.
    """

    id: uuid.UUID = Field(alias="_id")
    product_name: str
    category: Optional[str] = None
    price: float
    status: str
    image: Optional[str] = None
    description: Optional[str] = None
    key_features: Dict[str, Any] = Field(default_factory=dict)
    reviews: List[Dict[str, Any]] = Field(default_factory=list)
    individual_rating: Optional[float] = None

    @model_serializer(mode="wrap")
    def omit_absent_legacy_rating(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        if self.individual_rating is None:
            data.pop("individualRating", None)
            data.pop("individual_rating", None)
        return data


class RatedProductResponse(ProductResponse):
    """
    What:  Product document plus the computed `averageRating`.
    Who:   GET /api/v1/products/{id} and GET /api/v1/products/categories/{slug}.

    Reviews are validated here because averageRating is computed from them.
    """

    reviews: List[Review] = Field(default_factory=list)
    average_rating: float = 0.0


class FeaturedProductResponse(CatalogModel):
    """
    What:  Projection used by the featured carousel.
    Who:   GET /api/v1/products/featured.

    Carries exactly the projected columns plus `averageRating`; description,
    key features and the legacy rating are never sent here.
    """

    id: uuid.UUID = Field(alias="_id")
    image: Optional[str] = None
    product_name: str
    category: Optional[str] = None
    price: float
    status: str
    reviews: List[Review] = Field(default_factory=list)
    average_rating: float = 0.0


class CategoryResponse(CatalogModel):
    """A category as listed by GET /api/v1/categories."""

    id: uuid.UUID = Field(alias="_id")
    title: str
    slug: str
    image: Optional[str] = None


class StatusResponse(BaseModel):
    """Acknowledgement returned by the maintenance update."""

    status: str = Field(default="done")


class LivenessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Model
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "product with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
