"""
PC Builder Catalog API — Review Aggregation
============================================

What:  Computes `averageRating` from a product's embedded reviews.
Why:   The rating is derived, never stored; every response that shows it
       recomputes it from the current review list.
Who:   Called by ProductService for the featured, category and detail endpoints.

Rules:
    - No reviews (None or empty) → 0
    - Otherwise the arithmetic mean of every `rating`, unrounded
    - A non-numeric rating raises TypeError instead of producing NaN
"""

from numbers import Real
from typing import Any, Iterable, List, Mapping, Optional, TypeVar

T = TypeVar("T")


def _rating_of(review: Any) -> Real:
    rating = review.get("rating") if isinstance(review, Mapping) else getattr(review, "rating", None)
    # bool is an int subclass; True must not count as a 1-star review
    if isinstance(rating, bool) or not isinstance(rating, Real):
        raise TypeError(f"Review rating must be a number, got {type(rating).__name__}")
    return rating


def average_rating(reviews: Optional[Iterable[Any]]) -> float:
    """Mean of the review ratings; 0 when there are none."""
    ratings = [_rating_of(review) for review in reviews or ()]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def apply_average_rating(product: T) -> T:
    """
    Sets `average_rating` on a single product and returns the same object.

    The product is mutated in place; callers should not keep a reference
    expecting the pre-aggregation state.
    """
    product.average_rating = average_rating(getattr(product, "reviews", None))
    return product


def apply_average_ratings(products: List[T]) -> List[T]:
    """List form of `apply_average_rating`; mutates every item in place."""
    for product in products:
        apply_average_rating(product)
    return products
