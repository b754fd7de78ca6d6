"""
PC Builder Catalog API — Category Resolution
=============================================

What:  Turns the `{category}` route segment into the set of products to return.
How:   `resolve_category()` looks the slug up in the full category list and
       returns a `CategoryScope`, which can be evaluated in memory (`matches`)
       or rendered as a SQLAlchemy filter (`clause`).

Resolution rules:
    "others"      → products whose category is missing or is not any known
                    title, plus products literally labelled "Others" (even if
                    "Others" is itself a known title)
    known slug    → products whose category equals that category's title
                    (first category with the slug wins)
    unknown slug  → None; the caller answers with an empty list
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Optional

from sqlalchemy import ColumnElement, or_

from pcbuilder.models.product import Product

OTHERS_SLUG = "others"
OTHERS_TITLE = "Others"


@dataclass(frozen=True)
class CategoryScope:
    """
    Which product category labels a request selects.

    For a regular category `titles` holds its single title. For the others
    bucket `titles` holds every known title and `others` is True, meaning
    "anything outside these titles, or exactly 'Others'".
    """

    titles: FrozenSet[str]
    others: bool = False

    def matches(self, category: Optional[str]) -> bool:
        if self.others:
            return category is None or category not in self.titles or category == OTHERS_TITLE
        return category in self.titles

    def clause(self) -> ColumnElement[bool]:
        if self.others:
            # NOT IN never matches NULL, so missing categories are added explicitly
            return or_(
                Product.category.is_(None),
                Product.category.not_in(sorted(self.titles)),
                Product.category == OTHERS_TITLE,
            )
        (title,) = self.titles
        return Product.category == title


def resolve_category(slug: str, categories: Iterable[Any]) -> Optional[CategoryScope]:
    """
    Resolve a route slug against the stored categories.

    Args:
        slug: The `{category}` path segment, compared verbatim.
        categories: Every stored category (anything with `title` and `slug`).

    Returns:
        The matching scope, or None when no category has this slug.
    """
    categories = list(categories)

    if slug == OTHERS_SLUG:
        return CategoryScope(
            titles=frozenset(category.title for category in categories),
            others=True,
        )

    for category in categories:
        if category.slug == slug:
            return CategoryScope(titles=frozenset({category.title}))

    return None
