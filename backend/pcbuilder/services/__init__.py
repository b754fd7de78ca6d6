# Services package init
"""
PC Builder Catalog API — Services Layer
========================================

What:  Business logic between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services build queries and reshape results.

Service Inventory:
    - ratings: averageRating from embedded reviews (pure functions)
    - category_resolver: slug → CategoryScope, including the "others" bucket
    - ProductService: product listing, featured sample, category pages,
      single product, legacy-rating cleanup
    - CategoryService: category listing
"""
