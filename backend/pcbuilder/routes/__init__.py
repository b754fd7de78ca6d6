# Routes package init
"""
PC Builder Catalog API — API Routes Package
============================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - products.py:     GET   /api/v1/products
                       GET   /api/v1/products/featured
                       GET   /api/v1/products/categories/{category}
                       GET   /api/v1/products/{product_id}
    - categories.py:   GET   /api/v1/categories
    - maintenance.py:  PATCH /api/v1/mon-moto-update
    - health.py:       GET   /        (liveness)
                       GET   /health  (database check)

Design Principle:
    Routes are THIN — they take the per-request session, call one service
    method, and let FastAPI serialize the response model. Error status codes
    come from the exception handlers in main.py.
"""
