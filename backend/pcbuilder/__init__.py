"""
PC Builder Catalog API — Application Package Initializer
=========================================================

What: Marks the `pcbuilder` directory as a Python package.
Why:  Enables module imports like `from pcbuilder.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps the same layered split for every endpoint:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (ratings, category scope) │  ← Query building, reshaping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL; services never touch HTTP status codes except
    through the exceptions in `pcbuilder.exceptions`.
"""

__version__ = "1.0.0"
