"""
Product Catalog Backend — Application Package
===============================================

What: The `catalog` package: a CRUD HTTP service for products.
Who:  Imported by uvicorn (`uvicorn catalog.main:app`), Alembic and pytest.

Layers:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP layer)          │  ← status codes, request parsing
    ├─────────────────────────────────────┤
    │   Services (ProductRepository)      │  ← store operations, not-found
    ├─────────────────────────────────────┤
    │    Models (ORM) & Schemas (wire)    │  ← SQLAlchemy + Pydantic
    ├─────────────────────────────────────┤
    │     Database (engine, sessions)     │  ← async SQLAlchemy
    └─────────────────────────────────────┘

Errors raised anywhere below the routes are translated to JSON responses by
the ordered table in `catalog.errors`.
"""

__version__ = "1.0.0"
