"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave the store; the core works with domain dataclasses

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for alembic and tests
"""

from customers_api.models.customer import CustomerRecord  # noqa: F401
