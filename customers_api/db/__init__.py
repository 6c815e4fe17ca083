"""Database Package — SQLAlchemy Base and development seed data.

Invariants:
    - All ORM models share the Base declared in db/base.py
    - Schema changes go through alembic migrations, never metadata.create_all in production

Design Decisions:
    - asyncpg driver for PostgreSQL: native async, no thread pool overhead
"""
