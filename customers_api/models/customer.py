"""Customer ORM — persists the single customer entity.

Invariants:
    - customer_id is UUID primary key, generated on insert, never updated
    - email is unique (uq_customers_email) — the store's source of truth for uniqueness
    - date_created set once on insert, indexed for newest-first listing

Design Decisions:
    - Python-side uuid4 / now() defaults: identical behaviour on PostgreSQL and the
      SQLite test database; the migration also declares server defaults
    - Column lengths mirror the transport schema limits
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from customers_api.db.base import Base


class CustomerRecord(Base):
    """Customer row."""
    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("email", name="uq_customers_email"),
        Index("idx_customers_date_created", "date_created"),
        Index("idx_customers_last_name", "last_name"),
    )

    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    country: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
