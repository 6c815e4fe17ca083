"""Customer Store — SQLAlchemy implementation of the CustomerStore protocol.

Invariants:
    - The only module that knows the customers table layout
    - Every query is parameterized; UPDATE clauses come from the patch's presence map
    - Absent rows return None / False, never raise
    - Unique violations raise DuplicateKeyError; every other failure is left to
      DatabaseSessionManager, which maps it to DatabaseError
    - ORM rows are converted to frozen Customer values before leaving the store

Design Decisions:
    - One short-lived AsyncSession per call, drawn from the injected manager:
      the store never owns the pool
    - UPDATE + SELECT in the same transaction instead of RETURNING: works on every
      SQLite version used by the test suite
"""

import logging
from contextlib import contextmanager

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from customers_api.core.domain_types import (
    Customer, CustomerId, CustomerPatch, NewCustomer,
)
from customers_api.core.errors import DuplicateKeyError
from customers_api.infrastructure.database import (
    DatabaseSessionManager, is_unique_violation,
)
from customers_api.models.customer import CustomerRecord

logger = logging.getLogger(__name__)


@contextmanager
def _duplicate_key_on_unique_violation():
    """Re-raise unique-constraint IntegrityErrors as DuplicateKeyError."""
    try:
        yield
    except IntegrityError as e:
        if is_unique_violation(e):
            raise DuplicateKeyError("email") from e
        raise


def _to_customer(record: CustomerRecord) -> Customer:
    return Customer(
        customer_id=CustomerId(record.customer_id),
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        phone_number=record.phone_number,
        address=record.address,
        city=record.city,
        state=record.state,
        country=record.country,
        date_created=record.date_created,
    )


class SqlAlchemyCustomerStore:
    """CustomerStore backed by an async SQLAlchemy engine."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def create(self, data: NewCustomer) -> Customer:
        async with self._db.session() as db:
            record = CustomerRecord(**data.as_values())
            db.add(record)
            with _duplicate_key_on_unique_violation():
                await db.commit()
            await db.refresh(record)
            logger.debug(
                "Customer row inserted",
                extra={"customer_id": str(record.customer_id)},
            )
            return _to_customer(record)

    async def find_by_id(self, customer_id: CustomerId) -> Customer | None:
        async with self._db.session() as db:
            return await self._select_one(
                db, CustomerRecord.customer_id == customer_id,
            )

    async def find_by_email(self, email: str) -> Customer | None:
        async with self._db.session() as db:
            return await self._select_one(db, CustomerRecord.email == email)

    async def find_all(self, limit: int, offset: int) -> list[Customer]:
        query = (
            select(CustomerRecord)
            .order_by(CustomerRecord.date_created.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self._db.session() as db:
            result = await db.execute(query)
            return [_to_customer(r) for r in result.scalars().all()]

    async def update(
        self, customer_id: CustomerId, patch: CustomerPatch,
    ) -> Customer | None:
        if patch.is_empty:
            return await self.find_by_id(customer_id)

        stmt = (
            update(CustomerRecord)
            .where(CustomerRecord.customer_id == customer_id)
            .values(**dict(patch.changes))
            .execution_options(synchronize_session=False)
        )
        async with self._db.session() as db:
            with _duplicate_key_on_unique_violation():
                result = await db.execute(stmt)
            if result.rowcount == 0:
                await db.rollback()
                return None
            customer = await self._select_one(
                db, CustomerRecord.customer_id == customer_id,
            )
            with _duplicate_key_on_unique_violation():
                await db.commit()
            return customer

    async def delete(self, customer_id: CustomerId) -> bool:
        stmt = delete(CustomerRecord).where(
            CustomerRecord.customer_id == customer_id,
        )
        async with self._db.session() as db:
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount > 0

    # ─── helpers ────────────────────────────────────────────────

    async def _select_one(self, db: AsyncSession, condition) -> Customer | None:
        result = await db.execute(select(CustomerRecord).where(condition))
        record = result.scalar_one_or_none()
        return _to_customer(record) if record else None

