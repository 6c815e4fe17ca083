"""Seed Data — inserts sample customers for local development.

Usage:
    python -m customers_api.db.seed

Invariants:
    - Goes through CustomerService, so every sample obeys the business rules
    - Re-runnable: customers whose email already exists are skipped
"""

import asyncio
import logging

from customers_api.config import get_settings
from customers_api.core.domain_types import NewCustomer
from customers_api.core.errors import ConflictError
from customers_api.infrastructure.customer_store import SqlAlchemyCustomerStore
from customers_api.infrastructure.database import init_db
from customers_api.infrastructure.observability import setup_logging
from customers_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

SAMPLE_CUSTOMERS: tuple[NewCustomer, ...] = (
    NewCustomer(
        first_name="John", last_name="Doe", email="john.doe@example.com",
        phone_number="+1-555-010-1001", address="123 Main St",
        city="New York", state="NY", country="USA",
    ),
    NewCustomer(
        first_name="Jane", last_name="Smith", email="jane.smith@example.com",
        phone_number="+1-555-010-1002", address="456 Oak Ave",
        city="Los Angeles", state="CA", country="USA",
    ),
    NewCustomer(
        first_name="Michael", last_name="Johnson", email="michael.johnson@example.com",
        phone_number="+1-555-010-1003", address="789 Pine Rd",
        city="Chicago", state="IL", country="USA",
    ),
    NewCustomer(
        first_name="Emily", last_name="Davis", email="emily.davis@example.com",
        phone_number="+1-555-010-1004", address="321 Elm St",
        city="Houston", state="TX", country="USA",
    ),
    NewCustomer(
        first_name="Sean", last_name="O'Brien", email="sean.obrien@example.com",
        phone_number="+353 (1) 555-0105", city="Dublin", country="Ireland",
    ),
    NewCustomer(
        first_name="Anne-Marie", last_name="Dubois", email="anne-marie.dubois@example.com",
        city="Lyon", country="France",
    ),
)


async def seed_customers(service: CustomerService) -> int:
    """Create every sample customer not yet present. Returns how many were created."""
    created = 0
    for sample in SAMPLE_CUSTOMERS:
        try:
            await service.create_customer(sample)
            created += 1
        except ConflictError:
            logger.info(f"Skipping existing customer {sample.email}")
    return created


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    db_manager = init_db(settings)
    try:
        created = await seed_customers(
            CustomerService(SqlAlchemyCustomerStore(db_manager)),
        )
        logger.info(f"Seeded {created} customers")
    finally:
        await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(main())
