"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Absence is a return value (None / False), never an exception
    - Email collisions surface as DuplicateKeyError, distinguishable from any
      other store failure

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Protocol

from customers_api.core.domain_types import (
    Customer, CustomerId, CustomerPatch, NewCustomer,
)


class CustomerStore(Protocol):
    """Contract for customer persistence — implemented by shell."""
    async def create(self, data: NewCustomer) -> Customer: ...
    async def find_by_id(self, customer_id: CustomerId) -> Customer | None: ...
    async def find_by_email(self, email: str) -> Customer | None: ...
    async def find_all(self, limit: int, offset: int) -> list[Customer]: ...
    async def update(
        self, customer_id: CustomerId, patch: CustomerPatch,
    ) -> Customer | None: ...
    async def delete(self, customer_id: CustomerId) -> bool: ...
