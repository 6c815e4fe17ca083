"""Customer Service — business-rule enforcement over the CustomerStore boundary.

Invariants:
    - The only component that rejects requests for domain reasons
    - Identifier and pagination checks run before any store call
    - Email pre-check is advisory; DuplicateKeyError from the store is the backstop
      and is re-classified as ConflictError in create/update only
    - Every other store error propagates unchanged
    - Zero rows affected after a successful existence check → InternalError

Design Decisions:
    - Store injected through the constructor (CustomerStore protocol): tests swap in
      fakes without patching, and the service holds no other state
    - Create runs the email pre-check before field validation, matching the
      documented step order of the create operation
"""

import logging

from customers_api.core.domain_types import (
    Customer, CustomerId, CustomerPatch, NewCustomer, DEFAULT_PAGE_LIMIT,
)
from customers_api.core.enforce_customer_rules import (
    check_pagination, normalize_new_customer, normalize_patch, parse_customer_id,
    validate_new_customer, validate_patch,
)
from customers_api.core.errors import (
    ConflictError, DuplicateKeyError, ErrorContext, InternalError,
    ResourceNotFoundError,
)
from customers_api.core.repository_protocols import CustomerStore

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = "Email already exists"


class CustomerService:
    """Service for customer CRUD with business-rule enforcement."""

    def __init__(self, store: CustomerStore):
        self._store = store

    async def create_customer(self, data: NewCustomer) -> Customer:
        await self._ensure_email_available(data.email, "create")

        error = validate_new_customer(data)
        if error:
            raise error
        data = normalize_new_customer(data)

        try:
            customer = await self._store.create(data)
        except DuplicateKeyError as e:
            logger.warning(
                "Email collision detected by store on create",
                extra={"operation": "create", "error_code": "CONFLICT"},
            )
            raise ConflictError(
                EMAIL_EXISTS_MESSAGE, ErrorContext(operation="create"),
            ) from e

        logger.info(
            "Customer created",
            extra={"customer_id": str(customer.customer_id), "operation": "create"},
        )
        return customer

    async def get_customer_by_id(self, customer_id: str) -> Customer:
        cid = parse_customer_id(customer_id)
        return await self._get_existing(cid, "get")

    async def get_all_customers(
        self, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0,
    ) -> list[Customer]:
        error = check_pagination(limit, offset)
        if error:
            raise error
        return await self._store.find_all(limit, offset)

    async def update_customer(
        self, customer_id: str, patch: CustomerPatch,
    ) -> Customer:
        cid = parse_customer_id(customer_id)
        existing = await self._get_existing(cid, "update")

        new_email = patch.get("email")
        if patch.has("email") and new_email != existing.email:
            await self._ensure_email_available(new_email, "update", cid)

        error = validate_patch(patch)
        if error:
            raise error
        patch = normalize_patch(patch)

        try:
            updated = await self._store.update(cid, patch)
        except DuplicateKeyError as e:
            logger.warning(
                "Email collision detected by store on update",
                extra={"customer_id": str(cid), "operation": "update"},
            )
            raise ConflictError(
                EMAIL_EXISTS_MESSAGE,
                ErrorContext(customer_id=str(cid), operation="update"),
            ) from e

        if updated is None:
            # TODO: classify as ResourceNotFoundError once clients can tell a
            # concurrent delete apart from a store fault
            logger.error(
                "Update affected no rows after existence check; possible concurrent delete",
                extra={"customer_id": str(cid), "operation": "update"},
            )
            raise InternalError(
                "Failed to update customer",
                ErrorContext(customer_id=str(cid), operation="update"),
            )

        logger.info(
            "Customer updated",
            extra={
                "customer_id": str(cid),
                "operation": "update",
                "fields": sorted(patch.changes),
            },
        )
        return updated

    async def delete_customer(self, customer_id: str) -> None:
        cid = parse_customer_id(customer_id)
        await self._get_existing(cid, "delete")

        deleted = await self._store.delete(cid)
        if not deleted:
            logger.error(
                "Delete affected no rows after existence check; possible concurrent delete",
                extra={"customer_id": str(cid), "operation": "delete"},
            )
            raise InternalError(
                "Failed to delete customer",
                ErrorContext(customer_id=str(cid), operation="delete"),
            )

        logger.info(
            "Customer deleted",
            extra={"customer_id": str(cid), "operation": "delete"},
        )

    # ─── helpers ────────────────────────────────────────────────

    async def _get_existing(self, cid: CustomerId, operation: str) -> Customer:
        customer = await self._store.find_by_id(cid)
        if customer is None:
            raise ResourceNotFoundError(
                "Customer", str(cid),
                ErrorContext(customer_id=str(cid), operation=operation),
            )
        return customer

    async def _ensure_email_available(
        self, email: str, operation: str, cid: CustomerId | None = None,
    ) -> None:
        """Advisory uniqueness pre-check. The store constraint remains authoritative."""
        if await self._store.find_by_email(email) is not None:
            logger.warning(
                "Email already in use",
                extra={
                    "operation": operation,
                    "customer_id": str(cid) if cid else None,
                    "error_code": "CONFLICT",
                },
            )
            raise ConflictError(
                EMAIL_EXISTS_MESSAGE,
                ErrorContext(customer_id=str(cid) if cid else None, operation=operation),
            )
