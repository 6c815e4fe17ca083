"""Customer Routes — HTTP surface over CustomerService.

Invariants:
    - Request bodies are shape-validated by Pydantic before reaching the handler
    - Handlers never contain business logic; every domain rejection comes from the service
    - Path ids arrive as plain strings so the service owns identifier validation
    - Success bodies use the {status: "success", data: ...} envelope; lists add pagination

Design Decisions:
    - PUT and PATCH share one partial-update handler: absent fields are never touched
    - DELETE answers 204 with no body
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from customers_api.api.dependencies import get_customer_service
from customers_api.core.domain_types import DEFAULT_PAGE_LIMIT
from customers_api.schemas.customer import (
    CustomerCreate, CustomerEnvelope, CustomerListEnvelope, CustomerResponse,
    CustomerUpdate, Pagination,
)
from customers_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.post(
    "", response_model=CustomerEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a customer."""
    customer = await service.create_customer(body.to_domain())
    return CustomerEnvelope(data=CustomerResponse.from_domain(customer))


@router.get("", response_model=CustomerListEnvelope)
async def list_customers(
    limit: int = Query(DEFAULT_PAGE_LIMIT),
    offset: int = Query(0),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers, newest first."""
    customers = await service.get_all_customers(limit, offset)
    return CustomerListEnvelope(
        data=[CustomerResponse.from_domain(c) for c in customers],
        pagination=Pagination(limit=limit, offset=offset, count=len(customers)),
    )


@router.get("/{customer_id}", response_model=CustomerEnvelope)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    """Get one customer."""
    customer = await service.get_customer_by_id(customer_id)
    return CustomerEnvelope(data=CustomerResponse.from_domain(customer))


@router.api_route(
    "/{customer_id}", methods=["PUT", "PATCH"],
    response_model=CustomerEnvelope,
)
async def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Apply a partial update. Fields not sent are left unchanged."""
    customer = await service.update_customer(customer_id, body.to_patch())
    return CustomerEnvelope(data=CustomerResponse.from_domain(customer))


@router.delete(
    "/{customer_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    """Hard-delete a customer."""
    await service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
