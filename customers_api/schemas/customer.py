"""Customer Schemas — Pydantic request/response shapes for the customer endpoints.

Invariants:
    - Wire format is camelCase (firstName, customerId, dateCreated); snake_case accepted on input
    - Strings are stripped; optional fields sent as "" are stored as None
    - Email is syntax-checked (EmailStr), capped at 100 chars and lower-cased
    - CustomerUpdate distinguishes "absent" from "null" via model_fields_set;
      required columns (firstName, lastName, email) cannot be nulled
    - Business rules (name charset, phone digits) are NOT checked here: the service owns them

Design Decisions:
    - Shape validation only: keeps the service the single source of domain rejections
    - to_domain()/to_patch() convert at the boundary so core never sees Pydantic models
"""

from dataclasses import asdict
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator,
)
from pydantic.alias_generators import to_camel

from customers_api.core.domain_types import (
    Customer, CustomerPatch, NewCustomer, OPTIONAL_FIELDS, REQUIRED_FIELDS,
)


EMAIL_MAX_LENGTH = 100


def _normalize_email(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
    return value.lower()


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class _OptionalFields(_CamelModel):
    """Length-bounded free-text fields shared by create and update."""
    phone_number: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=50)
    state: str | None = Field(None, max_length=50)
    country: str | None = Field(None, max_length=50)

    @field_validator(*OPTIONAL_FIELDS)
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None


class CustomerCreate(_OptionalFields):
    """Customer creation payload."""
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    def to_domain(self) -> NewCustomer:
        return NewCustomer(**self.model_dump())


class CustomerUpdate(_OptionalFields):
    """Partial update payload — only fields sent by the client are applied."""
    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)
    email: EmailStr | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _normalize_email(v) if v is not None else v

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def to_patch(self) -> CustomerPatch:
        return CustomerPatch(self.model_dump(exclude_unset=True))


class CustomerResponse(_CamelModel):
    """Customer as returned to clients."""

    customer_id: UUID
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    date_created: datetime

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
        return cls(**asdict(customer))


class Pagination(BaseModel):
    limit: int
    offset: int
    count: int


class CustomerEnvelope(BaseModel):
    """{status: "success", data: Customer}"""
    status: Literal["success"] = "success"
    data: CustomerResponse


class CustomerListEnvelope(BaseModel):
    """{status: "success", data: [Customer], pagination: {...}}"""
    status: Literal["success"] = "success"
    data: list[CustomerResponse]
    pagination: Pagination
