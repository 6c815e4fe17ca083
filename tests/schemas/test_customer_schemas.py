"""Customer Schemas — verifies wire-format parsing and conversion to domain shapes.

Tests:
    - camelCase and snake_case both accepted on input; output is camelCase
    - Emails lower-cased and capped at 100 characters
    - Blank optional strings become None
    - CustomerUpdate keeps only fields the client actually sent
    - Null is rejected for firstName, lastName and email on update
"""

import pytest
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import ValidationError

from customers_api.core.domain_types import Customer, CustomerId
from customers_api.schemas.customer import (
    CustomerCreate, CustomerResponse, CustomerUpdate,
)


def test_create_accepts_camel_case():
    body = CustomerCreate.model_validate({
        "firstName": "John", "lastName": "Doe", "email": "john@example.com",
        "phoneNumber": "5550101234",
    })
    assert body.first_name == "John"
    assert body.phone_number == "5550101234"


def test_create_accepts_snake_case():
    body = CustomerCreate.model_validate({
        "first_name": "John", "last_name": "Doe", "email": "john@example.com",
    })
    assert body.last_name == "Doe"


def test_create_lowercases_email():
    body = CustomerCreate(first_name="John", last_name="Doe", email="John@Example.COM")
    assert body.email == "john@example.com"


def test_create_rejects_overlong_email():
    with pytest.raises(ValidationError):
        CustomerCreate(
            first_name="John", last_name="Doe",
            email="a" * 60 + "@" + "b" * 40 + ".com",
        )


def test_create_strips_and_nulls_blank_optionals():
    body = CustomerCreate(
        first_name="  John ", last_name="Doe", email="john@example.com",
        city="  ", country="",
    )
    assert body.first_name == "John"
    assert body.city is None
    assert body.country is None


def test_create_rejects_overlong_address():
    with pytest.raises(ValidationError):
        CustomerCreate(
            first_name="John", last_name="Doe", email="john@example.com",
            address="x" * 201,
        )


def test_create_to_domain():
    data = CustomerCreate(
        first_name="John", last_name="Doe", email="john@example.com", city="Austin",
    ).to_domain()
    assert data.city == "Austin"
    assert data.phone_number is None


def test_update_patch_contains_only_sent_fields():
    patch = CustomerUpdate.model_validate({"city": "Boston"}).to_patch()
    assert dict(patch.changes) == {"city": "Boston"}


def test_update_explicit_null_clears_optional_field():
    patch = CustomerUpdate.model_validate({"phoneNumber": None}).to_patch()
    assert patch.has("phone_number")
    assert patch.get("phone_number") is None


def test_update_empty_body_is_empty_patch():
    assert CustomerUpdate.model_validate({}).to_patch().is_empty


@pytest.mark.parametrize("field", ["firstName", "lastName", "email"])
def test_update_rejects_null_required_field(field):
    with pytest.raises(ValidationError, match="cannot be null"):
        CustomerUpdate.model_validate({field: None})


def test_update_ignores_unknown_fields():
    patch = CustomerUpdate.model_validate(
        {"customerId": str(uuid4()), "dateCreated": "2024-01-01", "city": "X"},
    ).to_patch()
    assert dict(patch.changes) == {"city": "X"}


def test_response_serializes_camel_case():
    customer = Customer(
        customer_id=CustomerId(uuid4()),
        first_name="John", last_name="Doe", email="john@example.com",
        date_created=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    data = CustomerResponse.from_domain(customer).model_dump(by_alias=True)
    assert data["customerId"] == customer.customer_id
    assert data["firstName"] == "John"
    assert data["dateCreated"] == customer.date_created
    assert data["phoneNumber"] is None


def test_phone_number_allows_up_to_twenty_characters():
    body = CustomerCreate(
        first_name="John", last_name="Doe", email="john@example.com",
        phone_number="+1 (555) 010-1001 00",
    )
    assert len(body.phone_number) == 20
    with pytest.raises(ValidationError):
        CustomerCreate(
            first_name="John", last_name="Doe", email="john@example.com",
            phone_number="+1 (555) 010-1001 000",
        )
