"""Domain Types — verifies the Customer entity and its write shapes.

Tests:
    - CustomerId wraps UUID
    - Field sets: editable = required + optional, ids/timestamps excluded
    - CustomerPatch presence semantics: absent vs present-with-None
    - CustomerPatch rejects immutable/unknown fields and nulling required fields
    - Patch changes are read-only after construction
"""

import pytest
from datetime import datetime, timezone
from uuid import uuid4

from customers_api.core.domain_types import (
    Customer, CustomerId, CustomerPatch, NewCustomer,
    EDITABLE_FIELDS, OPTIONAL_FIELDS, REQUIRED_FIELDS,
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT,
)


def test_customer_id_wraps_uuid():
    uid = uuid4()
    assert CustomerId(uid) == uid


def test_editable_fields_exclude_identity_and_timestamp():
    assert EDITABLE_FIELDS == REQUIRED_FIELDS + OPTIONAL_FIELDS
    assert "customer_id" not in EDITABLE_FIELDS
    assert "date_created" not in EDITABLE_FIELDS


def test_pagination_defaults():
    assert DEFAULT_PAGE_LIMIT == 50
    assert MAX_PAGE_LIMIT == 100


def test_new_customer_as_values_covers_every_editable_field():
    data = NewCustomer(first_name="John", last_name="Doe", email="john@x.com")
    values = data.as_values()
    assert set(values) == set(EDITABLE_FIELDS)
    assert values["phone_number"] is None


def test_customer_editable_fields_match_creation_values():
    data = NewCustomer(first_name="John", last_name="Doe", email="john@x.com", city="Austin")
    customer = Customer(
        customer_id=CustomerId(uuid4()),
        date_created=datetime.now(timezone.utc),
        **data.as_values(),
    )
    assert customer.editable_fields() == data.as_values()


def test_empty_patch_is_empty():
    patch = CustomerPatch()
    assert patch.is_empty
    assert not patch.has("email")


def test_patch_distinguishes_absent_from_none():
    patch = CustomerPatch.of(phone_number=None)
    assert patch.has("phone_number")
    assert patch.get("phone_number") is None
    assert not patch.has("address")


@pytest.mark.parametrize("field", ["customer_id", "date_created", "nickname"])
def test_patch_rejects_non_editable_fields(field):
    with pytest.raises(ValueError, match="cannot be updated"):
        CustomerPatch({field: "x"})


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_patch_rejects_clearing_required_fields(field):
    with pytest.raises(ValueError, match="cannot be cleared"):
        CustomerPatch({field: None})


def test_patch_changes_are_read_only():
    source = {"first_name": "Jane"}
    patch = CustomerPatch(source)
    source["last_name"] = "Smith"
    assert not patch.has("last_name")
    with pytest.raises(TypeError):
        patch.changes["email"] = "x@y.com"
