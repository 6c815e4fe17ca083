"""Customer Rule Enforcement — tests for pure name, phone, id and pagination checks.

Tests cover:
    - check_name enforces trimmed length 2..50 and the letter/space/apostrophe/hyphen set
    - check_phone_number enforces allowed punctuation and the 10-digit minimum
    - check_pagination bounds limit to 1..100 and offset to >= 0
    - parse_customer_id accepts canonical UUIDs in any case, rejects everything else
    - validate_new_customer / validate_patch chain checks — first error wins
    - normalize_new_customer / normalize_patch store names in their checked, trimmed form
"""

import pytest
from uuid import UUID

from customers_api.core.domain_types import CustomerPatch, NewCustomer
from customers_api.core.enforce_customer_rules import (
    check_name,
    check_phone_number,
    check_pagination,
    normalize_new_customer,
    normalize_patch,
    parse_customer_id,
    validate_new_customer,
    validate_patch,
)
from customers_api.core.errors import ErrorKind, InvalidArgumentError


# ─── check_name ──────────────────────────────────────────────────

@pytest.mark.parametrize("name", ["Jo", "John", "O'Brien", "Anne-Marie", "Mary Ann", "Van\tDyke", "A" * 50])
def test_check_name_accepts_valid_names(name):
    assert check_name(name, "first_name") is None


def test_check_name_rejects_short_name():
    error = check_name("A", "first_name")
    assert isinstance(error, InvalidArgumentError)
    assert error.message == "First name must be at least 2 characters long"
    assert error.field == "first_name"
    assert error.kind == ErrorKind.INVALID_ARGUMENT


def test_check_name_measures_trimmed_length():
    error = check_name("  A  ", "last_name")
    assert error.message == "Last name must be at least 2 characters long"


def test_check_name_rejects_long_name():
    error = check_name("A" * 51, "last_name")
    assert error.message == "Last name must not exceed 50 characters"


def test_check_name_allows_padding_beyond_fifty_when_trimmed_fits():
    assert check_name("  " + "A" * 50 + "  ", "first_name") is None


@pytest.mark.parametrize("name", ["J0hn", "John!", "José", "John_Doe", "John.Doe"])
def test_check_name_rejects_invalid_characters(name):
    error = check_name(name, "first_name")
    assert error.message == "First name contains invalid characters"


# ─── check_phone_number ──────────────────────────────────────────

@pytest.mark.parametrize("phone", ["5550101234", "+1 (555) 010-1234", "+1-555-010-1001", "555 010 1234"])
def test_check_phone_accepts_valid_numbers(phone):
    assert check_phone_number(phone) is None


@pytest.mark.parametrize("phone", ["555-010-1234 ext", "+1.555.010.1234", "phone", "555/0101234"])
def test_check_phone_rejects_invalid_characters(phone):
    error = check_phone_number(phone)
    assert error.message == "Invalid phone number format"
    assert error.field == "phone_number"


def test_check_phone_requires_ten_digits():
    error = check_phone_number("+1-555-0101")
    assert error.message == "Phone number must contain at least 10 digits"


def test_check_phone_counts_only_digits():
    assert check_phone_number("(((123)))-456-7890") is None
    assert check_phone_number("++ 123 456 789") is not None


# ─── check_pagination ────────────────────────────────────────────

@pytest.mark.parametrize("limit,offset", [(1, 0), (50, 0), (100, 0), (10, 500)])
def test_check_pagination_accepts_bounds(limit, offset):
    assert check_pagination(limit, offset) is None


@pytest.mark.parametrize("limit", [0, -1, 101])
def test_check_pagination_rejects_limit_out_of_range(limit):
    error = check_pagination(limit, 0)
    assert error.message == "Limit must be between 1 and 100"
    assert error.field == "limit"


def test_check_pagination_rejects_negative_offset():
    error = check_pagination(10, -1)
    assert error.message == "Offset must be non-negative"
    assert error.field == "offset"


# ─── parse_customer_id ───────────────────────────────────────────

def test_parse_customer_id_returns_uuid():
    raw = "123e4567-e89b-12d3-a456-426614174000"
    assert parse_customer_id(raw) == UUID(raw)


def test_parse_customer_id_is_case_insensitive():
    raw = "123E4567-E89B-12D3-A456-426614174000"
    assert parse_customer_id(raw) == UUID(raw.lower())


@pytest.mark.parametrize("raw", [
    "not-a-uuid",
    "",
    "123e4567e89b12d3a456426614174000",
    "{123e4567-e89b-12d3-a456-426614174000}",
    "123e4567-e89b-12d3-a456-42661417400g",
    "123e4567-e89b-12d3-a456-426614174000 ",
])
def test_parse_customer_id_rejects_non_canonical_forms(raw):
    with pytest.raises(InvalidArgumentError, match="Invalid customer ID format"):
        parse_customer_id(raw)


# ─── chained validation ──────────────────────────────────────────

def _new(**overrides) -> NewCustomer:
    values = {"first_name": "John", "last_name": "Doe", "email": "john@x.com"}
    values.update(overrides)
    return NewCustomer(**values)


def test_validate_new_customer_passes_valid_input():
    assert validate_new_customer(_new(phone_number="5550101234")) is None


def test_validate_new_customer_reports_first_name_before_last_name():
    error = validate_new_customer(_new(first_name="J", last_name="D"))
    assert error.field == "first_name"


def test_validate_new_customer_skips_missing_phone():
    assert validate_new_customer(_new(phone_number=None)) is None


def test_validate_new_customer_checks_phone():
    error = validate_new_customer(_new(phone_number="123"))
    assert error.field == "phone_number"


def test_validate_patch_checks_only_present_fields():
    assert validate_patch(CustomerPatch.of(city="Paris")) is None
    assert validate_patch(CustomerPatch.of(last_name="X")).field == "last_name"


def test_validate_patch_allows_clearing_phone():
    assert validate_patch(CustomerPatch.of(phone_number=None)) is None


def test_validate_patch_rejects_bad_phone():
    assert validate_patch(CustomerPatch.of(phone_number="12-34")).field == "phone_number"


# ─── normalization ───────────────────────────────────────────────

def test_normalize_new_customer_trims_names():
    padded = "  " + "A" * 50 + "  "
    data = normalize_new_customer(_new(first_name=padded, last_name=" Doe\t"))
    assert data.first_name == "A" * 50
    assert data.last_name == "Doe"
    assert data.email == "john@x.com"


def test_normalize_patch_trims_present_names_only():
    patch = normalize_patch(CustomerPatch.of(last_name="  Smith ", city=" Paris "))
    assert dict(patch.changes) == {"last_name": "Smith", "city": " Paris "}


def test_normalize_patch_without_names_is_unchanged():
    patch = CustomerPatch.of(city="Paris")
    assert normalize_patch(patch) is patch
