"""Customer Rule Enforcement — field-format, identifier and pagination checks.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_* functions return InvalidArgumentError on violation, None on success
    - Names: trimmed length in [2, 50], characters limited to letters, space,
      tab, apostrophe and hyphen
    - Phone numbers: digits and + - ( ) space only, at least 10 digits
    - Identifiers: canonical 8-4-4-4-12 hex UUID, case-insensitive
    - Names are stored trimmed, so the checked length is the persisted length

Design Decisions:
    - Return errors (not raise): the service decides when to raise, so every rule is
      testable without pytest.raises plumbing
    - parse_customer_id raises: callers need the parsed value, not just a verdict
"""

import re
from dataclasses import replace
from uuid import UUID

from customers_api.core.domain_types import (
    CustomerId, CustomerPatch, NewCustomer, MAX_PAGE_LIMIT,
)
from customers_api.core.errors import InvalidArgumentError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PHONE_MIN_DIGITS = 10

_NAME_PATTERN = re.compile(r"[A-Za-z \t'-]+")
_PHONE_PATTERN = re.compile(r"[0-9 \-+()]+")
_NON_DIGIT = re.compile(r"\D")
_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)

_FIELD_LABELS = {"first_name": "First name", "last_name": "Last name"}
NAME_FIELDS: tuple[str, ...] = tuple(_FIELD_LABELS)


def check_name(value: str, field: str) -> InvalidArgumentError | None:
    """Length and character-class rule for first/last names."""
    label = _FIELD_LABELS.get(field, field)
    trimmed = value.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        return InvalidArgumentError(
            f"{label} must be at least {NAME_MIN_LENGTH} characters long", field,
        )
    if len(trimmed) > NAME_MAX_LENGTH:
        return InvalidArgumentError(
            f"{label} must not exceed {NAME_MAX_LENGTH} characters", field,
        )
    if not _NAME_PATTERN.fullmatch(trimmed):
        return InvalidArgumentError(f"{label} contains invalid characters", field)
    return None


def check_phone_number(value: str) -> InvalidArgumentError | None:
    """Allowed punctuation plus a minimum digit count."""
    if not _PHONE_PATTERN.fullmatch(value):
        return InvalidArgumentError("Invalid phone number format", "phone_number")
    if len(_NON_DIGIT.sub("", value)) < PHONE_MIN_DIGITS:
        return InvalidArgumentError(
            f"Phone number must contain at least {PHONE_MIN_DIGITS} digits",
            "phone_number",
        )
    return None


def check_pagination(limit: int, offset: int) -> InvalidArgumentError | None:
    if limit < 1 or limit > MAX_PAGE_LIMIT:
        return InvalidArgumentError(
            f"Limit must be between 1 and {MAX_PAGE_LIMIT}", "limit",
        )
    if offset < 0:
        return InvalidArgumentError("Offset must be non-negative", "offset")
    return None


def parse_customer_id(raw: str) -> CustomerId:
    """Parse a canonical UUID string. Raises InvalidArgumentError otherwise."""
    if not isinstance(raw, str) or not _UUID_PATTERN.fullmatch(raw):
        raise InvalidArgumentError("Invalid customer ID format", "customer_id")
    return CustomerId(UUID(raw))


def validate_new_customer(data: NewCustomer) -> InvalidArgumentError | None:
    """Chain create-time checks. Returns first error or None."""
    return (
        check_name(data.first_name, "first_name")
        or check_name(data.last_name, "last_name")
        or (check_phone_number(data.phone_number) if data.phone_number else None)
    )


def validate_patch(patch: CustomerPatch) -> InvalidArgumentError | None:
    """Chain checks for the fields present in a patch. Returns first error or None."""
    for field in ("first_name", "last_name"):
        if patch.has(field):
            error = check_name(patch.get(field), field)
            if error:
                return error
    phone = patch.get("phone_number")
    if phone:
        return check_phone_number(phone)
    return None


def normalize_new_customer(data: NewCustomer) -> NewCustomer:
    """Trim first/last name to the form that was length-checked."""
    return replace(
        data, first_name=data.first_name.strip(), last_name=data.last_name.strip(),
    )


def normalize_patch(patch: CustomerPatch) -> CustomerPatch:
    """Trim any first/last name present in the patch."""
    trimmed = {
        name: patch.get(name).strip() for name in NAME_FIELDS if patch.has(name)
    }
    if not trimmed:
        return patch
    return CustomerPatch({**patch.changes, **trimmed})
