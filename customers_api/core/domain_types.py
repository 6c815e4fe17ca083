"""Domain Types — the Customer entity and its creation/partial-update shapes.

Invariants:
    - CustomerId wraps UUID — never use bare UUID in domain logic
    - customer_id and date_created are never part of a write shape
    - CustomerPatch is an explicit field-presence map: a key present means
      "replace this column", a key absent means "leave unchanged"
    - A patch value of None clears an optional column

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for entities: the core hands out values, never live ORM rows
    - Mapping-backed patch over per-field sentinels: the store emits clauses straight
      from the map, so untouched columns can never be overwritten
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", UUID)


# ─── Field Sets ──────────────────────────────────────────────────

REQUIRED_FIELDS: tuple[str, ...] = ("first_name", "last_name", "email")
OPTIONAL_FIELDS: tuple[str, ...] = (
    "phone_number", "address", "city", "state", "country",
)
EDITABLE_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + OPTIONAL_FIELDS


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 100


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Customer:
    """Persisted customer record."""
    customer_id: CustomerId
    first_name: str
    last_name: str
    email: str
    date_created: datetime
    phone_number: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None

    def editable_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}


@dataclass(frozen=True)
class NewCustomer:
    """Creation shape — every editable field, optional ones nullable."""
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None

    def as_values(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}


@dataclass(frozen=True)
class CustomerPatch:
    """Partial-update shape backed by a field-presence map."""
    changes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
            )
        for name in REQUIRED_FIELDS:
            if name in self.changes and self.changes[name] is None:
                raise ValueError(f"{name} cannot be cleared")
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @classmethod
    def of(cls, **changes: Any) -> "CustomerPatch":
        return cls(changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def has(self, name: str) -> bool:
        return name in self.changes

    def get(self, name: str, default: Any = None) -> Any:
        return self.changes.get(name, default)
