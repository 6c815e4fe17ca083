"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate request shape at the system boundary
    - Business rules live in core/, never here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
