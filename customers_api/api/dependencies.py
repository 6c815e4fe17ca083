"""Route Dependencies — resolve objects wired by create_app.

Invariants:
    - Dependencies read app.state only; nothing is looked up from module globals
"""

from fastapi import Request

from customers_api.services.customer_service import CustomerService


def get_customer_service(request: Request) -> CustomerService:
    """FastAPI dependency for the process-wide CustomerService."""
    return request.app.state.customer_service
