"""Create customers table with unique email and listing indexes.

Revision ID: 001_create_customers
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_create_customers"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column(
            "customer_id", UUID(as_uuid=True), primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("address", sa.String(200), nullable=True),
        sa.Column("city", sa.String(50), nullable=True),
        sa.Column("state", sa.String(50), nullable=True),
        sa.Column("country", sa.String(50), nullable=True),
        sa.Column(
            "date_created", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("email", name="uq_customers_email"),
    )
    op.create_index(
        "idx_customers_date_created", "customers", [sa.text("date_created DESC")],
    )
    op.create_index("idx_customers_last_name", "customers", ["last_name"])


def downgrade() -> None:
    op.drop_index("idx_customers_last_name", table_name="customers")
    op.drop_index("idx_customers_date_created", table_name="customers")
    op.drop_table("customers")
