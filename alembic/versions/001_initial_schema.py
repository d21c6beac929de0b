"""Initial schema — locations, technicians, work orders.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Locations
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ref", sa.String(100), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
    )

    # Technicians
    op.create_table(
        "technicians",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "skills", ARRAY(sa.String(30)), nullable=False, server_default="{}"
        ),
        sa.Column("location_ref", sa.String(100), nullable=True),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default="true"),
    )
    op.create_index("idx_technicians_company", "technicians", ["company_id"])

    # Work orders
    op.create_table(
        "work_orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, nullable=False),
        sa.Column("work_order_number", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="MEDIUM"),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column(
            "assigned_to",
            sa.Integer,
            sa.ForeignKey("technicians.id"),
            nullable=True,
        ),
        sa.Column("site_ref", sa.String(100), nullable=True),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.Column("assignment_date", sa.DateTime, nullable=True),
        sa.Column("scheduled_start", sa.DateTime, nullable=True),
        sa.Column("scheduled_end", sa.DateTime, nullable=True),
    )
    op.create_index(
        "idx_work_orders_company_status", "work_orders", ["company_id", "status"]
    )
    op.create_index("idx_work_orders_assigned_to", "work_orders", ["assigned_to"])
    op.create_index(
        "idx_work_orders_number",
        "work_orders",
        ["company_id", "work_order_number"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("work_orders")
    op.drop_table("technicians")
    op.drop_table("locations")
