"""Create lookup tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# table name -> label column
LOOKUP_TABLES: dict[str, str] = {
    "AccountStatus": "Status",
    "AccountType": "Type",
    "ActivityStatus": "Status",
    "ActivityType": "Type",
    "AddressType": "Type",
    "AttachmentType": "Type",
    "CallDirection": "Direction",
    "CallType": "Type",
    "EmailAddressType": "Type",
    "InvoiceStatus": "Status",
    "NoteType": "Type",
    "PaymentMethod": "Name",
    "PaymentStatus": "Status",
    "PersonStatus": "Status",
    "PersonType": "Type",
    "PhoneType": "Type",
    "ProductType": "Type",
    "QuoteStatus": "Status",
    "SalesOrderStatus": "Status",
    "ServiceType": "Type",
    "ShipMethod": "Method",
    "State": "Name",
    "WorkflowType": "Type",
}

EXTRA_COLUMNS: dict[str, list[sa.Column]] = {
    "NoteType": [
        sa.Column("ColorCode", sa.String(20), nullable=True),
        sa.Column("IconName", sa.String(50), nullable=True),
    ],
    "State": [
        sa.Column("Abbreviation", sa.String(10), nullable=False),
        sa.Column("CountryCode", sa.String(3), nullable=True),
    ],
}


def upgrade() -> None:
    """Create one table per lookup entity type."""
    for table_name, label_column in LOOKUP_TABLES.items():
        op.create_table(
            table_name,
            sa.Column(f"{table_name}Id", sa.Uuid(), nullable=False),
            sa.Column(label_column, sa.String(100), nullable=False),
            *EXTRA_COLUMNS.get(table_name, []),
            sa.Column("Description", sa.String(500), nullable=True),
            sa.Column("OrdinalPosition", sa.Integer(), nullable=False),
            sa.Column("CreatedDate", sa.DateTime(timezone=True), nullable=False),
            sa.Column("CreatedBy", sa.Uuid(), nullable=True),
            sa.Column("ModifiedDate", sa.DateTime(timezone=True), nullable=False),
            sa.Column("ModifiedBy", sa.Uuid(), nullable=True),
            sa.Column("Active", sa.Boolean(), nullable=False),
            sa.PrimaryKeyConstraint(f"{table_name}Id", name=f"pk_{table_name}"),
        )


def downgrade() -> None:
    """Drop every lookup table."""
    for table_name in reversed(LOOKUP_TABLES):
        op.drop_table(table_name)
