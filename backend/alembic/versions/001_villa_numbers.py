"""Villa numbers table — one row per numbered villa unit, keyed by villa_no.

Revision ID: 001_villa_numbers
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_villa_numbers"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "villa_numbers",
        sa.Column("villa_no", sa.Integer, autoincrement=False, nullable=False),
        sa.Column("special_details", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("villa_no", name="pk_villa_numbers"),
    )


def downgrade() -> None:
    op.drop_table("villa_numbers")
