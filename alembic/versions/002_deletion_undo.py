"""Add confirmation schedule and undo token to organization deletion requests.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLE = "organization_deletion_request"


def upgrade() -> None:
    op.add_column(TABLE, sa.Column("scheduled_deletion_at", sa.DateTime(timezone=True), nullable=True))
    op.add_column(TABLE, sa.Column("undo_token", sa.String(128), nullable=True))
    op.add_column(TABLE, sa.Column("undo_expires_at", sa.DateTime(timezone=True), nullable=True))


def downgrade() -> None:
    op.drop_column(TABLE, "undo_expires_at")
    op.drop_column(TABLE, "undo_token")
    op.drop_column(TABLE, "scheduled_deletion_at")
