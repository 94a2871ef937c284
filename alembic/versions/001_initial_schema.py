"""Initial schema - organization, organization_member, invitation, user_profile, deletion request.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "user_profile",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("claims_version", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_user_profile_email", "user_profile", ["email"])

    op.create_table(
        "organization",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("billing_email", sa.String(254), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deletion_request_id", sa.UUID(), nullable=True),
        sa.Column("soft_deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("type IN ('individual', 'team', 'enterprise')", name="ck_organization_type"),
    )

    op.create_table(
        "organization_member",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "organization_id",
            sa.UUID(),
            sa.ForeignKey("organization.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "brand_access",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("auto_grant_new_brands", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invited_by", sa.String(255), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_organization_member_org_user",
        "organization_member",
        ["organization_id", "user_id"],
        unique=True,
    )
    op.create_index("ix_organization_member_user", "organization_member", ["user_id"])

    op.create_table(
        "invitation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column(
            "organization_id",
            sa.UUID(),
            sa.ForeignKey("organization.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("organization_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("invited_by", sa.String(255), nullable=False),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "brand_access",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("auto_grant_new_brands", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("inviter_name", sa.String(255), nullable=True),
        sa.Column("inviter_email", sa.String(254), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined', 'cancelled', 'expired')",
            name="ck_invitation_status",
        ),
    )
    op.create_index("ix_invitation_token", "invitation", ["token"], unique=True)
    op.create_index("ix_invitation_email_status", "invitation", ["email", "status"])
    # At most one pending invitation per (organization, email)
    op.create_index(
        "ux_invitation_pending_org_email",
        "invitation",
        ["organization_id", "email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "organization_deletion_request",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "organization_id",
            sa.UUID(),
            sa.ForeignKey("organization.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("organization_name", sa.String(100), nullable=False),
        sa.Column("requested_by", sa.String(255), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("confirmation_token", sa.String(128), nullable=False),
        sa.Column("token_expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_organization_deletion_request_token",
        "organization_deletion_request",
        ["confirmation_token"],
        unique=True,
    )
    op.create_foreign_key(
        "fk_organization_deletion_request",
        "organization",
        "organization_deletion_request",
        ["deletion_request_id"],
        ["id"],
        ondelete="SET NULL",
    )


def downgrade() -> None:
    op.drop_constraint("fk_organization_deletion_request", "organization", type_="foreignkey")
    op.drop_table("organization_deletion_request")
    op.drop_table("invitation")
    op.drop_table("organization_member")
    op.drop_table("organization")
    op.drop_table("user_profile")
