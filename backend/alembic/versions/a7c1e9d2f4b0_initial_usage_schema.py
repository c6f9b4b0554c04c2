"""Initial usage schema.

Revision ID: a7c1e9d2f4b0
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "a7c1e9d2f4b0"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(modified: bool = True) -> list:
    columns = [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        )
    ]
    if modified:
        columns.append(
            sa.Column(
                "modified_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now(),
            )
        )
    return columns


def upgrade():
    """Create catalog, counter and artifact tables."""
    op.create_table(
        "subscription_tiers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("thumbnails_per_month", sa.Integer(), nullable=False),
        sa.Column("price_cents", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "user_subscriptions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("account_id", sa.String(255), nullable=False),
        sa.Column("tier_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "cancel_at_period_end", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tier_id"], ["subscription_tiers.id"], ondelete="RESTRICT"),
    )
    op.create_index(
        "idx_user_subscriptions_account_status",
        "user_subscriptions",
        ["account_id", "status", "created_at"],
    )

    # One counter row per (account, month); the unique index is also the
    # conflict target of the lazy insert.
    op.create_table(
        "usage_tracking",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("account_id", sa.String(255), nullable=False),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("thumbnails_generated", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("magic_edits_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upscales_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("background_removals_used", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("account_id", "month", name="uq_usage_tracking_account_month"),
    )

    op.create_table(
        "generated_images",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("account_id", sa.String(255), nullable=False),
        sa.Column("operation_type", sa.String(20), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=True),
        sa.Column("style", sa.String(50), nullable=True),
        sa.Column("aspect_ratio", sa.String(10), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=False, server_default="{}"),
        *_timestamps(modified=False),
    )
    op.create_index(
        "idx_generated_images_account_created", "generated_images", ["account_id", "created_at"]
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.String(1024), nullable=True),
        *_timestamps(),
    )


def downgrade():
    """Drop all tables created by this revision."""
    op.drop_table("user_profiles")
    op.drop_index("idx_generated_images_account_created", table_name="generated_images")
    op.drop_table("generated_images")
    op.drop_table("usage_tracking")
    op.drop_index("idx_user_subscriptions_account_status", table_name="user_subscriptions")
    op.drop_table("user_subscriptions")
    op.drop_table("subscription_tiers")
