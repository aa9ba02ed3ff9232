"""create accounts and transfers

Revision ID: 3f9c1e7a2b40
Revises: 
Create Date: 2026-10-19 10:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1e7a2b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "transfers",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("sender_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("receiver_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("amount >= 1", name="ck_transfers_amount_positive"),
        sa.CheckConstraint("sender_id <> receiver_id", name="ck_transfers_not_self"),
    )
    op.create_index("ix_transfers_sender_created", "transfers", ["sender_id", "created_at"])
    op.create_index("ix_transfers_receiver_created", "transfers", ["receiver_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_transfers_receiver_created", table_name="transfers")
    op.drop_index("ix_transfers_sender_created", table_name="transfers")
    op.drop_table("transfers")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
