"""initial schema

Mirror of the spreadsheet tabs used by the sql backend.

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _action_columns() -> list:
    return [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.String(64), nullable=False),
        sa.Column("store_name", sa.String(256), nullable=True),
        sa.Column("contact_date", sa.String(32), nullable=False),
        sa.Column("pic", sa.String(128), nullable=True),
        sa.Column("subteam", sa.String(128), nullable=True),
        sa.Column("type_of_contact", sa.String(64), nullable=False),
        sa.Column("action", sa.String(256), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("link_hubspot", sa.String(512), nullable=True),
    ]


def upgrade() -> None:
    # --- authentication ---
    op.create_table(
        "authentication",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(256), nullable=True),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("display_name", sa.String(256), nullable=True),
        sa.Column("team", sa.String(64), nullable=True),
        sa.Column("status", sa.String(32), nullable=True),
        sa.Column("password", sa.String(128), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_authentication_id", "authentication", ["id"])
    op.create_index("ix_authentication_email", "authentication", ["email"])

    # --- decentralization ---
    op.create_table(
        "decentralization",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("pic_code", sa.String(128), nullable=False),
        sa.Column("subteam", sa.String(128), nullable=True),
        sa.Column("role", sa.String(32), nullable=True),
        sa.Column("region", sa.String(32), nullable=True),
        sa.Column("team", sa.String(32), nullable=True),
        sa.Column("concat_key", sa.String(256), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_decentralization_id", "decentralization", ["id"])
    op.create_index("ix_decentralization_pic_code", "decentralization", ["pic_code"])

    # --- store_info ---
    op.create_table(
        "store_info",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.String(64), nullable=False),
        sa.Column("store_name", sa.String(256), nullable=True),
        sa.Column("buyer_id", sa.String(64), nullable=True),
        sa.Column("current_pic", sa.String(128), nullable=True),
        sa.Column("full_address", sa.Text(), nullable=True),
        sa.Column("last_order_date", sa.String(32), nullable=True),
        sa.Column("churn_status_this_month", sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("store_id"),
    )
    op.create_index("ix_store_info_id", "store_info", ["id"])
    op.create_index("ix_store_info_current_pic", "store_info", ["current_pic"])

    # --- churn_history / active_history ---
    op.create_table(
        "churn_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.String(64), nullable=False),
        sa.Column("churn_month", sa.String(16), nullable=True),
        sa.Column("type_of_churn", sa.String(128), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_churn_history_id", "churn_history", ["id"])
    op.create_index("ix_churn_history_store_id", "churn_history", ["store_id"])

    op.create_table(
        "active_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.String(64), nullable=False),
        sa.Column("active_month", sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_active_history_id", "active_history", ["id"])
    op.create_index("ix_active_history_store_id", "active_history", ["store_id"])

    # --- action logs (append-only) ---
    op.create_table(
        "churn_database",
        *_action_columns(),
        sa.Column("why_not_reawaken", sa.Text(), nullable=True),
        sa.Column("churn_month", sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_churn_database_id", "churn_database", ["id"])
    op.create_index("ix_churn_database_store_id", "churn_database", ["store_id"])

    op.create_table(
        "active_database",
        *_action_columns(),
        sa.Column("active_month", sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_active_database_id", "active_database", ["id"])
    op.create_index("ix_active_database_store_id", "active_database", ["store_id"])

    # --- dropdowns ---
    op.create_table(
        "dropdown_churn_action",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type_of_churn", sa.String(128), nullable=True),
        sa.Column("churn_action", sa.String(256), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dropdown_churn_action_id", "dropdown_churn_action", ["id"])

    op.create_table(
        "dropdown_active_action",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(256), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dropdown_active_action_id", "dropdown_active_action", ["id"])

    op.create_table(
        "dropdown_why",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type_of_churn", sa.String(128), nullable=True),
        sa.Column("why_not_reawaken", sa.String(256), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dropdown_why_id", "dropdown_why", ["id"])


def downgrade() -> None:
    for table in (
        "dropdown_why",
        "dropdown_active_action",
        "dropdown_churn_action",
        "active_database",
        "churn_database",
        "active_history",
        "churn_history",
        "store_info",
        "decentralization",
        "authentication",
    ):
        op.drop_table(table)
