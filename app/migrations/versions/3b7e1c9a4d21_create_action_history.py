"""create action_history

Revision ID: 3b7e1c9a4d21
Revises:
Create Date: 2026-10-19 10:12:44.512307

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e1c9a4d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "action_history",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("action_type", sa.String(length=100), nullable=False),
        sa.Column("action_description", sa.String(length=255), nullable=False),
        sa.Column("item_type", sa.String(length=20), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("before_data", sa.Text(), nullable=True),
        sa.Column("after_data", sa.Text(), nullable=True),
        sa.Column("workspace_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "item_type IN ('task', 'project', 'note', 'workspace', 'user')",
            name="ck_action_history_item_type",
        ),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("idx_action_history_user", "action_history", ["user_id", "created_at"])
    op.create_index("idx_action_history_item", "action_history", ["item_type", "item_id"])
    op.create_index("ix_action_history_workspace_id", "action_history", ["workspace_id"])


def downgrade() -> None:
    op.drop_index("ix_action_history_workspace_id", table_name="action_history")
    op.drop_index("idx_action_history_item", table_name="action_history")
    op.drop_index("idx_action_history_user", table_name="action_history")
    op.drop_table("action_history")
