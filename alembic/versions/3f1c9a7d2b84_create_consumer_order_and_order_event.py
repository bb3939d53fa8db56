"""create consumer_order and order_event tables

Revision ID: 3f1c9a7d2b84
Revises:
Create Date: 2026-10-19 10:12:41.308116

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b84'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "consumer_order",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("payload", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=False),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_consumer_order_status", "consumer_order", ["status"])
    op.create_index("ix_consumer_order_created_at", "consumer_order", ["created_at"])

    op.create_table(
        "order_event",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        # no FK: events may reference orders that are not stored yet
        sa.Column("order_id", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("new_status", sa.String(), nullable=True),
        sa.Column("consumed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    # polling scans unconsumed rows in id order
    op.create_index("ix_order_event_consumed_id", "order_event", ["consumed", "id"])
    op.create_index("ix_order_event_order_id", "order_event", ["order_id"])


def downgrade():
    op.drop_index("ix_order_event_order_id", table_name="order_event")
    op.drop_index("ix_order_event_consumed_id", table_name="order_event")
    op.drop_table("order_event")
    op.drop_index("ix_consumer_order_created_at", table_name="consumer_order")
    op.drop_index("ix_consumer_order_status", table_name="consumer_order")
    op.drop_table("consumer_order")
