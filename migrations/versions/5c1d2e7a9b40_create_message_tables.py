"""create message tables

Revision ID: 5c1d2e7a9b40
Revises:
Create Date: 2026-10-19 09:12:41.518203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1d2e7a9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create messages and message_votes."""
    op.create_table(
        "messages",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(length=128), nullable=False),
        sa.Column("parent_id", sa.String(length=32), nullable=True),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("dislike_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("like_count >= 0", name="ck_messages_like_count"),
        sa.CheckConstraint("dislike_count >= 0", name="ck_messages_dislike_count"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_parent_id", "messages", ["parent_id"])
    op.create_index("ix_messages_created_at", "messages", ["created_at"])
    op.create_index("ix_messages_author_id", "messages", ["author_id"])

    op.create_table(
        "message_votes",
        sa.Column("message_id", sa.String(length=32), nullable=False),
        sa.Column("voter_id", sa.String(length=128), nullable=False),
        sa.Column("vote_type", sa.String(length=8), nullable=False),
        sa.CheckConstraint(
            "vote_type IN ('like', 'dislike')",
            name="ck_message_votes_vote_type",
        ),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("message_id", "voter_id"),
    )
    op.create_index("ix_message_votes_message_id", "message_votes", ["message_id"])


def downgrade() -> None:
    """Drop message tables."""
    op.drop_index("ix_message_votes_message_id", table_name="message_votes")
    op.drop_table("message_votes")
    op.drop_index("ix_messages_author_id", table_name="messages")
    op.drop_index("ix_messages_created_at", table_name="messages")
    op.drop_index("ix_messages_parent_id", table_name="messages")
    op.drop_table("messages")
