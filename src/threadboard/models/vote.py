"""Models capturing voting interactions on messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.session import Base

if TYPE_CHECKING:
    from .message import Message

VOTE_LIKE = "like"
VOTE_DISLIKE = "dislike"


class MessageVote(Base):
    """Per-principal vote on a message.

    The like and dislike voter sets of a message are the rows of this table
    split by `vote_type`.
    """

    __tablename__ = "message_votes"
    __table_args__ = (
        CheckConstraint("vote_type IN ('like', 'dislike')", name="ck_message_votes_vote_type"),
        Index("ix_message_votes_message_id", "message_id"),
    )

    message_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("messages.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Composite primary key: one vote row per voter per message.
    voter_id: Mapped[str] = mapped_column(String(128), primary_key=True)

    vote_type: Mapped[str] = mapped_column(String(8), nullable=False)

    message: Mapped[Message] = relationship("Message", back_populates="votes")
