"""SQLAlchemy model for board messages (posts and comments)."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.session import Base

if TYPE_CHECKING:
    from .vote import MessageVote


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def new_message_id() -> str:
    """Return a fresh opaque message identifier."""
    return uuid.uuid4().hex


class Message(Base):
    """A post or a comment.

    A message without a parent is a top-level post; any other message is a
    reply. The parent reference is deliberately not a foreign key: deleting a
    parent leaves its replies in place as orphans.
    """

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("like_count >= 0", name="ck_messages_like_count"),
        CheckConstraint("dislike_count >= 0", name="ck_messages_dislike_count"),
        Index("ix_messages_parent_id", "parent_id"),
        Index("ix_messages_created_at", "created_at"),
        Index("ix_messages_author_id", "author_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_message_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(128), nullable=False)

    # Parent chain for comments; top-level posts have parent_id = NULL.
    parent_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Derived from message_votes; rewritten in the same transaction as every vote change.
    like_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    dislike_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    votes: Mapped[list[MessageVote]] = relationship(
        "MessageVote",
        back_populates="message",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="MessageVote.voter_id",
    )

    @property
    def is_root(self) -> bool:
        """Return True for top-level posts."""
        return self.parent_id is None

    @property
    def like_voters(self) -> list[str]:
        """Principals currently holding a like on this message."""
        return [vote.voter_id for vote in self.votes if vote.vote_type == "like"]

    @property
    def dislike_voters(self) -> list[str]:
        """Principals currently holding a dislike on this message."""
        return [vote.voter_id for vote in self.votes if vote.vote_type == "dislike"]
