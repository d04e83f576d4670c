"""Data access helpers for working with messages and their votes."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from threadboard.models import VOTE_DISLIKE, VOTE_LIKE, Message, MessageVote

__all__ = ["MessageRepository"]


class MessageRepository:
    """Thin wrapper around database access for message entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, message_id: str) -> Message | None:
        """Return a message by identifier."""
        return self.session.get(Message, message_id)

    def get_for_update(self, message_id: str) -> Message | None:
        """Return a message with its row locked until the transaction ends.

        The identity map copy is overwritten so callers always see the row as
        it stood when the lock was taken.
        """
        result = self.session.execute(
            select(Message)
            .where(Message.id == message_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def exists(self, message_id: str) -> bool:
        """Return True if a message with this id is stored."""
        stmt = select(func.count()).select_from(Message).where(Message.id == message_id)
        return bool(self.session.execute(stmt).scalar_one())

    def add(self, message: Message) -> Message:
        """Stage a new message and flush it so defaults are populated."""
        self.session.add(message)
        self.session.flush()
        return message

    def delete(self, message: Message) -> None:
        """Remove a message; its vote rows cascade with it."""
        self.session.delete(message)
        self.session.flush()

    def list_children(
        self,
        parent_id: str,
        order_by: Sequence[ColumnElement],
    ) -> list[Message]:
        """Return every direct reply to `parent_id` in the given order."""
        stmt = select(Message).where(Message.parent_id == parent_id).order_by(*order_by)
        return list(self.session.execute(stmt).scalars())

    def count_children(self, parent_id: str) -> int:
        """Return the number of direct replies to `parent_id`."""
        stmt = select(func.count()).select_from(Message).where(Message.parent_id == parent_id)
        return int(self.session.execute(stmt).scalar_one())

    def list_roots(
        self,
        *,
        offset: int,
        limit: int,
        order_by: Sequence[ColumnElement],
    ) -> list[Message]:
        """Return one page of top-level messages."""
        stmt = (
            select(Message)
            .where(Message.parent_id.is_(None))
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def count_roots(self) -> int:
        """Return the number of top-level messages."""
        stmt = select(func.count()).select_from(Message).where(Message.parent_id.is_(None))
        return int(self.session.execute(stmt).scalar_one())

    def get_vote(self, message_id: str, voter_id: str) -> MessageVote | None:
        """Return the voter's current vote row on a message, if any."""
        return self.session.get(
            MessageVote,
            (message_id, voter_id),
            populate_existing=True,
        )

    def add_vote(self, message_id: str, voter_id: str, vote_type: str) -> MessageVote:
        """Record a new vote row."""
        vote = MessageVote(message_id=message_id, voter_id=voter_id, vote_type=vote_type)
        self.session.add(vote)
        return vote

    def remove_vote(self, vote: MessageVote) -> None:
        """Delete an existing vote row."""
        self.session.delete(vote)

    def count_votes(self, message_id: str) -> tuple[int, int]:
        """Return ``(likes, dislikes)`` counted from the vote rows."""
        self.session.flush()
        rows = self.session.execute(
            select(MessageVote.vote_type, func.count())
            .where(MessageVote.message_id == message_id)
            .group_by(MessageVote.vote_type)
        ).all()
        counts = {vote_type: int(total) for vote_type, total in rows}
        return counts.get(VOTE_LIKE, 0), counts.get(VOTE_DISLIKE, 0)
