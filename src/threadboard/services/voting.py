"""Toggle voting on messages."""

from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from threadboard.models import VOTE_DISLIKE, VOTE_LIKE, Message
from threadboard.repositories.message_repo import MessageRepository
from threadboard.services.errors import NotFoundError, StorageError, ValidationError
from threadboard.services.validation import clean_principal

logger = logging.getLogger(__name__)


class VoteType(str, Enum):
    """Recognized vote choices."""

    LIKE = VOTE_LIKE
    DISLIKE = VOTE_DISLIKE


def _coerce_vote_type(vote_type: VoteType | str) -> VoteType:
    try:
        return VoteType(vote_type)
    except ValueError as err:
        raise ValidationError(f"Invalid vote type: {vote_type!r}") from err


class VotingService:
    """Applies like/dislike toggles while keeping counters in sync."""

    def __init__(self, repo: MessageRepository) -> None:
        self.repo = repo

    @property
    def session(self) -> Session:
        return self.repo.session

    def apply_vote(
        self,
        message_id: str,
        voter_id: str,
        vote_type: VoteType | str,
    ) -> Message:
        """Toggle a voter's like or dislike on a message.

        Voting the same way twice clears the vote; voting the other way
        replaces it. The message row is locked for the duration so concurrent
        voters serialize and no vote is lost.

        Args:
            message_id: ID of the message being voted on
            voter_id: Authenticated principal casting the vote
            vote_type: ``like`` or ``dislike``

        Returns:
            The message with refreshed voter sets and counters

        Raises:
            ValidationError: If the voter id or vote type is malformed
            NotFoundError: If the message does not exist
            StorageError: If the database operation fails
        """
        voter = clean_principal(voter_id, "voter_id")
        choice = _coerce_vote_type(vote_type)

        try:
            message = self.repo.get_for_update(message_id)
            if message is None:
                self.session.rollback()
                raise NotFoundError("Message not found")

            existing = self.repo.get_vote(message_id, voter)
            if existing is not None and existing.vote_type == choice.value:
                self.repo.remove_vote(existing)
                outcome = "cleared"
            elif existing is not None:
                existing.vote_type = choice.value
                outcome = "switched"
            else:
                self.repo.add_vote(message_id, voter, choice.value)
                outcome = "recorded"

            message.like_count, message.dislike_count = self.repo.count_votes(message_id)
            self.session.commit()
            self.session.refresh(message)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Vote on message %s failed: %s", message_id, exc, exc_info=True)
            raise StorageError("Failed to record vote") from exc

        logger.info(
            "Vote %s on message %s by %s (%s): likes=%d dislikes=%d",
            choice.value,
            message_id,
            voter,
            outcome,
            message.like_count,
            message.dislike_count,
        )
        return message

    def get_vote(self, message_id: str, voter_id: str) -> VoteType | None:
        """Return the voter's current vote on a message, or None."""
        voter = clean_principal(voter_id, "voter_id")
        try:
            vote = self.repo.get_vote(message_id, voter)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Vote lookup on message %s failed: %s", message_id, exc, exc_info=True)
            raise StorageError("Failed to load vote") from exc
        if vote is None:
            return None
        return VoteType(vote.vote_type)
