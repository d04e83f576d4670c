"""Create, edit, delete and list board messages."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from threadboard.core.settings import settings
from threadboard.models import Message
from threadboard.models.message import utcnow
from threadboard.repositories.message_repo import MessageRepository
from threadboard.schemas.common import SortDirection, SortField
from threadboard.services.errors import (
    AuthorizationError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from threadboard.services.validation import clean_content, clean_principal

logger = logging.getLogger(__name__)

# Largest OFFSET a signed 64-bit SQL integer can hold.
_MAX_OFFSET = 2**63 - 1

_SORT_COLUMNS = {
    SortField.CREATED_AT: Message.created_at,
    SortField.LIKE_COUNT: Message.like_count,
    SortField.DISLIKE_COUNT: Message.dislike_count,
}


@dataclass
class RootPage:
    """One page of top-level messages."""

    items: list[Message]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0


@dataclass
class ThreadPath:
    """Messages from the topmost reachable ancestor down to a message."""

    messages: list[Message] = field(default_factory=list)
    orphaned: bool = False
    truncated: bool = False

    @property
    def root_id(self) -> str | None:
        return self.messages[0].id if self.messages else None


def parse_sort(
    sort_field: SortField | str,
    sort_direction: SortDirection | str,
) -> tuple[SortField, SortDirection]:
    """Validate sort parameters, raising ValidationError on unknown values."""
    try:
        field_ = SortField(sort_field)
    except ValueError as err:
        raise ValidationError(f"Invalid sort field: {sort_field!r}") from err
    try:
        direction = SortDirection(sort_direction)
    except ValueError as err:
        raise ValidationError(f"Invalid sort direction: {sort_direction!r}") from err
    return field_, direction


def order_clauses(sort_field: SortField, sort_direction: SortDirection) -> list:
    """Return ORDER BY clauses with deterministic tie-breaking."""
    direction = asc if sort_direction is SortDirection.ASC else desc
    columns = [_SORT_COLUMNS[sort_field]]
    if sort_field is not SortField.CREATED_AT:
        columns.append(Message.created_at)
    columns.append(Message.id)
    return [direction(column) for column in columns]


class MessageService:
    """Message store operations with ownership checks."""

    def __init__(self, repo: MessageRepository) -> None:
        self.repo = repo

    @property
    def session(self) -> Session:
        return self.repo.session

    def _storage_failure(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        logger.error("Failed to %s: %s", action, exc, exc_info=True)
        return StorageError(f"Failed to {action}")

    def create(self, content: str, author_id: str, parent_id: str | None = None) -> Message:
        """Create a post, or a reply when `parent_id` is given.

        Raises:
            ValidationError: If content or author id is malformed
            NotFoundError: If `parent_id` does not resolve to a message
            StorageError: If the database operation fails
        """
        text = clean_content(content)
        author = clean_principal(author_id, "author_id")
        if parent_id is not None and (not isinstance(parent_id, str) or not parent_id.strip()):
            raise ValidationError("parent_id is malformed")

        try:
            if parent_id is not None and not self.repo.exists(parent_id):
                self.session.rollback()
                raise NotFoundError("Parent message not found")

            now = utcnow()
            message = Message(
                content=text,
                author_id=author,
                parent_id=parent_id,
                like_count=0,
                dislike_count=0,
                created_at=now,
                updated_at=now,
            )
            self.repo.add(message)
            self.session.commit()
            self.session.refresh(message)
        except SQLAlchemyError as exc:
            raise self._storage_failure("create message", exc) from exc

        logger.info(
            "Created message %s by %s (parent=%s)",
            message.id,
            author,
            parent_id,
        )
        return message

    def get(self, message_id: str) -> Message:
        """Return a message or raise NotFoundError."""
        try:
            message = self.repo.get_by_id(message_id)
        except SQLAlchemyError as exc:
            raise self._storage_failure("load message", exc) from exc
        if message is None:
            raise NotFoundError("Message not found")
        return message

    def _load_owned(self, message_id: str, requester: str) -> Message:
        message = self.repo.get_for_update(message_id)
        if message is None:
            self.session.rollback()
            raise NotFoundError("Message not found")
        if message.author_id != requester:
            self.session.rollback()
            logger.info("Rejected change to message %s by non-owner %s", message_id, requester)
            raise AuthorizationError("Only the author can modify this message")
        return message

    def edit(self, message_id: str, new_content: str, requester_id: str) -> Message:
        """Replace a message's content on behalf of its author.

        Ownership is checked against the row locked for update, not a copy
        loaded earlier.
        """
        requester = clean_principal(requester_id, "requester_id")
        text = clean_content(new_content)

        try:
            message = self._load_owned(message_id, requester)
            message.content = text
            message.updated_at = utcnow()
            self.session.commit()
            self.session.refresh(message)
        except SQLAlchemyError as exc:
            raise self._storage_failure("edit message", exc) from exc

        logger.info("Edited message %s", message_id)
        return message

    def delete(self, message_id: str, requester_id: str) -> None:
        """Physically remove a message owned by the requester.

        Replies are left in place and become orphans.
        """
        requester = clean_principal(requester_id, "requester_id")

        try:
            message = self._load_owned(message_id, requester)
            self.repo.delete(message)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._storage_failure("delete message", exc) from exc

        logger.info("Deleted message %s", message_id)

    def list_children(
        self,
        parent_id: str,
        sort_field: SortField | str = SortField.CREATED_AT,
        sort_direction: SortDirection | str = SortDirection.DESC,
    ) -> list[Message]:
        """Return the direct replies of a message, one thread level only."""
        field_, direction = parse_sort(sort_field, sort_direction)
        try:
            return self.repo.list_children(parent_id, order_clauses(field_, direction))
        except SQLAlchemyError as exc:
            raise self._storage_failure("list replies", exc) from exc

    def count_children(self, parent_id: str) -> int:
        """Return how many direct replies a message has."""
        try:
            return self.repo.count_children(parent_id)
        except SQLAlchemyError as exc:
            raise self._storage_failure("count replies", exc) from exc

    def list_roots(
        self,
        page: int = 1,
        page_size: int | None = None,
        sort_field: SortField | str = SortField.CREATED_AT,
        sort_direction: SortDirection | str = SortDirection.DESC,
    ) -> RootPage:
        """Return a page of top-level messages with the total count.

        `page` is clamped to at least 1 (and to the largest page whose offset
        fits a 64-bit integer) and `page_size` to ``[1, settings.page_size_max]``.
        """
        field_, direction = parse_sort(sort_field, sort_direction)
        if page_size is None:
            page_size = settings.page_size_default
        page_size = min(max(1, int(page_size)), settings.page_size_max)
        page = min(max(1, int(page)), _MAX_OFFSET // page_size)

        try:
            total = self.repo.count_roots()
            items = self.repo.list_roots(
                offset=(page - 1) * page_size,
                limit=page_size,
                order_by=order_clauses(field_, direction),
            )
        except SQLAlchemyError as exc:
            raise self._storage_failure("list messages", exc) from exc

        return RootPage(items=items, total=total, page=page, page_size=page_size)

    def thread_path(self, message_id: str) -> ThreadPath:
        """Walk parent references from a message up to its thread root.

        The walk stops at a top-level message, at a parent that no longer
        exists (the path is then flagged orphaned) or after
        ``settings.thread_max_depth`` messages (flagged truncated).

        Raises:
            NotFoundError: If the message itself does not exist
            StorageError: If the chain loops
        """
        try:
            message = self.repo.get_by_id(message_id)
            if message is None:
                raise NotFoundError("Message not found")

            chain = [message]
            seen = {message.id}
            orphaned = False
            truncated = False
            parent_id = message.parent_id
            while parent_id is not None:
                if parent_id in seen:
                    logger.error("Cycle in thread chain at message %s", parent_id)
                    raise StorageError("Thread chain is cyclic")
                if len(chain) >= settings.thread_max_depth:
                    logger.warning("Thread chain of %s truncated at %d messages", message_id, len(chain))
                    truncated = True
                    break
                parent = self.repo.get_by_id(parent_id)
                if parent is None:
                    orphaned = True
                    break
                chain.append(parent)
                seen.add(parent.id)
                parent_id = parent.parent_id
        except SQLAlchemyError as exc:
            raise self._storage_failure("resolve thread", exc) from exc

        chain.reverse()
        return ThreadPath(messages=chain, orphaned=orphaned, truncated=truncated)
