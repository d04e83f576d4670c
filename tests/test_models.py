"""Unit tests for the ORM models.

These tests verify mapping details the services rely on: table names, the
composite vote key and the absence of a foreign key on the parent reference.
"""

from sqlalchemy.orm import attributes

from threadboard.models import Message, MessageVote


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert Message.__tablename__ == "messages"
    assert MessageVote.__tablename__ == "message_votes"


def test_votes_composite_primary_key():
    """One vote row per (message, voter) pair."""
    table = MessageVote.__table__
    pk_names = {c.name for c in table.primary_key}
    assert pk_names == {"message_id", "voter_id"}


def test_vote_cascades_with_message():
    fks = list(MessageVote.__table__.c.message_id.foreign_keys)
    assert len(fks) == 1
    assert fks[0].ondelete == "CASCADE"


def test_parent_reference_is_not_a_foreign_key():
    """Deleting a parent must not be blocked by, or cascade to, its replies."""
    assert not Message.__table__.c.parent_id.foreign_keys


def test_indexes_cover_listing_columns():
    indexed = {
        column.name
        for index in Message.__table__.indexes
        for column in index.columns
    }
    assert {"parent_id", "created_at", "author_id"} <= indexed


def test_votes_relationship_is_instrumented():
    assert isinstance(Message.votes, attributes.InstrumentedAttribute)
    assert isinstance(MessageVote.message, attributes.InstrumentedAttribute)
