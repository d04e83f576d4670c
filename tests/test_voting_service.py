# mypy: ignore-errors
"""Tests for the toggle voting engine."""

import random

import pytest

from threadboard.services.errors import NotFoundError, ValidationError
from threadboard.services.voting import VoteType


def _assert_consistent(message) -> None:
    likes = set(message.like_voters)
    dislikes = set(message.dislike_voters)
    assert message.like_count == len(likes)
    assert message.dislike_count == len(dislikes)
    assert not likes & dislikes


def test_service_shares_repository_session(voting_service, db_session) -> None:
    assert voting_service.session is db_session


def test_like_records_voter(voting_service, root_message) -> None:
    message = voting_service.apply_vote(root_message.id, "u3", VoteType.LIKE)

    assert message.like_voters == ["u3"]
    assert message.dislike_voters == []
    assert message.like_count == 1
    assert message.dislike_count == 0


def test_repeat_like_clears_vote(voting_service, root_message) -> None:
    voting_service.apply_vote(root_message.id, "u3", "like")
    message = voting_service.apply_vote(root_message.id, "u3", "like")

    assert "u3" not in message.like_voters
    assert "u3" not in message.dislike_voters
    assert message.like_count == 0
    assert message.dislike_count == 0


def test_repeat_dislike_clears_vote(voting_service, root_message) -> None:
    voting_service.apply_vote(root_message.id, "u3", "dislike")
    message = voting_service.apply_vote(root_message.id, "u3", "dislike")

    assert message.dislike_voters == []
    assert message.dislike_count == 0


def test_like_then_dislike_switches(voting_service, root_message) -> None:
    voting_service.apply_vote(root_message.id, "u3", "like")
    message = voting_service.apply_vote(root_message.id, "u3", "dislike")

    assert message.like_voters == []
    assert message.dislike_voters == ["u3"]
    assert message.like_count == 0
    assert message.dislike_count == 1


def test_author_can_vote_on_own_message(voting_service, root_message) -> None:
    message = voting_service.apply_vote(root_message.id, root_message.author_id, "like")

    assert message.like_voters == [root_message.author_id]


def test_votes_from_several_users(voting_service, root_message) -> None:
    for voter in ("a", "b", "c"):
        voting_service.apply_vote(root_message.id, voter, "like")
    message = voting_service.apply_vote(root_message.id, "d", "dislike")

    assert sorted(message.like_voters) == ["a", "b", "c"]
    assert message.dislike_voters == ["d"]
    assert message.like_count == 3
    assert message.dislike_count == 1


def test_random_vote_sequence_keeps_invariants(voting_service, root_message) -> None:
    rng = random.Random(1234)
    voters = [f"voter-{i}" for i in range(6)]
    expected: dict[str, str | None] = dict.fromkeys(voters)

    for _ in range(120):
        voter = rng.choice(voters)
        choice = rng.choice(["like", "dislike"])
        message = voting_service.apply_vote(root_message.id, voter, choice)
        expected[voter] = None if expected[voter] == choice else choice

        _assert_consistent(message)
        assert set(message.like_voters) == {v for v, c in expected.items() if c == "like"}
        assert set(message.dislike_voters) == {
            v for v, c in expected.items() if c == "dislike"
        }


def test_vote_on_missing_message(voting_service) -> None:
    with pytest.raises(NotFoundError):
        voting_service.apply_vote("0" * 32, "u3", "like")


@pytest.mark.parametrize("vote_type", ["upvote", "", "LIKE", None, 1])
def test_invalid_vote_type(voting_service, root_message, vote_type) -> None:
    with pytest.raises(ValidationError):
        voting_service.apply_vote(root_message.id, "u3", vote_type)


@pytest.mark.parametrize("voter_id", ["", "   ", " u3", None, 42, "x" * 129])
def test_invalid_voter_id(voting_service, root_message, voter_id) -> None:
    with pytest.raises(ValidationError):
        voting_service.apply_vote(root_message.id, voter_id, "like")


def test_rejected_vote_leaves_message_untouched(voting_service, root_message) -> None:
    voting_service.apply_vote(root_message.id, "u3", "like")
    with pytest.raises(ValidationError):
        voting_service.apply_vote(root_message.id, "u4", "meh")

    assert voting_service.get_vote(root_message.id, "u3") is VoteType.LIKE
    assert voting_service.get_vote(root_message.id, "u4") is None


def test_get_vote_tracks_toggle(voting_service, root_message) -> None:
    assert voting_service.get_vote(root_message.id, "u3") is None

    voting_service.apply_vote(root_message.id, "u3", "dislike")
    assert voting_service.get_vote(root_message.id, "u3") is VoteType.DISLIKE

    voting_service.apply_vote(root_message.id, "u3", "dislike")
    assert voting_service.get_vote(root_message.id, "u3") is None


def test_example_scenario(message_service, voting_service) -> None:
    a = message_service.create("hello", "u1")
    b = message_service.create("hi back", "u2", parent_id=a.id)

    voting_service.apply_vote(a.id, "u3", "like")
    voting_service.apply_vote(a.id, "u4", "like")
    a = voting_service.apply_vote(a.id, "u4", "dislike")

    assert set(a.like_voters) == {"u3"}
    assert set(a.dislike_voters) == {"u4"}
    assert a.like_count == 1
    assert a.dislike_count == 1
    assert [child.id for child in message_service.list_children(a.id)] == [b.id]
