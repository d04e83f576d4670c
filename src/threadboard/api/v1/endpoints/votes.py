"""Vote-related endpoints for the Threadboard API."""

from fastapi import APIRouter

from threadboard.api.dependencies import (
    CurrentPrincipalDep,
    VotingServiceDep,
    to_http_exception,
)
from threadboard.schemas.message import MessageResponse
from threadboard.schemas.vote import MyVoteResponse, VoteCreate
from threadboard.services.errors import BoardError

router = APIRouter(prefix="/messages", tags=["votes"])


@router.post("/{message_id}/vote", response_model=MessageResponse)
def cast_vote(
    message_id: str,
    vote_data: VoteCreate,
    principal: CurrentPrincipalDep,
    service: VotingServiceDep,
) -> MessageResponse:
    """Toggle the caller's like or dislike on a message."""
    try:
        message = service.apply_vote(message_id, principal, vote_data.vote_type)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse.model_validate(message)


@router.get("/{message_id}/my-vote", response_model=MyVoteResponse)
def get_my_vote(
    message_id: str,
    principal: CurrentPrincipalDep,
    service: VotingServiceDep,
) -> MyVoteResponse:
    """Get the caller's current vote on a message."""
    try:
        vote = service.get_vote(message_id, principal)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return MyVoteResponse(vote_type=vote.value if vote is not None else None)
