"""Shared API dependencies for principal resolution and service wiring."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from threadboard.core.security import InvalidTokenError, decode_principal
from threadboard.db.session import get_db
from threadboard.repositories.message_repo import MessageRepository
from threadboard.services.errors import (
    AuthorizationError,
    BoardError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from threadboard.services.message_service import MessageService
from threadboard.services.voting import VotingService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Return the principal id carried by the bearer token.

    The id is trusted as already authenticated; there is no user registry.

    Raises:
        HTTPException: If the token is invalid or has no subject
    """
    try:
        return decode_principal(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_message_service(db: SessionDep) -> MessageService:
    """Return a message service bound to the request session."""
    return MessageService(MessageRepository(db))


def get_voting_service(db: SessionDep) -> VotingService:
    """Return a voting service bound to the request session."""
    return VotingService(MessageRepository(db))


CurrentPrincipalDep = Annotated[str, Depends(get_current_principal)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]

_STATUS_BY_ERROR: dict[type[BoardError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
}


def to_http_exception(exc: BoardError) -> HTTPException:
    """Translate a service exception into the matching HTTP error."""
    if isinstance(exc, StorageError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal storage error",
        )
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
