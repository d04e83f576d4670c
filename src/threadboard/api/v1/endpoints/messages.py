"""Message endpoints: posting, replying, editing, deleting and listing."""

from fastapi import APIRouter, Query, status

from threadboard.api.dependencies import (
    CurrentPrincipalDep,
    MessageServiceDep,
    to_http_exception,
)
from threadboard.core.settings import settings
from threadboard.schemas.common import Acknowledgement, CountResponse, SortDirection, SortField
from threadboard.schemas.message import (
    MessageCreate,
    MessagePage,
    MessageResponse,
    MessageUpdate,
    ThreadPathResponse,
)
from threadboard.services.errors import BoardError

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/", response_model=MessagePage)
def list_root_messages(
    service: MessageServiceDep,
    page: int = Query(1, description="1-based page number; values below 1 are treated as 1"),
    page_size: int = Query(
        settings.page_size_default,
        description=f"Messages per page, clamped to {settings.page_size_max}",
    ),
    sort_by: SortField = Query(SortField.CREATED_AT),
    order: SortDirection = Query(SortDirection.DESC),
) -> MessagePage:
    """List top-level messages with pagination.

    Args:
        service: Message service bound to the request session
        page: Page number
        page_size: Page size (clamped to the configured maximum)
        sort_by: Field to order by
        order: Sort direction

    Returns:
        The requested page together with total and page counts
    """
    try:
        result = service.list_roots(page, page_size, sort_by, order)
    except BoardError as exc:
        raise to_http_exception(exc) from exc

    return MessagePage(
        items=[MessageResponse.model_validate(item) for item in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(
    payload: MessageCreate,
    principal: CurrentPrincipalDep,
    service: MessageServiceDep,
) -> MessageResponse:
    """Create a top-level post, or a reply when `parent_id` is set.

    Raises:
        HTTPException: 422 for invalid content, 404 if the parent does not exist
    """
    try:
        message = service.create(payload.content, principal, payload.parent_id)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse.model_validate(message)


@router.get("/{message_id}", response_model=MessageResponse)
def get_message(message_id: str, service: MessageServiceDep) -> MessageResponse:
    """Get a specific message by ID."""
    try:
        message = service.get(message_id)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse.model_validate(message)


@router.get("/{message_id}/children", response_model=list[MessageResponse])
def list_message_children(
    message_id: str,
    service: MessageServiceDep,
    sort_by: SortField = Query(SortField.CREATED_AT),
    order: SortDirection = Query(SortDirection.DESC),
) -> list[MessageResponse]:
    """Get the direct replies to a message.

    Only one level is returned; clients fetch deeper levels on demand.
    """
    try:
        children = service.list_children(message_id, sort_by, order)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return [MessageResponse.model_validate(child) for child in children]


@router.get("/{message_id}/children/count", response_model=CountResponse)
def count_message_children(message_id: str, service: MessageServiceDep) -> CountResponse:
    """Return the number of direct replies to a message."""
    try:
        return CountResponse(count=service.count_children(message_id))
    except BoardError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{message_id}/thread", response_model=ThreadPathResponse)
def get_message_thread(message_id: str, service: MessageServiceDep) -> ThreadPathResponse:
    """Return the chain of ancestors from the thread root down to this message."""
    try:
        path = service.thread_path(message_id)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return ThreadPathResponse(
        root_id=path.root_id,
        orphaned=path.orphaned,
        truncated=path.truncated,
        messages=[MessageResponse.model_validate(item) for item in path.messages],
    )


@router.put("/{message_id}", response_model=MessageResponse)
def edit_message(
    message_id: str,
    payload: MessageUpdate,
    principal: CurrentPrincipalDep,
    service: MessageServiceDep,
) -> MessageResponse:
    """Replace a message's content (author only).

    Raises:
        HTTPException: 404 if missing, 403 if the caller is not the author,
                      422 for invalid content
    """
    try:
        message = service.edit(message_id, payload.content, principal)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse.model_validate(message)


@router.delete("/{message_id}", response_model=Acknowledgement)
def delete_message(
    message_id: str,
    principal: CurrentPrincipalDep,
    service: MessageServiceDep,
) -> Acknowledgement:
    """Delete a message (author only). Replies are kept as orphans."""
    try:
        service.delete(message_id, principal)
    except BoardError as exc:
        raise to_http_exception(exc) from exc
    return Acknowledgement(detail="Message deleted successfully")
