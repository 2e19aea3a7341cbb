"""API routes for MemoryLane.

Thin HTTP layer over ``EventService``:
- Event pages: cache-aside reads, create/update/delete, view and like counters,
  per-user listing
- Search: engagement-ranked results for a query
- Layout: justified photo rows for a measured container width

Every endpoint answers with a ``{success, ..., error}`` envelope. Service
errors become an ``AppError`` plus a matching HTTP status code.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import BaseModel, Field

from memorylane.models import (
    AppError,
    ErrorCode,
    LayoutRow,
    MemoryEvent,
    ScoredEvent,
    Theme,
)
from memorylane.services import (
    DEFAULT_TARGET_ROW_HEIGHT,
    EventNotFoundError,
    EventPermissionError,
    EventService,
    compute_layout,
    sanitize_photos,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class EventPayload(BaseModel):
    """Editable fields of an event, as sent by the editor."""
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    occasion: str = ""
    recipient_name: str = ""
    message: str = ""
    photos: list[dict[str, Any]] = Field(default_factory=list)
    theme: Theme = Theme.MODERN


class LayoutRequest(BaseModel):
    """Ad-hoc layout request for photos that are not stored yet."""
    photos: list[dict[str, Any]] = Field(default_factory=list)
    container_width: float
    target_row_height: float = Field(default=DEFAULT_TARGET_ROW_HEIGHT, gt=0)


class EventResponse(BaseModel):
    success: bool
    event: Optional[MemoryEvent] = None
    error: Optional[AppError] = None


class EventListResponse(BaseModel):
    success: bool
    events: list[MemoryEvent] = Field(default_factory=list)
    error: Optional[AppError] = None


class ActionResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[AppError] = None


class SearchResponse(BaseModel):
    success: bool
    results: list[ScoredEvent] = Field(default_factory=list)
    error: Optional[AppError] = None


class LayoutResponse(BaseModel):
    success: bool
    rows: list[LayoutRow] = Field(default_factory=list)
    error: Optional[AppError] = None


def get_event_service(request: Request) -> EventService:
    """FastAPI dependency returning the service built by the app factory."""
    return request.app.state.event_service


def _service_error(exc: Exception, response: Response) -> AppError:
    """Map a service exception to an ``AppError`` and set the status code."""
    if isinstance(exc, EventNotFoundError):
        response.status_code = 404
        return AppError(
            code=ErrorCode.NOT_FOUND,
            message=str(exc),
            user_message="Event not found.",
        )
    if isinstance(exc, EventPermissionError):
        response.status_code = 403
        return AppError(
            code=ErrorCode.FORBIDDEN,
            message=str(exc),
            user_message="You are not allowed to change this event.",
        )
    response.status_code = 400
    return AppError(
        code=ErrorCode.INVALID_INPUT,
        message=str(exc),
        user_message="Invalid request. Please check your input and try again.",
    )


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    response: Response,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Get a single event, served from the LRU cache when possible."""
    try:
        return EventResponse(success=True, event=service.get_event(event_id))
    except ValueError as e:
        return EventResponse(success=False, error=_service_error(e, response))


@router.post("/events", response_model=EventResponse)
async def create_event(
    payload: EventPayload,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = service.create_event(**payload.model_dump())
    return EventResponse(success=True, event=event)


@router.put("/events/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    payload: EventPayload,
    response: Response,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        event = service.update_event(event_id, **payload.model_dump())
        return EventResponse(success=True, event=event)
    except ValueError as e:
        return EventResponse(success=False, error=_service_error(e, response))


@router.delete("/events/{event_id}", response_model=ActionResponse)
async def delete_event(
    event_id: str,
    response: Response,
    user_id: str = Query(..., min_length=1),
    service: EventService = Depends(get_event_service),
) -> ActionResponse:
    try:
        service.delete_event(event_id, user_id)
        return ActionResponse(success=True, message="Event deleted successfully")
    except ValueError as e:
        return ActionResponse(success=False, error=_service_error(e, response))


@router.post("/events/{event_id}/view", response_model=EventResponse)
async def record_view(
    event_id: str,
    response: Response,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        return EventResponse(success=True, event=service.record_view(event_id))
    except ValueError as e:
        return EventResponse(success=False, error=_service_error(e, response))


@router.post("/events/{event_id}/like", response_model=EventResponse)
async def record_like(
    event_id: str,
    response: Response,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        return EventResponse(success=True, event=service.record_like(event_id))
    except ValueError as e:
        return EventResponse(success=False, error=_service_error(e, response))


@router.get("/my-events", response_model=EventListResponse)
async def list_my_events(
    user_id: str = Query(..., min_length=1),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """List a user's events, newest first."""
    return EventListResponse(success=True, events=service.list_user_events(user_id))


@router.get("/search", response_model=SearchResponse)
async def search_events(
    q: str = "",
    user_id: Optional[str] = None,
    service: EventService = Depends(get_event_service),
) -> SearchResponse:
    """Search events by title, recipient or occasion.

    An empty ``q`` lists every candidate event, ranked with its real score.
    """
    results = service.search(q, user_id=user_id)
    logger.info(f"[SEARCH] q={q!r} user={user_id} -> {len(results)} results")
    return SearchResponse(success=True, results=results)


@router.get("/events/{event_id}/layout", response_model=LayoutResponse)
async def get_event_layout(
    event_id: str,
    response: Response,
    width: float = Query(...),
    target_row_height: Optional[float] = Query(None, gt=0),
    service: EventService = Depends(get_event_service),
) -> LayoutResponse:
    """Compute justified photo rows for an event's gallery."""
    try:
        rows = service.layout_for_event(event_id, width, target_row_height)
        return LayoutResponse(success=True, rows=rows)
    except ValueError as e:
        return LayoutResponse(success=False, error=_service_error(e, response))


@router.post("/layout", response_model=LayoutResponse)
async def layout_photos(request: LayoutRequest) -> LayoutResponse:
    """Compute justified rows for photos that are not stored yet (editor preview)."""
    photos = sanitize_photos(request.photos)
    rows = compute_layout(photos, request.container_width, request.target_row_height)
    return LayoutResponse(success=True, rows=rows)
