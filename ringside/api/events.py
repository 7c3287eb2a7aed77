from fastapi import APIRouter, Depends, status

from ringside.enums import EventStatus
from ringside.schemas.event import (
    EventCreate,
    EventDetail,
    EventRead,
    EventUpdate,
    MatchCreate,
    MatchRead,
    MatchResultCreate,
)
from ringside.services.dependencies import get_event_service, get_match_service
from ringside.services.event_service import EventService
from ringside.services.match_service import MatchService

from .routing import add_crud_routes, raise_not_found

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_event_service,
    read_schema=EventRead,
    detail_schema=EventDetail,
    create_schema=EventCreate,
    update_schema=EventUpdate,
    status_enum=EventStatus,
)


@router.get("/{entity_id}/matches", response_model=list[MatchRead])
async def list_matches(
    entity_id: int,
    events: EventService = Depends(get_event_service),
    matches: MatchService = Depends(get_match_service),
) -> list[MatchRead]:
    """The match card in running order."""
    try:
        await events.get(entity_id)
    except LookupError as exc:
        raise_not_found(exc)
    return await matches.matches_for(entity_id)


@router.post(
    "/{entity_id}/matches", response_model=MatchRead, status_code=status.HTTP_201_CREATED
)
async def add_match(
    entity_id: int,
    payload: MatchCreate,
    matches: MatchService = Depends(get_match_service),
) -> MatchRead:
    """Book a match at the end of the card."""
    try:
        return await matches.add_match(
            entity_id,
            payload.match_type,
            payload.sides,
            payload.referee_ids,
            payload.title_ids,
            payload.preview,
        )
    except LookupError as exc:
        raise_not_found(exc)


@router.post("/{entity_id}/matches/{match_id}/result", response_model=MatchRead)
async def record_result(
    entity_id: int,
    match_id: int,
    payload: MatchResultCreate,
    matches: MatchService = Depends(get_match_service),
) -> MatchRead:
    try:
        return await matches.record_result(
            entity_id, match_id, payload.decision, payload.winning_side
        )
    except LookupError as exc:
        raise_not_found(exc)
