from fastapi import APIRouter, Body, Depends, status

from ringside.enums import ActivationStatus
from ringside.schemas.common import TransitionRequest
from ringside.schemas.title import (
    AwardTitleRequest,
    ChampionshipRead,
    TitleCreate,
    TitleDetail,
    TitleRead,
    TitleUpdate,
)
from ringside.services.dependencies import get_title_service
from ringside.services.title_service import TitleService

from .routing import ACTIVATION_ACTIONS, add_action_routes, add_crud_routes, raise_not_found

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_title_service,
    read_schema=TitleRead,
    detail_schema=TitleDetail,
    create_schema=TitleCreate,
    update_schema=TitleUpdate,
    status_enum=ActivationStatus,
)
add_action_routes(
    router,
    ACTIVATION_ACTIONS,
    get_service=get_title_service,
    detail_schema=TitleDetail,
)


@router.get("/{entity_id}/championships", response_model=list[ChampionshipRead])
async def list_championships(
    entity_id: int,
    service: TitleService = Depends(get_title_service),
) -> list[ChampionshipRead]:
    """Every reign of the title, most recent first."""
    try:
        await service.get(entity_id)
    except LookupError as exc:
        raise_not_found(exc)
    return await service.championships(entity_id)


@router.post(
    "/{entity_id}/championships",
    response_model=ChampionshipRead,
    status_code=status.HTTP_201_CREATED,
)
async def award_title(
    entity_id: int,
    payload: AwardTitleRequest,
    service: TitleService = Depends(get_title_service),
) -> ChampionshipRead:
    try:
        reign = await service.award(
            entity_id,
            payload.champion_type,
            payload.champion_id,
            payload.date,
            event_match_id=payload.event_match_id,
        )
    except LookupError as exc:
        raise_not_found(exc)
    return ChampionshipRead.model_validate(reign)


@router.post("/{entity_id}/vacate", response_model=TitleDetail)
async def vacate_title(
    entity_id: int,
    payload: TransitionRequest | None = Body(None),
    service: TitleService = Depends(get_title_service),
) -> TitleDetail:
    try:
        await service.vacate(entity_id, payload.date if payload is not None else None)
        return await service.detail(entity_id)
    except LookupError as exc:
        raise_not_found(exc)
