from fastapi import APIRouter, Depends

from ringside.enums import ActivationStatus
from ringside.schemas.stable import (
    StableCreate,
    StableDetail,
    StableMembers,
    StableMembersRequest,
    StableRead,
    StableUpdate,
)
from ringside.services.dependencies import get_stable_service
from ringside.services.stable_service import StableService

from .routing import ACTIVATION_ACTIONS, add_action_routes, add_crud_routes, raise_not_found

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_stable_service,
    read_schema=StableRead,
    detail_schema=StableDetail,
    create_schema=StableCreate,
    update_schema=StableUpdate,
    status_enum=ActivationStatus,
)
add_action_routes(
    router,
    ACTIVATION_ACTIONS,
    get_service=get_stable_service,
    detail_schema=StableDetail,
)


@router.get("/{entity_id}/members", response_model=StableMembers)
async def current_members(
    entity_id: int,
    service: StableService = Depends(get_stable_service),
) -> StableMembers:
    try:
        return (await service.detail(entity_id)).current_members
    except LookupError as exc:
        raise_not_found(exc)


@router.post("/{entity_id}/members", response_model=StableMembers)
async def add_members(
    entity_id: int,
    payload: StableMembersRequest,
    service: StableService = Depends(get_stable_service),
) -> StableMembers:
    """Add wrestlers, tag teams and managers to the stable."""
    try:
        return await service.add_members(
            entity_id,
            wrestler_ids=payload.wrestler_ids,
            tag_team_ids=payload.tag_team_ids,
            manager_ids=payload.manager_ids,
            joined_at=payload.date,
        )
    except LookupError as exc:
        raise_not_found(exc)


@router.delete("/{entity_id}/members", response_model=StableMembers)
async def remove_members(
    entity_id: int,
    payload: StableMembersRequest,
    service: StableService = Depends(get_stable_service),
) -> StableMembers:
    """Close the memberships of the given members; history is kept."""
    try:
        return await service.remove_members(
            entity_id,
            wrestler_ids=payload.wrestler_ids,
            tag_team_ids=payload.tag_team_ids,
            manager_ids=payload.manager_ids,
            left_at=payload.date,
        )
    except LookupError as exc:
        raise_not_found(exc)
