from fastapi import APIRouter, Depends

from ringside.enums import EmploymentStatus
from ringside.schemas.tag_team import (
    PartnersUpdate,
    TagTeamCreate,
    TagTeamDetail,
    TagTeamRead,
    TagTeamUpdate,
)
from ringside.services.dependencies import get_tag_team_service
from ringside.services.tag_team_service import TagTeamService

from .routing import (
    EMPLOYMENT_ACTIONS,
    add_action_routes,
    add_crud_routes,
    add_manager_routes,
    raise_not_found,
)

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_tag_team_service,
    read_schema=TagTeamRead,
    detail_schema=TagTeamDetail,
    create_schema=TagTeamCreate,
    update_schema=TagTeamUpdate,
    status_enum=EmploymentStatus,
)
add_action_routes(
    router,
    EMPLOYMENT_ACTIONS,
    get_service=get_tag_team_service,
    detail_schema=TagTeamDetail,
)
add_manager_routes(router, get_service=get_tag_team_service, detail_schema=TagTeamDetail)


@router.put("/{entity_id}/partners", response_model=TagTeamDetail)
async def update_partners(
    entity_id: int,
    payload: PartnersUpdate,
    service: TagTeamService = Depends(get_tag_team_service),
) -> TagTeamDetail:
    """Swap the current partners; previous partners stay in the history."""
    try:
        await service.update_partners(entity_id, payload.wrestler_ids, payload.date)
        return await service.detail(entity_id)
    except LookupError as exc:
        raise_not_found(exc)
