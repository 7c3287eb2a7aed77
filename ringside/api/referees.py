from fastapi import APIRouter

from ringside.enums import EmploymentStatus
from ringside.schemas.person import RefereeCreate, RefereeDetail, RefereeRead, RefereeUpdate
from ringside.services.dependencies import get_referee_service

from .routing import EMPLOYMENT_ACTIONS, INJURY_ACTIONS, add_action_routes, add_crud_routes

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_referee_service,
    read_schema=RefereeRead,
    detail_schema=RefereeDetail,
    create_schema=RefereeCreate,
    update_schema=RefereeUpdate,
    status_enum=EmploymentStatus,
)
add_action_routes(
    router,
    EMPLOYMENT_ACTIONS + INJURY_ACTIONS,
    get_service=get_referee_service,
    detail_schema=RefereeDetail,
)
