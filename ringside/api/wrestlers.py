from fastapi import APIRouter

from ringside.enums import EmploymentStatus
from ringside.schemas.wrestler import WrestlerCreate, WrestlerDetail, WrestlerRead, WrestlerUpdate
from ringside.services.dependencies import get_wrestler_service

from .routing import (
    EMPLOYMENT_ACTIONS,
    INJURY_ACTIONS,
    add_action_routes,
    add_crud_routes,
    add_manager_routes,
)

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_wrestler_service,
    read_schema=WrestlerRead,
    detail_schema=WrestlerDetail,
    create_schema=WrestlerCreate,
    update_schema=WrestlerUpdate,
    status_enum=EmploymentStatus,
)
add_action_routes(
    router,
    EMPLOYMENT_ACTIONS + INJURY_ACTIONS,
    get_service=get_wrestler_service,
    detail_schema=WrestlerDetail,
)
add_manager_routes(router, get_service=get_wrestler_service, detail_schema=WrestlerDetail)
