from fastapi import APIRouter

from ringside.enums import EmploymentStatus
from ringside.schemas.person import ManagerCreate, ManagerDetail, ManagerRead, ManagerUpdate
from ringside.services.dependencies import get_manager_service

from .routing import EMPLOYMENT_ACTIONS, INJURY_ACTIONS, add_action_routes, add_crud_routes

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_manager_service,
    read_schema=ManagerRead,
    detail_schema=ManagerDetail,
    create_schema=ManagerCreate,
    update_schema=ManagerUpdate,
    status_enum=EmploymentStatus,
)
add_action_routes(
    router,
    EMPLOYMENT_ACTIONS + INJURY_ACTIONS,
    get_service=get_manager_service,
    detail_schema=ManagerDetail,
)
