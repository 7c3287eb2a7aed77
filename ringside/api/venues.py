from fastapi import APIRouter

from ringside.schemas.venue import VenueCreate, VenueRead, VenueUpdate
from ringside.services.dependencies import get_venue_service

from .routing import add_crud_routes

router = APIRouter()

add_crud_routes(
    router,
    get_service=get_venue_service,
    read_schema=VenueRead,
    detail_schema=VenueRead,
    create_schema=VenueCreate,
    update_schema=VenueUpdate,
)
