from __future__ import annotations

from ringside.db.models import Venue
from ringside.db.repositories import VenueRepository
from ringside.schemas.venue import VenueRead

from .roster_service import RosterService


class VenueService(RosterService[Venue]):
    resource = "venues"
    repository_class = VenueRepository
    read_schema = VenueRead
    related_resources = ("events",)


__all__ = ["VenueService"]
