from __future__ import annotations

from ringside.db.models import Venue

from .base import RosterRepository


class VenueRepository(RosterRepository[Venue]):
    model = Venue
    search_columns = ("name", "city", "state")


__all__ = ["VenueRepository"]
