"""Data access layer: one repository per aggregate plus the period engine."""

from .base import RosterRepository
from .event_repository import EventMatchRepository, EventRepository
from .lifecycle import ActivatableRepository, EmployableRepository
from .manager_repository import ManagerRepository
from .periods import PeriodRepository, histories
from .referee_repository import RefereeRepository
from .stable_repository import StableRepository
from .tag_team_repository import TagTeamRepository
from .title_repository import TitleRepository
from .venue_repository import VenueRepository
from .wrestler_repository import WrestlerRepository

__all__ = [
    "ActivatableRepository",
    "EmployableRepository",
    "EventMatchRepository",
    "EventRepository",
    "ManagerRepository",
    "PeriodRepository",
    "RefereeRepository",
    "RosterRepository",
    "StableRepository",
    "TagTeamRepository",
    "TitleRepository",
    "VenueRepository",
    "WrestlerRepository",
    "histories",
]
