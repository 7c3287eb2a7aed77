"""ORM models for the Ringside schema.

Importing this package registers every table on ``Base.metadata`` which is
what Alembic and the test fixtures rely on.
"""

from .base import Base, PeriodMixin, SoftDeleteMixin, TimestampMixin, enum_column_type
from .events import (
    Event,
    EventMatch,
    EventMatchCompetitor,
    EventMatchReferee,
    EventMatchResult,
    EventMatchTitle,
    Venue,
)
from .groups import (
    Stable,
    StableActivation,
    StableManager,
    StableRetirement,
    StableTagTeam,
    StableWrestler,
)
from .roster import (
    Manager,
    ManagerEmployment,
    ManagerInjury,
    ManagerRetirement,
    ManagerSuspension,
    Referee,
    RefereeEmployment,
    RefereeInjury,
    RefereeRetirement,
    RefereeSuspension,
    TagTeam,
    TagTeamEmployment,
    TagTeamManager,
    TagTeamRetirement,
    TagTeamSuspension,
    TagTeamWrestler,
    Wrestler,
    WrestlerEmployment,
    WrestlerInjury,
    WrestlerManager,
    WrestlerRetirement,
    WrestlerSuspension,
)
from .titles import Title, TitleActivation, TitleChampionship, TitleRetirement

__all__ = [
    "Base",
    "Event",
    "EventMatch",
    "EventMatchCompetitor",
    "EventMatchReferee",
    "EventMatchResult",
    "EventMatchTitle",
    "Manager",
    "ManagerEmployment",
    "ManagerInjury",
    "ManagerRetirement",
    "ManagerSuspension",
    "PeriodMixin",
    "Referee",
    "RefereeEmployment",
    "RefereeInjury",
    "RefereeRetirement",
    "RefereeSuspension",
    "SoftDeleteMixin",
    "Stable",
    "StableActivation",
    "StableManager",
    "StableRetirement",
    "StableTagTeam",
    "StableWrestler",
    "TagTeam",
    "TagTeamEmployment",
    "TagTeamManager",
    "TagTeamRetirement",
    "TagTeamSuspension",
    "TagTeamWrestler",
    "TimestampMixin",
    "Title",
    "TitleActivation",
    "TitleChampionship",
    "TitleRetirement",
    "Venue",
    "Wrestler",
    "WrestlerEmployment",
    "WrestlerInjury",
    "WrestlerManager",
    "WrestlerRetirement",
    "WrestlerSuspension",
    "enum_column_type",
]
