from __future__ import annotations

from ringside.db.models import (
    Referee,
    RefereeEmployment,
    RefereeInjury,
    RefereeRetirement,
    RefereeSuspension,
)

from .lifecycle import EmployableRepository


class RefereeRepository(EmployableRepository[Referee]):
    model = Referee
    search_columns = ("first_name", "last_name")
    order_columns = ("last_name", "first_name")
    owner_column = "referee_id"
    employment_model = RefereeEmployment
    injury_model = RefereeInjury
    suspension_model = RefereeSuspension
    retirement_model = RefereeRetirement


__all__ = ["RefereeRepository"]
