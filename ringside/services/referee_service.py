from __future__ import annotations

from ringside.db.models import Referee
from ringside.db.repositories import RefereeRepository
from ringside.schemas.person import RefereeDetail, RefereeRead

from .roster_service import EmployableService


class RefereeService(EmployableService[Referee]):
    """Referees follow the employment lifecycle with no cascades."""

    resource = "referees"
    repository_class = RefereeRepository
    read_schema = RefereeRead

    async def detail(self, referee_id: int) -> RefereeDetail:
        referee = await self.get(referee_id)
        return RefereeDetail.model_validate(referee).model_copy(
            update=await self.histories(referee.id)
        )


__all__ = ["RefereeService"]
