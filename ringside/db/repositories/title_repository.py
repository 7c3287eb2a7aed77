"""Persistence for titles and their championship reigns."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.models import Title, TitleActivation, TitleChampionship, TitleRetirement

from .lifecycle import ActivatableRepository
from .periods import PeriodRepository


class TitleRepository(ActivatableRepository[Title]):
    model = Title
    owner_column = "title_id"
    activation_model = TitleActivation
    retirement_model = TitleRetirement

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.championships = PeriodRepository(session, TitleChampionship, "title_id")

    def period_families(self) -> dict[str, PeriodRepository | None]:
        families = super().period_families()
        families["championships"] = self.championships
        return families

    async def current_championship(self, title_id: int) -> TitleChampionship | None:
        return await self.championships.open(title_id)

    async def championship_history(self, title_id: int) -> list[TitleChampionship]:
        """Every reign for the title, newest first."""

        rows = await self.championships.history(title_id)
        return list(reversed(rows))


__all__ = ["TitleRepository"]
