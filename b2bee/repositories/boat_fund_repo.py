"""
Boat fund ledger repository. Append-only: no update or delete helpers are used.
"""
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func

from b2bee.models.boat_fund import BoatFundContribution
from b2bee.repositories.base import BaseRepository


class BoatFundRepository(BaseRepository[BoatFundContribution]):

    def __init__(self, session: AsyncSession):
        super().__init__(BoatFundContribution, session)

    async def total(self) -> int:
        """Sum of all contributions in pence."""
        query = select(func.coalesce(func.sum(BoatFundContribution.amount), 0))
        result = await self.session.exec(query)
        return int(result.one())
