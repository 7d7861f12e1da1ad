"""
Boat fund service - the team's running contribution ledger.
"""
import logging
import math

from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.core.exceptions import ValidationError
from b2bee.models.boat_fund import BoatFundContribution
from b2bee.repositories.boat_fund_repo import BoatFundRepository
from b2bee.schemas.boat_fund import BoatFundSummary, ContributionCreate, ContributionResponse

logger = logging.getLogger(__name__)

RECENT_CONTRIBUTIONS = 50


class BoatFundService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = BoatFundRepository(session)

    async def summary(self) -> BoatFundSummary:
        """Latest contributions and the all-time total."""
        contributions = await self.repo.list(limit=RECENT_CONTRIBUTIONS)
        total = await self.repo.total()
        return BoatFundSummary(
            contributions=[ContributionResponse.model_validate(c) for c in contributions],
            total=total
        )

    async def add(self, data: ContributionCreate) -> BoatFundContribution:
        """Append a contribution. Amounts are pence, rounded to whole numbers."""
        if data.amount is None or not math.isfinite(data.amount) or data.amount <= 0:
            raise ValidationError.for_field("amount", "Valid amount is required")

        amount = round(data.amount)
        if amount <= 0:
            raise ValidationError.for_field("amount", "Valid amount is required")

        contribution = await self.repo.create({
            "amount": amount,
            "description": data.description or "Contribution"
        })
        logger.info("Boat fund contribution of %d added", amount)
        return contribution
