"""
Boat fund API routes.
"""
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.boat_fund_service import BoatFundService
from b2bee.schemas.boat_fund import BoatFundSummary, ContributionCreate, ContributionResponse
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api/boat-fund", tags=["boat-fund"])


@router.get("", response_model=BoatFundSummary)
async def get_boat_fund(
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Latest contributions and the running total (pence)."""
    boat_fund_service = BoatFundService(session)
    return await boat_fund_service.summary()


@router.post("", response_model=ContributionResponse)
async def add_contribution(
    data: ContributionCreate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    boat_fund_service = BoatFundService(session)
    return await boat_fund_service.add(data)
