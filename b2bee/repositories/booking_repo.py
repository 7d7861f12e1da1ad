"""
Booking repository.
"""
from typing import Optional, List, Tuple
from datetime import datetime

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.models.bee import Bee
from b2bee.models.booking import Booking
from b2bee.models.lead import Lead
from b2bee.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Booking, session)

    async def get_by_provider_id(self, provider_id: str) -> Optional[Booking]:
        """Find the booking for a Cal.com uid."""
        query = select(Booking).where(Booking.provider_id == provider_id)
        result = await self.session.exec(query)
        return result.first()

    async def upcoming(self, limit: int = 5) -> List[Tuple[Booking, Lead, Optional[str]]]:
        """Next bookings by start time, with lead and Bee name."""
        query = (
            select(Booking, Lead, Bee.name)
            .join(Lead, Booking.lead_id == Lead.id)
            .outerjoin(Bee, Booking.bee_id == Bee.id)
            .where(Booking.start_time >= datetime.utcnow())
            .order_by(Booking.start_time.asc())
            .limit(limit)
        )
        result = await self.session.exec(query)
        return [tuple(row) for row in result.all()]
