"""
Bee and testimonial repositories.
"""
import uuid
from typing import Optional, List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func

from b2bee.models.bee import Bee
from b2bee.models.booking import Booking
from b2bee.models.lead import Lead
from b2bee.models.testimonial import Testimonial
from b2bee.repositories.base import BaseRepository


class BeeRepository(BaseRepository[Bee]):
    """Repository for Bee operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Bee, session)

    async def get_by_slug(self, slug: str) -> Optional[Bee]:
        return await self.get_by_field("slug", slug)

    async def get_active(self) -> List[Bee]:
        """Active Bees in display order."""
        query = select(Bee).where(Bee.is_active == True).order_by(Bee.sort_order.asc())
        result = await self.session.exec(query)
        return result.all()

    async def get_counts(self) -> List[dict]:
        """Lead and booking totals per Bee."""
        lead_counts = (
            select(Lead.bee_id, func.count().label("leads"))
            .group_by(Lead.bee_id)
            .subquery()
        )
        booking_counts = (
            select(Booking.bee_id, func.count().label("bookings"))
            .group_by(Booking.bee_id)
            .subquery()
        )
        query = (
            select(Bee, lead_counts.c.leads, booking_counts.c.bookings)
            .outerjoin(lead_counts, lead_counts.c.bee_id == Bee.id)
            .outerjoin(booking_counts, booking_counts.c.bee_id == Bee.id)
            .order_by(Bee.sort_order.asc())
        )
        result = await self.session.exec(query)
        return [
            {
                "id": bee.id,
                "slug": bee.slug,
                "name": bee.name,
                "isActive": bee.is_active,
                "leads": leads or 0,
                "bookings": bookings or 0
            }
            for bee, leads, bookings in result.all()
        ]


class TestimonialRepository(BaseRepository[Testimonial]):
    """Repository for Testimonial operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Testimonial, session)

    async def latest_for_bee(self, bee_id: uuid.UUID, limit: int) -> List[Testimonial]:
        query = (
            select(Testimonial)
            .where(Testimonial.bee_id == bee_id)
            .order_by(Testimonial.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(query)
        return result.all()
