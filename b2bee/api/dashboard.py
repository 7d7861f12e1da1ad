"""
Admin dashboard API routes.
"""
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.lead_service import LeadService
from b2bee.repositories.bee_repo import BeeRepository
from b2bee.repositories.booking_repo import BookingRepository
from b2bee.repositories.lead_repo import LeadRepository
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api/admin", tags=["dashboard"])


@router.get("/dashboard")
async def get_dashboard(
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Lead stats, recent leads, per-Bee totals and upcoming bookings."""
    lead_service = LeadService(session)
    lead_stats = await lead_service.get_stats()

    lead_repo = LeadRepository(session)
    recent = await lead_repo.recent(limit=10)

    bee_repo = BeeRepository(session)
    bee_counts = await bee_repo.get_counts()

    booking_repo = BookingRepository(session)
    upcoming = await booking_repo.upcoming(limit=5)

    return {
        "leadStats": lead_stats,
        "recentLeads": [
            {
                "id": lead.id,
                "name": lead.full_name,
                "email": lead.email,
                "company": lead.company,
                "beeName": bee_name,
                "status": lead.status,
                "createdAt": lead.created_at
            }
            for lead, bee_name in recent
        ],
        "bees": bee_counts,
        "upcomingBookings": [
            {
                "id": booking.id,
                "leadName": lead.full_name,
                "email": lead.email,
                "beeName": bee_name,
                "status": booking.status,
                "startTime": booking.start_time
            }
            for booking, lead, bee_name in upcoming
        ]
    }
