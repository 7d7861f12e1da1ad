"""
Booking API routes.
"""
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.booking_service import BookingService
from b2bee.schemas.booking import (
    BookingCreate, BookingCreateResponse, ManualBookingRequest, ManualBookingResponse
)

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/booking", response_model=BookingCreateResponse)
async def create_booking(
    data: BookingCreate,
    session: AsyncSession = Depends(get_session)
):
    """Record a booking made from the site for a known lead."""
    booking_service = BookingService(session)
    booking = await booking_service.create_booking(data)
    return {"booking": booking}


@router.post("/manual-booking", response_model=ManualBookingResponse)
async def create_manual_booking(
    data: ManualBookingRequest,
    session: AsyncSession = Depends(get_session)
):
    """Book the latest lead with this email for tomorrow."""
    booking_service = BookingService(session)
    summary = await booking_service.create_manual_booking(data.email)
    return ManualBookingResponse(booking=summary)
