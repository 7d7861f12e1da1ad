"""
Booking service - Cal.com webhook reconciliation and booking creation.
"""
import time
import logging
from typing import Optional, Union
from datetime import datetime, timedelta

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.core.exceptions import ConflictError, NotFoundError, ValidationError
from b2bee.models.booking import Booking, BookingStatus
from b2bee.models.lead import LeadStatus
from b2bee.repositories.bee_repo import BeeRepository
from b2bee.repositories.booking_repo import BookingRepository
from b2bee.repositories.lead_repo import LeadRepository
from b2bee.schemas.booking import (
    BookingCreate, CalWebhookEvent, CalWebhookPayload, ManualBookingSummary, WebhookAck
)

logger = logging.getLogger(__name__)


class CalTrigger:
    """Cal.com webhook trigger events we act on."""
    PING = "PING"
    BOOKING_CREATED = "BOOKING_CREATED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"
    BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"


class WebhookAction:
    """Values of the ``action`` field in webhook acknowledgements."""
    PING = "ping"
    CREATED = "created"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    LEAD_NOT_FOUND = "lead_not_found"
    NOT_FOUND = "not_found"
    IGNORED = "ignored"


def extract_attendee_email(payload: CalWebhookPayload) -> Optional[str]:
    """
    Attendee email from a booking payload.
    Checked in order: attendees[0].email, responses.email, metadata.email.
    """
    if payload.attendees:
        email = payload.attendees[0].get("email")
        if isinstance(email, str) and email.strip():
            return email.strip()

    if payload.responses:
        email = payload.responses.get("email")
        # Form responses are either a plain value or {"value": ..., "label": ...}
        if isinstance(email, dict):
            email = email.get("value")
        if isinstance(email, str) and email.strip():
            return email.strip()

    if payload.metadata:
        email = payload.metadata.get("email")
        if isinstance(email, str) and email.strip():
            return email.strip()

    return None


class BookingService:
    """Service for booking operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.booking_repo = BookingRepository(session)
        self.lead_repo = LeadRepository(session)
        self.bee_repo = BeeRepository(session)

    # =========================================================================
    # CAL.COM WEBHOOK
    # =========================================================================

    async def handle_webhook(self, event: Union[CalWebhookEvent, dict]) -> WebhookAck:
        """
        Apply a Cal.com webhook event.
        Replays are safe: bookings are keyed by the Cal.com uid.
        """
        if not isinstance(event, CalWebhookEvent):
            # PING carries no booking, so it is acknowledged before parsing the payload
            if isinstance(event, dict) and event.get("triggerEvent") == CalTrigger.PING:
                logger.info("Cal.com webhook ping received")
                return WebhookAck(action=WebhookAction.PING)
            try:
                event = CalWebhookEvent.model_validate(event)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e.errors())

        trigger = event.trigger_event
        if trigger == CalTrigger.PING:
            logger.info("Cal.com webhook ping received")
            return WebhookAck(action=WebhookAction.PING)

        payload = event.payload
        if payload is None or not payload.uid:
            raise ValidationError.for_field("payload.uid", "Missing booking uid")

        if trigger == CalTrigger.BOOKING_CREATED:
            return await self._on_created(payload)
        if trigger == CalTrigger.BOOKING_CANCELLED:
            return await self._on_status_change(payload, BookingStatus.CANCELLED, WebhookAction.CANCELLED)
        if trigger == CalTrigger.BOOKING_RESCHEDULED:
            return await self._on_status_change(payload, BookingStatus.RESCHEDULED, WebhookAction.RESCHEDULED)

        logger.info("Ignoring Cal.com webhook event %s for %s", trigger, payload.uid)
        return WebhookAck(action=WebhookAction.IGNORED)

    async def _on_created(self, payload: CalWebhookPayload) -> WebhookAck:
        existing = await self.booking_repo.get_by_provider_id(payload.uid)
        if existing:
            booking = await self._confirm(existing, payload)
            return WebhookAck(action=WebhookAction.CONFIRMED, booking_id=booking.id)

        email = extract_attendee_email(payload)
        lead = await self.lead_repo.get_latest_by_email(email) if email else None
        if not lead:
            logger.warning("No lead found for Cal.com booking %s (email: %s)", payload.uid, email)
            return WebhookAck(action=WebhookAction.LEAD_NOT_FOUND)

        lead_id = lead.id
        try:
            booking = await self.booking_repo.create({
                "lead_id": lead_id,
                "bee_id": lead.bee_id,
                "provider_id": payload.uid,
                "status": BookingStatus.CONFIRMED,
                "start_time": payload.start_time,
                "end_time": payload.end_time
            })
        except IntegrityError:
            # A concurrent delivery of the same event inserted it first
            await self.session.rollback()
            existing = await self.booking_repo.get_by_provider_id(payload.uid)
            if existing is None:
                raise
            logger.info("Booking %s already recorded by a concurrent webhook", payload.uid)
            booking = await self._confirm(existing, payload)
            return WebhookAck(action=WebhookAction.CONFIRMED, booking_id=booking.id)

        await self.lead_repo.update_status(lead_id, LeadStatus.BOOKED)
        logger.info("Booking %s created for lead %s", payload.uid, lead_id)
        return WebhookAck(action=WebhookAction.CREATED, booking_id=booking.id)

    async def _confirm(self, booking: Booking, payload: CalWebhookPayload) -> Booking:
        return await self.booking_repo.update(booking.id, {
            "status": BookingStatus.CONFIRMED,
            "start_time": payload.start_time,
            "end_time": payload.end_time
        })

    async def _on_status_change(
        self,
        payload: CalWebhookPayload,
        status: str,
        action: str
    ) -> WebhookAck:
        booking = await self.booking_repo.get_by_provider_id(payload.uid)
        if not booking:
            logger.info("No booking for Cal.com uid %s, nothing to mark %s", payload.uid, status)
            return WebhookAck(action=WebhookAction.NOT_FOUND)

        update = {"status": status}
        if status == BookingStatus.RESCHEDULED:
            update["start_time"] = payload.start_time
            update["end_time"] = payload.end_time

        booking = await self.booking_repo.update(booking.id, update)
        logger.info("Booking %s marked %s", payload.uid, status)
        return WebhookAck(action=action, booking_id=booking.id)

    # =========================================================================
    # DIRECT AND MANUAL BOOKINGS
    # =========================================================================

    async def create_booking(self, data: BookingCreate) -> Booking:
        """Create a PENDING booking for a known lead."""
        lead = await self.lead_repo.get(data.lead_id)
        if not lead:
            raise NotFoundError("Lead", str(data.lead_id))

        if data.provider_id and await self.booking_repo.exists_by_field("provider_id", data.provider_id):
            raise ConflictError("Booking", "providerId", data.provider_id)

        bee_id = lead.bee_id
        if data.bee_slug:
            bee = await self.bee_repo.get_by_slug(data.bee_slug)
            if bee:
                bee_id = bee.id

        lead_id = lead.id
        booking = await self.booking_repo.create({
            "lead_id": lead_id,
            "bee_id": bee_id,
            "provider_id": data.provider_id,
            "status": BookingStatus.PENDING,
            "start_time": data.start_time,
            "end_time": data.end_time
        })
        await self.lead_repo.update_status(lead_id, LeadStatus.BOOKED)
        return booking

    async def create_manual_booking(self, email: str) -> ManualBookingSummary:
        """
        Book the most recent lead with this email, starting tomorrow.
        Used by the team for bookings made outside Cal.com.
        """
        lead = await self.lead_repo.get_latest_by_email(email)
        if not lead:
            raise NotFoundError(message=f"No lead found with email {email}")

        bee = await self.bee_repo.get(lead.bee_id) if lead.bee_id else None
        lead_id = lead.id
        lead_name = lead.full_name

        booking = await self.booking_repo.create({
            "lead_id": lead_id,
            "bee_id": lead.bee_id,
            "provider_id": f"manual_{int(time.time() * 1000)}",
            "status": BookingStatus.CONFIRMED,
            "start_time": datetime.utcnow() + timedelta(hours=24)
        })
        await self.lead_repo.update_status(lead_id, LeadStatus.BOOKED)
        logger.info("Manual booking %s created for lead %s", booking.id, lead_id)

        return ManualBookingSummary(
            id=booking.id,
            lead_id=lead_id,
            lead_name=lead_name,
            bee_name=bee.name if bee else "None",
            status=booking.status,
            start_time=booking.start_time
        )

