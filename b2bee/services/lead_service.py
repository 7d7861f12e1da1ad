"""
Lead service - lead-capture intake and the admin read side.
"""
import uuid
import logging
from typing import Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.config import settings
from b2bee.core.exceptions import NotFoundError, ValidationError
from b2bee.models.bee import Bee
from b2bee.models.lead import Lead, LeadStatus
from b2bee.repositories.bee_repo import BeeRepository
from b2bee.repositories.lead_repo import LeadRepository
from b2bee.schemas.lead import (
    CalPrefill, LeadFilter, LeadSubmission, LeadSubmissionResponse
)
from b2bee.services.email_service import EmailService

logger = logging.getLogger(__name__)


def build_cal_prefill(lead: Lead, bee: Optional[Bee] = None) -> CalPrefill:
    """Name, email and notes for the Cal.com booking widget."""
    parts = []
    if lead.company:
        parts.append(f"Company: {lead.company}")
    if bee:
        parts.append(f"Interested in: {bee.name}")
    if lead.notes:
        parts.append(lead.notes)

    return CalPrefill(name=lead.full_name, email=lead.email, notes="\n".join(parts))


async def notify_new_lead(email_service: Optional[EmailService], notification: dict) -> None:
    """
    Send the "New Lead" email to the operations inbox.
    Runs after the response is sent; never raises.
    """
    if email_service is None:
        logger.debug("Email not configured, skipping new lead notification")
        return
    if not settings.RESEND_FROM_EMAIL or not settings.RESEND_NOTIFY_EMAIL:
        logger.debug("Notification addresses not configured, skipping new lead notification")
        return

    try:
        sent = await email_service.send_new_lead_notification(
            to=settings.RESEND_NOTIFY_EMAIL, **notification
        )
    except Exception:
        logger.exception("New lead notification failed for %s", notification.get("email"))
        return

    if not sent:
        logger.warning("New lead notification was not delivered for %s", notification.get("email"))


class LeadService:
    """Service for lead operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.lead_repo = LeadRepository(session)
        self.bee_repo = BeeRepository(session)

    async def submit(
        self,
        data: Union[LeadSubmission, dict]
    ) -> Tuple[LeadSubmissionResponse, dict]:
        """
        Store a lead-capture submission.

        Returns the response body and the keyword arguments for the
        new lead notification, which the caller schedules.
        """
        if not isinstance(data, LeadSubmission):
            try:
                data = LeadSubmission.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e.errors())

        # Unknown slugs are not an error; the lead just has no Bee
        bee = None
        if data.bee_slug:
            bee = await self.bee_repo.get_by_slug(data.bee_slug)
            if not bee:
                logger.info("Lead submitted with unknown bee slug '%s'", data.bee_slug)

        record = data.model_dump(exclude={"bee_slug"})
        record["bee_id"] = bee.id if bee else None
        record["status"] = LeadStatus.NEW

        lead = await self.lead_repo.create(record)
        logger.info("Lead %s created for %s", lead.id, lead.email)

        response = LeadSubmissionResponse(lead_id=lead.id, cal_prefill=build_cal_prefill(lead, bee))
        notification = {
            "first_name": lead.first_name,
            "last_name": lead.last_name,
            "email": lead.email,
            "company": lead.company,
            "bee_name": bee.name if bee else None,
            "notes": lead.notes
        }
        return response, notification

    async def get(self, lead_id: uuid.UUID) -> Lead:
        """Get a lead by ID."""
        lead = await self.lead_repo.get(lead_id)
        if not lead:
            raise NotFoundError("Lead", str(lead_id))
        return lead

    async def list(
        self,
        filters: Optional[LeadFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List leads with filtering and pagination."""
        return await self.lead_repo.search(filters, page, limit)

    async def get_stats(self) -> dict:
        """Get lead statistics."""
        return await self.lead_repo.get_stats()
