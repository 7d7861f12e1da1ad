"""
Reminder service - emails leads who have not booked a demo yet.
Triggered by an external cron hitting /api/cron/send-reminders.
"""
import logging
from typing import Optional
from datetime import datetime, timedelta

from sqlalchemy import inspect as sa_inspect
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.config import settings
from b2bee.core.exceptions import DependencyError, NotFoundError
from b2bee.models.lead import Lead, LeadStatus
from b2bee.repositories.bee_repo import BeeRepository
from b2bee.repositories.lead_repo import LeadRepository
from b2bee.schemas.reminder import ReminderResults, SingleReminderResponse
from b2bee.services.email_service import EmailService

logger = logging.getLogger(__name__)

# Upper bound on leads handled per run
REMINDER_BATCH_LIMIT = 50


class ReminderService:
    """Service for reminder emails."""

    def __init__(
        self,
        session: AsyncSession,
        email_service: Optional[EmailService],
        delay_minutes: Optional[int] = None
    ):
        self.session = session
        self.email_service = email_service
        self.delay_minutes = settings.REMINDER_DELAY_MINUTES if delay_minutes is None else delay_minutes
        self.lead_repo = LeadRepository(session)
        self.bee_repo = BeeRepository(session)

    async def _send(self, lead: Lead, bee_name: Optional[str]) -> bool:
        if self.email_service is None:
            logger.warning("Email not configured, cannot send reminder to %s", lead.email)
            return False
        return await self.email_service.send_reminder_email(
            to=lead.email,
            first_name=lead.first_name,
            last_name=lead.last_name,
            company=lead.company,
            bee_name=bee_name
        )

    async def run(self) -> ReminderResults:
        """
        Send one reminder to each NEW lead older than the delay that was
        never reminded. A failed send leaves the lead eligible for the next run.
        """
        cutoff = datetime.utcnow() - timedelta(minutes=self.delay_minutes)
        due = await self.lead_repo.find_due_for_reminder(cutoff, REMINDER_BATCH_LIMIT)
        logger.info("Found %d leads due for a reminder", len(due))

        sent = 0
        failed = 0
        for lead, bee_name in due:
            if sa_inspect(lead).expired:
                # Expired by the rollback after an earlier failure
                await self.session.refresh(lead)
            lead_id = lead.id
            email = lead.email
            try:
                delivered = await self._send(lead, bee_name)
                if not delivered:
                    failed += 1
                    logger.warning("Reminder to %s was not delivered", email)
                    continue

                if not await self.lead_repo.mark_reminder_sent(lead_id, datetime.utcnow()):
                    # Another run marked it between our select and update
                    logger.info("Lead %s was already marked as reminded", lead_id)
                sent += 1
            except Exception:
                failed += 1
                logger.exception("Reminder to %s failed", email)
                await self.session.rollback()

        logger.info("Reminder job finished: %d sent, %d failed", sent, failed)
        return ReminderResults(total=len(due), sent=sent, failed=failed)

    async def send_single_reminder(self, email: str) -> SingleReminderResponse:
        """Send the reminder to one lead now, ignoring the delay."""
        lead = await self.lead_repo.get_latest_by_email(email)
        if not lead:
            raise NotFoundError(message=f"No lead found with email {email}")

        if lead.reminder_sent_at is not None:
            return SingleReminderResponse(
                success=False,
                message="Reminder already sent to this lead",
                lead_id=lead.id,
                sent_at=lead.reminder_sent_at
            )
        if lead.status != LeadStatus.NEW:
            return SingleReminderResponse(
                success=False,
                message=f"Lead status is {lead.status}, reminders only go to NEW leads",
                lead_id=lead.id
            )

        bee = await self.bee_repo.get(lead.bee_id) if lead.bee_id else None
        lead_id = lead.id
        if not await self._send(lead, bee.name if bee else None):
            raise DependencyError("Email", f"reminder to {email} was not delivered")

        sent_at = datetime.utcnow()
        await self.lead_repo.mark_reminder_sent(lead_id, sent_at)
        return SingleReminderResponse(
            success=True,
            message=f"Reminder sent to {email}",
            lead_id=lead_id,
            sent_at=sent_at
        )
