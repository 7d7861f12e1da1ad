"""
Scheduled job routes, called by an external cron.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.email_service import EmailService
from b2bee.services.reminder_service import ReminderService
from b2bee.schemas.reminder import (
    ReminderJobResponse, SingleReminderRequest, SingleReminderResponse
)
from b2bee.api.deps import get_current_admin, get_email_service, require_cron_secret

router = APIRouter(prefix="/api", tags=["reminders"])


@router.get(
    "/cron/send-reminders",
    response_model=ReminderJobResponse,
    dependencies=[Depends(require_cron_secret)]
)
async def send_reminders(
    session: AsyncSession = Depends(get_session),
    email_service: Optional[EmailService] = Depends(get_email_service)
):
    """Email every lead that is due a booking reminder."""
    reminder_service = ReminderService(session, email_service)
    results = await reminder_service.run()
    return ReminderJobResponse(results=results)


@router.post("/test-reminder", response_model=SingleReminderResponse)
async def send_test_reminder(
    data: SingleReminderRequest,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
    email_service: Optional[EmailService] = Depends(get_email_service)
):
    """Send the reminder to one lead right away."""
    reminder_service = ReminderService(session, email_service)
    return await reminder_service.send_single_reminder(data.email)
