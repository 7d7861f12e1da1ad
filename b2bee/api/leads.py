"""
Leads API routes.
Public lead capture plus the admin read side.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.email_service import EmailService
from b2bee.services.lead_service import LeadService, notify_new_lead
from b2bee.schemas.lead import (
    LeadSubmission, LeadSubmissionResponse, LeadResponse, LeadListResponse, LeadFilter
)
from b2bee.api.deps import get_current_admin, get_email_service

router = APIRouter(prefix="/api", tags=["leads"])


@router.post("/lead", response_model=LeadSubmissionResponse)
async def submit_lead(
    data: LeadSubmission,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    email_service: Optional[EmailService] = Depends(get_email_service)
):
    """Capture a lead and return the Cal.com prefill values."""
    lead_service = LeadService(session)
    response, notification = await lead_service.submit(data)

    # Sent after the response; failures are only logged
    background_tasks.add_task(notify_new_lead, email_service, notification)
    return response


@router.get("/admin/leads", response_model=LeadListResponse)
async def list_leads(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    bee_slug: Optional[str] = Query(None, alias="beeSlug"),
    search: Optional[str] = None,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """List leads with filtering and pagination."""
    filters = LeadFilter(status=status, bee_slug=bee_slug, search=search)

    lead_service = LeadService(session)
    return await lead_service.list(filters, page, limit)


@router.get("/admin/leads/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Get a lead by ID."""
    lead_service = LeadService(session)
    return await lead_service.get(lead_id)
