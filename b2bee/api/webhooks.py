"""
Cal.com webhook route.
"""
import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.config import settings
from b2bee.core.exceptions import UnauthorizedError, ValidationError
from b2bee.core.security import verify_signature
from b2bee.database import get_session
from b2bee.services.booking_service import BookingService
from b2bee.schemas.booking import WebhookAck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])

SIGNATURE_HEADER = "X-Cal-Signature-256"


@router.post("/cal", response_model=WebhookAck, response_model_exclude_none=True)
async def cal_webhook(
    request: Request,
    session: AsyncSession = Depends(get_session)
):
    """
    Receive Cal.com booking events.
    Answers 200 for every well-formed event, including ones we ignore.
    """
    body = await request.body()

    if settings.CALCOM_WEBHOOK_SECRET:
        signature = request.headers.get(SIGNATURE_HEADER)
        if not verify_signature(body, signature, settings.CALCOM_WEBHOOK_SECRET):
            logger.warning("Cal.com webhook signature mismatch")
            if settings.CALCOM_ENFORCE_SIGNATURE:
                raise UnauthorizedError("Invalid webhook signature")

    try:
        event = json.loads(body)
    except ValueError:
        raise ValidationError.for_field("body", "Invalid webhook payload")
    if not isinstance(event, dict):
        raise ValidationError.for_field("body", "Invalid webhook payload")

    booking_service = BookingService(session)
    return await booking_service.handle_webhook(event)
