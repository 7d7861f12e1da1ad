"""
Testimonial API routes.
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.bee_service import TestimonialService
from b2bee.schemas.bee import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from b2bee.schemas.common import MessageResponse
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api/testimonials", tags=["testimonials"])


@router.get("", response_model=List[TestimonialResponse])
async def list_testimonials(session: AsyncSession = Depends(get_session)):
    """All testimonials, newest first."""
    testimonial_service = TestimonialService(session)
    return await testimonial_service.list()


@router.post("", response_model=TestimonialResponse, status_code=201)
async def create_testimonial(
    data: TestimonialCreate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    testimonial_service = TestimonialService(session)
    return await testimonial_service.create(data)


@router.patch("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: uuid.UUID,
    data: TestimonialUpdate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    testimonial_service = TestimonialService(session)
    return await testimonial_service.update(testimonial_id, data)


@router.delete("/{testimonial_id}", response_model=MessageResponse)
async def delete_testimonial(
    testimonial_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    testimonial_service = TestimonialService(session)
    await testimonial_service.delete(testimonial_id)
    return MessageResponse(message="Testimonial deleted")
