"""
Bee API routes.
Public catalogue under /api/bees, admin CRUD under /api/admin/bees.
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.bee_service import BeeService
from b2bee.schemas.bee import BeeCreate, BeeUpdate, BeeResponse, BeeList, BeeWithTestimonials
from b2bee.schemas.common import MessageResponse
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api", tags=["bees"])


@router.get("/bees", response_model=BeeList)
async def list_bees(session: AsyncSession = Depends(get_session)):
    """Active Bees with their latest testimonials."""
    bee_service = BeeService(session)
    return BeeList(bees=await bee_service.list_public())


@router.get("/bees/{slug}", response_model=BeeWithTestimonials)
async def get_bee(slug: str, session: AsyncSession = Depends(get_session)):
    bee_service = BeeService(session)
    return await bee_service.get_public(slug)


@router.get("/admin/bees", response_model=List[BeeResponse])
async def admin_list_bees(
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    bee_service = BeeService(session)
    return await bee_service.list()


@router.get("/admin/bees/{bee_id}", response_model=BeeResponse)
async def admin_get_bee(
    bee_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    bee_service = BeeService(session)
    return await bee_service.get(bee_id)


@router.post("/admin/bees", response_model=BeeResponse, status_code=201)
async def create_bee(
    data: BeeCreate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Create a Bee."""
    bee_service = BeeService(session)
    return await bee_service.create(data)


@router.patch("/admin/bees/{bee_id}", response_model=BeeResponse)
async def update_bee(
    bee_id: uuid.UUID,
    data: BeeUpdate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Update a Bee."""
    bee_service = BeeService(session)
    return await bee_service.update(bee_id, data)


@router.delete("/admin/bees/{bee_id}", response_model=MessageResponse)
async def delete_bee(
    bee_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Delete a Bee."""
    bee_service = BeeService(session)
    await bee_service.delete(bee_id)
    return MessageResponse(message="Bee deleted")
