"""
ABM page API routes (Sales Bee landing pages).
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.abm_service import ABMPageService
from b2bee.schemas.abm import ABMPageCreate, ABMPageUpdate, ABMPageResponse
from b2bee.schemas.common import MessageResponse
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api/abm-pages", tags=["abm-pages"])


@router.get("/public/{identifier}", response_model=ABMPageResponse)
async def get_public_page(identifier: str, session: AsyncSession = Depends(get_session)):
    """Active page for a prospect's LinkedIn identifier."""
    abm_service = ABMPageService(session)
    return await abm_service.get_public(identifier)


@router.get("", response_model=List[ABMPageResponse])
async def list_pages(
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    abm_service = ABMPageService(session)
    return await abm_service.list()


@router.post("", response_model=ABMPageResponse, status_code=201)
async def create_page(
    data: ABMPageCreate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    """Create an ABM page; the LinkedIn identifier must be unused."""
    abm_service = ABMPageService(session)
    return await abm_service.create(data)


@router.get("/{page_id}", response_model=ABMPageResponse)
async def get_page(
    page_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    abm_service = ABMPageService(session)
    return await abm_service.get(page_id)


@router.put("/{page_id}", response_model=ABMPageResponse)
async def update_page(
    page_id: uuid.UUID,
    data: ABMPageUpdate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    abm_service = ABMPageService(session)
    return await abm_service.update(page_id, data)


@router.delete("/{page_id}", response_model=MessageResponse)
async def delete_page(
    page_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    abm_service = ABMPageService(session)
    await abm_service.delete(page_id)
    return MessageResponse(message="ABM page deleted")
