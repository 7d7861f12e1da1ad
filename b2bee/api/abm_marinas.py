"""
Smart Marina ABM page API routes.
Responses are wrapped as {"pages": [...]} / {"page": {...}} for the admin UI.
"""
import uuid

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.database import get_session
from b2bee.services.abm_service import ABMMarinasPageService
from b2bee.schemas.abm import (
    ABMMarinasPageCreate, ABMMarinasPageUpdate, ABMMarinasPageResponse,
    ABMMarinasPageList, ABMMarinasPageEnvelope
)
from b2bee.schemas.common import MessageResponse
from b2bee.api.deps import get_current_admin

router = APIRouter(prefix="/api/abm-marinas", tags=["abm-marinas"])


@router.get("/public/{identifier}", response_model=ABMMarinasPageResponse)
async def get_public_page(identifier: str, session: AsyncSession = Depends(get_session)):
    marina_service = ABMMarinasPageService(session)
    return await marina_service.get_public(identifier)


@router.get("", response_model=ABMMarinasPageList)
async def list_pages(
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    marina_service = ABMMarinasPageService(session)
    return {"pages": await marina_service.list()}


@router.post("", response_model=ABMMarinasPageEnvelope, status_code=201)
async def create_page(
    data: ABMMarinasPageCreate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    marina_service = ABMMarinasPageService(session)
    return {"page": await marina_service.create(data)}


@router.get("/{page_id}", response_model=ABMMarinasPageEnvelope)
async def get_page(
    page_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    marina_service = ABMMarinasPageService(session)
    return {"page": await marina_service.get(page_id)}


@router.put("/{page_id}", response_model=ABMMarinasPageEnvelope)
async def update_page(
    page_id: uuid.UUID,
    data: ABMMarinasPageUpdate,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    marina_service = ABMMarinasPageService(session)
    return {"page": await marina_service.update(page_id, data)}


@router.delete("/{page_id}", response_model=MessageResponse)
async def delete_page(
    page_id: uuid.UUID,
    admin: dict = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session)
):
    marina_service = ABMMarinasPageService(session)
    await marina_service.delete(page_id)
    return MessageResponse(message="Marina page deleted")
