"""
ABM page service - personalised landing pages for outreach prospects.
"""
import uuid
import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.core.exceptions import ConflictError, NotFoundError
from b2bee.models.abm import ABMPage, ABMMarinasPage
from b2bee.repositories.abm_repo import ABMPageRepository, ABMMarinasPageRepository
from b2bee.schemas.abm import (
    ABM_NULLABLE_FIELDS,
    ABMPageCreate, ABMPageUpdate,
    ABMMarinasPageCreate, ABMMarinasPageUpdate
)

logger = logging.getLogger(__name__)


class ABMPageService:
    """Service for Sales Bee ABM pages."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ABMPageRepository(session)

    async def list(self) -> List[ABMPage]:
        return await self.repo.list()

    async def get(self, page_id: uuid.UUID) -> ABMPage:
        page = await self.repo.get(page_id)
        if not page:
            raise NotFoundError("ABM page", str(page_id))
        return page

    async def get_public(self, identifier: str) -> ABMPage:
        """Active page for a LinkedIn identifier."""
        page = await self.repo.get_by_identifier(identifier)
        if not page or not page.is_active:
            raise NotFoundError("ABM page", identifier)
        return page

    async def create(self, data: ABMPageCreate) -> ABMPage:
        if await self.repo.exists_by_field("linkedin_identifier", data.linkedin_identifier):
            raise ConflictError("ABM page", "identifier", data.linkedin_identifier)

        page = await self.repo.create(data.to_record())
        logger.info("ABM page '%s' created", page.linkedin_identifier)
        return page

    async def update(self, page_id: uuid.UUID, data: ABMPageUpdate) -> ABMPage:
        """Update a page. The identifier is fixed at creation."""
        page = await self.repo.update(page_id, data.to_record(), nullable=ABM_NULLABLE_FIELDS)
        if not page:
            raise NotFoundError("ABM page", str(page_id))
        return page

    async def delete(self, page_id: uuid.UUID) -> None:
        if not await self.repo.delete(page_id):
            raise NotFoundError("ABM page", str(page_id))


class ABMMarinasPageService:
    """Service for Smart Marina ABM pages."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ABMMarinasPageRepository(session)

    async def list(self) -> List[ABMMarinasPage]:
        return await self.repo.list()

    async def get(self, page_id: uuid.UUID) -> ABMMarinasPage:
        page = await self.repo.get(page_id)
        if not page:
            raise NotFoundError("Marina page", str(page_id))
        return page

    async def get_public(self, identifier: str) -> ABMMarinasPage:
        page = await self.repo.get_by_identifier(identifier)
        if not page or not page.is_active:
            raise NotFoundError("Marina page", identifier)
        return page

    async def create(self, data: ABMMarinasPageCreate) -> ABMMarinasPage:
        if await self.repo.exists_by_field("linkedin_identifier", data.linkedin_identifier):
            raise ConflictError("Marina page", "identifier", data.linkedin_identifier)

        page = await self.repo.create(data.to_record())
        logger.info("Marina page '%s' created", page.linkedin_identifier)
        return page

    async def update(self, page_id: uuid.UUID, data: ABMMarinasPageUpdate) -> ABMMarinasPage:
        """Update a page. A new identifier must not belong to another page."""
        page = await self.get(page_id)

        identifier = data.linkedin_identifier
        if identifier and identifier != page.linkedin_identifier:
            if await self.repo.exists_by_field("linkedin_identifier", identifier):
                raise ConflictError("Marina page", "identifier", identifier)

        return await self.repo.update(page_id, data.to_record(), nullable=ABM_NULLABLE_FIELDS)

    async def delete(self, page_id: uuid.UUID) -> None:
        if not await self.repo.delete(page_id):
            raise NotFoundError("Marina page", str(page_id))
