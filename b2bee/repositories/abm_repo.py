"""
ABM page repositories.
"""
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.models.abm import ABMPage, ABMMarinasPage
from b2bee.repositories.base import BaseRepository


class ABMPageRepository(BaseRepository[ABMPage]):
    """Repository for Sales Bee ABM pages."""

    def __init__(self, session: AsyncSession):
        super().__init__(ABMPage, session)

    async def get_by_identifier(self, identifier: str) -> Optional[ABMPage]:
        return await self.get_by_field("linkedin_identifier", identifier)


class ABMMarinasPageRepository(BaseRepository[ABMMarinasPage]):
    """Repository for Smart Marina ABM pages."""

    def __init__(self, session: AsyncSession):
        super().__init__(ABMMarinasPage, session)

    async def get_by_identifier(self, identifier: str) -> Optional[ABMMarinasPage]:
        return await self.get_by_field("linkedin_identifier", identifier)
