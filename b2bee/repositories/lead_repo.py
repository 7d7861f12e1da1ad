"""
Lead repository with search and reminder queries.
"""
import uuid
from typing import Optional, List, Tuple
from datetime import datetime

from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func, update

from b2bee.models.bee import Bee
from b2bee.models.lead import Lead, LeadStatus
from b2bee.repositories.base import BaseRepository
from b2bee.schemas.lead import LeadFilter


class LeadRepository(BaseRepository[Lead]):
    """Repository for Lead operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Lead, session)

    async def search(
        self,
        filters: Optional[LeadFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Search leads with filtering and pagination."""
        query = select(Lead)

        if filters:
            if filters.status:
                query = query.where(Lead.status == filters.status)
            if filters.bee_slug:
                query = query.join(Bee, Lead.bee_id == Bee.id).where(Bee.slug == filters.bee_slug)
            if filters.search:
                search_term = f"%{filters.search}%"
                query = query.where(
                    or_(
                        Lead.first_name.ilike(search_term),
                        Lead.last_name.ilike(search_term),
                        Lead.email.ilike(search_term),
                        Lead.company.ilike(search_term)
                    )
                )

        return await self.list_paginated(query, page, limit)

    async def get_latest_by_email(self, email: str) -> Optional[Lead]:
        """Most recently created lead for an email (case-insensitive)."""
        query = select(Lead).where(
            func.lower(Lead.email) == email.strip().lower()
        ).order_by(Lead.created_at.desc())
        result = await self.session.exec(query)
        return result.first()

    async def find_due_for_reminder(
        self,
        cutoff: datetime,
        limit: int
    ) -> List[Tuple[Lead, Optional[str]]]:
        """
        NEW leads created at or before ``cutoff`` that were never reminded,
        oldest first, with their Bee name.
        """
        query = (
            select(Lead, Bee.name)
            .outerjoin(Bee, Lead.bee_id == Bee.id)
            .where(
                Lead.status == LeadStatus.NEW,
                Lead.reminder_sent_at.is_(None),
                Lead.created_at <= cutoff
            )
            .order_by(Lead.created_at.asc(), Lead.id.asc())
            .limit(limit)
        )
        result = await self.session.exec(query)
        return [(lead, bee_name) for lead, bee_name in result.all()]

    async def mark_reminder_sent(self, lead_id: uuid.UUID, sent_at: datetime) -> bool:
        """
        Set reminder_sent_at only if it is still empty.
        Returns False when another run already marked the lead.
        """
        stmt = (
            update(Lead)
            .where(Lead.id == lead_id, Lead.reminder_sent_at.is_(None))
            .values(reminder_sent_at=sent_at, updated_at=sent_at)
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def update_status(self, lead_id: uuid.UUID, status: str) -> bool:
        """Update lead status."""
        lead = await self.get(lead_id)
        if lead:
            lead.status = status
            lead.updated_at = datetime.utcnow()
            self.session.add(lead)
            await self.session.commit()
            return True
        return False

    async def recent(self, limit: int = 10) -> List[Tuple[Lead, Optional[str]]]:
        """Latest submissions with their Bee name, for the dashboard."""
        query = (
            select(Lead, Bee.name)
            .outerjoin(Bee, Lead.bee_id == Bee.id)
            .order_by(Lead.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(query)
        return [(lead, bee_name) for lead, bee_name in result.all()]

    async def get_stats(self) -> dict:
        """Lead counts for the dashboard."""
        total = await self.count()

        by_status = {}
        query = select(Lead.status, func.count()).group_by(Lead.status)
        result = await self.session.exec(query)
        for status, count in result.all():
            by_status[status] = count

        return {
            "total": total,
            "new": by_status.get(LeadStatus.NEW, 0),
            "booked": by_status.get(LeadStatus.BOOKED, 0),
            "byStatus": by_status
        }
