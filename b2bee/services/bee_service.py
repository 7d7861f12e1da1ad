"""
Bee service - product catalogue and testimonials.
"""
import uuid
import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.core.exceptions import ConflictError, NotFoundError
from b2bee.models.bee import Bee
from b2bee.models.testimonial import Testimonial
from b2bee.repositories.bee_repo import BeeRepository, TestimonialRepository
from b2bee.schemas.bee import (
    BeeCreate, BeeUpdate, BeeWithTestimonials,
    TestimonialCreate, TestimonialUpdate, TestimonialResponse
)

logger = logging.getLogger(__name__)

# Testimonials shown per Bee on the listing and detail pages
LIST_TESTIMONIALS = 3
DETAIL_TESTIMONIALS = 6

# Fields that may be explicitly cleared with null on update
BEE_NULLABLE_FIELDS = ("icon", "price_monthly", "cta_cal_link")
TESTIMONIAL_NULLABLE_FIELDS = ("rating", "bee_id")


class BeeService:
    """Service for Bee operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.bee_repo = BeeRepository(session)
        self.testimonial_repo = TestimonialRepository(session)

    async def _with_testimonials(self, bee: Bee, limit: int) -> BeeWithTestimonials:
        testimonials = await self.testimonial_repo.latest_for_bee(bee.id, limit)
        result = BeeWithTestimonials.model_validate(bee)
        result.testimonials = [TestimonialResponse.model_validate(t) for t in testimonials]
        return result

    async def list_public(self) -> List[BeeWithTestimonials]:
        """Active Bees in display order, each with its latest testimonials."""
        bees = await self.bee_repo.get_active()
        return [await self._with_testimonials(bee, LIST_TESTIMONIALS) for bee in bees]

    async def get_public(self, slug: str) -> BeeWithTestimonials:
        """One active Bee by slug."""
        bee = await self.bee_repo.get_by_slug(slug)
        if not bee or not bee.is_active:
            raise NotFoundError("Bee", slug)
        return await self._with_testimonials(bee, DETAIL_TESTIMONIALS)

    async def list(self) -> List[Bee]:
        """All Bees, inactive included."""
        return await self.bee_repo.list(order_by="sort_order", order_desc=False)

    async def get(self, bee_id: uuid.UUID) -> Bee:
        bee = await self.bee_repo.get(bee_id)
        if not bee:
            raise NotFoundError("Bee", str(bee_id))
        return bee

    async def create(self, data: BeeCreate) -> Bee:
        """Create a Bee. Slugs are unique."""
        if await self.bee_repo.exists_by_field("slug", data.slug):
            raise ConflictError("Bee", "slug", data.slug)

        bee = await self.bee_repo.create(data.model_dump())
        logger.info("Bee '%s' created", bee.slug)
        return bee

    async def update(self, bee_id: uuid.UUID, data: BeeUpdate) -> Bee:
        bee = await self.get(bee_id)

        if data.slug and data.slug != bee.slug:
            if await self.bee_repo.exists_by_field("slug", data.slug):
                raise ConflictError("Bee", "slug", data.slug)

        return await self.bee_repo.update(
            bee_id, data.model_dump(exclude_unset=True), nullable=BEE_NULLABLE_FIELDS
        )

    async def delete(self, bee_id: uuid.UUID) -> None:
        """Delete a Bee. Its leads, bookings and testimonials keep existing without it."""
        if not await self.bee_repo.delete(bee_id):
            raise NotFoundError("Bee", str(bee_id))
        logger.info("Bee %s deleted", bee_id)


class TestimonialService:
    """Service for testimonial operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.testimonial_repo = TestimonialRepository(session)
        self.bee_repo = BeeRepository(session)

    async def _check_bee(self, bee_id: uuid.UUID) -> None:
        if not await self.bee_repo.get(bee_id):
            raise NotFoundError("Bee", str(bee_id))

    async def list(self) -> List[Testimonial]:
        """All testimonials, newest first."""
        return await self.testimonial_repo.list()

    async def create(self, data: TestimonialCreate) -> Testimonial:
        if data.bee_id:
            await self._check_bee(data.bee_id)
        return await self.testimonial_repo.create(data.model_dump())

    async def update(self, testimonial_id: uuid.UUID, data: TestimonialUpdate) -> Testimonial:
        if data.bee_id:
            await self._check_bee(data.bee_id)

        testimonial = await self.testimonial_repo.update(
            testimonial_id,
            data.model_dump(exclude_unset=True),
            nullable=TESTIMONIAL_NULLABLE_FIELDS
        )
        if not testimonial:
            raise NotFoundError("Testimonial", str(testimonial_id))
        return testimonial

    async def delete(self, testimonial_id: uuid.UUID) -> None:
        if not await self.testimonial_repo.delete(testimonial_id):
            raise NotFoundError("Testimonial", str(testimonial_id))
