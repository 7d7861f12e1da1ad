"""Tests for the demo data seeder."""

import pytest
from sqlalchemy import func
from sqlmodel import select

from b2bee.config import settings
from b2bee.models import testimonial as testimonial_model
from b2bee.models.abm import ABMPage
from b2bee.models.bee import Bee
from b2bee.models.boat_fund import BoatFundContribution
from b2bee.seed import seed


async def _count(session, model):
    result = await session.exec(select(func.count()).select_from(model))
    return result.one()


class TestSeed:

    @pytest.mark.asyncio
    async def test_first_run(self, session):
        counts = await seed(session)

        assert counts == {"bees": 3, "testimonials": 6, "abmPages": 2, "boatFund": 4}
        bees = (await session.exec(select(Bee).order_by(Bee.sort_order))).all()
        assert {bee.slug for bee in bees} == {"social-bee", "sales-bee", "bespoke-bee"}
        assert all(bee.cta_cal_link == settings.CALCOM_LINK for bee in bees)

    @pytest.mark.asyncio
    async def test_second_run_upserts(self, session):
        await seed(session)
        counts = await seed(session)

        assert counts["testimonials"] == 0
        assert await _count(session, Bee) == 3
        assert await _count(session, testimonial_model.Testimonial) == 6
        assert await _count(session, ABMPage) == 2
        # The ledger is append-only
        assert await _count(session, BoatFundContribution) == 8
