"""
Seed the database with the demo Bees, testimonials, ABM pages and boat fund.

    b2bee-seed            (or: python -m b2bee.seed)

Bees and ABM pages are upserted by slug / identifier, testimonials are
skipped when the same author already has one, boat fund contributions are
always appended.
"""
import asyncio
import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from b2bee.config import settings
from b2bee.core.logging import configure_logging
from b2bee.database import dispose_engine, get_session_factory, init_db
from b2bee.repositories.abm_repo import ABMPageRepository
from b2bee.repositories.bee_repo import BeeRepository, TestimonialRepository
from b2bee.repositories.boat_fund_repo import BoatFundRepository

logger = logging.getLogger(__name__)


BEES = [
    {
        "slug": "social-bee",
        "name": "Social Bee",
        "tagline": "Your 24/7 Social Media Manager",
        "description": (
            "Automates social media posting, engagement, and content creation across all "
            "platforms. Never miss a post or engagement opportunity again."
        ),
        "icon": "/socialbee.png",
        "features": [
            "Create engaging content automatically",
            "Schedule posts across all platforms",
            "Engage with followers 24/7",
            "Track performance and analytics",
            "Multi-platform support (Instagram, Facebook, Twitter, LinkedIn)",
            "Content calendar management",
        ],
        "price_monthly": 299,
        "sort_order": 1,
    },
    {
        "slug": "sales-bee",
        "name": "Sales Bee",
        "tagline": "Your AI Sales Team",
        "description": (
            "Automates prospecting, personalized outreach, and meeting booking to fill your "
            "calendar with qualified leads."
        ),
        "icon": "/salesbee.png",
        "features": [
            "Find and qualify ideal prospects",
            "Personalized multichannel outreach",
            "Automated follow-up sequences",
            "Book meetings automatically",
            "Track and optimize campaigns",
            "CRM integration",
        ],
        "price_monthly": 499,
        "sort_order": 2,
    },
    {
        "slug": "bespoke-bee",
        "name": "Bespoke Bee",
        "tagline": "Custom AI Solutions",
        "description": (
            "Tell us your unique workflow and we'll build a custom Bee tailored to your exact "
            "business needs. Your automation, your way."
        ),
        "icon": "/bespokebee.png",
        "features": [
            "Fully customized automation",
            "Integrate with your existing tools",
            "Ongoing support and updates",
            "Dedicated success manager",
            "Flexible pricing based on complexity",
            "White-label options available",
        ],
        "price_monthly": None,
        "sort_order": 3,
    },
]

# (bee slug, testimonial)
TESTIMONIALS = [
    ("social-bee", {
        "author": "Sarah Johnson",
        "role": "Founder",
        "company": "FitLife Studios",
        "quote": (
            "Social Bee transformed our social media presence. We went from sporadic posts to "
            "consistent, engaging content that actually converts. Our bookings increased 40% in "
            "just 2 months!"
        ),
    }),
    ("sales-bee", {
        "author": "Michael Chen",
        "role": "Sales Director",
        "company": "TechStart Solutions",
        "quote": (
            "Sales Bee is like having a team of SDRs working around the clock. Our outbound "
            "pipeline has never been fuller, and the quality of leads is exceptional."
        ),
    }),
    ("social-bee", {
        "author": "Emma Williams",
        "role": "Owner",
        "company": "Boutique Haven",
        "quote": (
            "I was skeptical about AI automation, but B2Bee made it so easy. Now I can focus on "
            "what I love - designing - while the bees handle the marketing."
        ),
    }),
    ("bespoke-bee", {
        "author": "David Martinez",
        "role": "CEO",
        "company": "Growth Ventures",
        "quote": (
            "The bespoke solution B2Bee built for us was exactly what we needed. It integrates "
            "perfectly with our existing systems and saves us hours every day."
        ),
    }),
    ("social-bee", {
        "author": "Lisa Thompson",
        "role": "Marketing Manager",
        "company": "EcoGoods",
        "quote": (
            "Finally, marketing automation that actually works for small businesses. The ROI "
            "has been incredible - paid for itself in the first month."
        ),
    }),
    ("sales-bee", {
        "author": "James Anderson",
        "role": "Founder",
        "company": "ConsultPro",
        "quote": (
            "Sales Bee books more qualified meetings than our previous two sales reps combined. "
            "Game changer for our consultancy."
        ),
    }),
]

ABM_PAGES = [
    {
        "linkedin_identifier": "dbeer",
        "linkedin_url": "https://www.linkedin.com/in/dbeer/",
        "first_name": "Daniel",
        "last_name": "Beer",
        "title": "Associate Director",
        "company": "The Store Room",
        "target_market": "Plumbers, Electricians and Carpenters",
        "target_location": "Solihull, United Kingdom",
        "mock_companies": [
            "ABC Plumbing & Heating Ltd",
            "Smith Electrical Services",
            "Elite Carpentry Solutions",
            "ProFix Plumbing",
            "Midlands Electric Co",
            "Premier Carpentry Works",
            "HomeFlow Plumbing",
            "Voltage Electrical Ltd",
        ],
        "mock_leads": [
            {"name": "John Smith", "company": "ABC Plumbing & Heating Ltd", "title": "Owner & Director"},
            {"name": "Sarah Williams", "company": "Smith Electrical Services", "title": "Managing Director"},
            {"name": "Michael Johnson", "company": "Elite Carpentry Solutions", "title": "Founder"},
            {"name": "David Brown", "company": "ProFix Plumbing", "title": "Business Owner"},
            {"name": "Emma Davis", "company": "Midlands Electric Co", "title": "Director"},
            {"name": "James Wilson", "company": "Premier Carpentry Works", "title": "Owner"},
        ],
        "mock_analytics": {"replies": 47, "meetings": 12, "openRate": 68, "replyRate": 24},
        "benefit_points": [
            "Fill storage units faster",
            "Target local tradesmen",
            "Automated outreach 24/7",
            "Qualified leads only",
        ],
    },
    {
        "linkedin_identifier": "mjcbeckett",
        "linkedin_url": "https://www.linkedin.com/in/mjcbeckett/",
        "first_name": "Michael",
        "last_name": "Beckett",
        "title": "Founder & CEO",
        "company": "B2Bee",
        "target_market": "Small Business Owners and Entrepreneurs",
        "target_location": "United Kingdom",
        "mock_companies": [
            "Green Leaf Consulting",
            "Urban Kitchen Co",
            "FitPro Studios",
            "Digital Edge Marketing",
            "Artisan Coffee House",
            "TechStart Solutions",
            "Bloom Beauty Salon",
            "Peak Performance Coaching",
        ],
        "mock_leads": [
            {"name": "Sophie Turner", "company": "Green Leaf Consulting", "title": "Founder"},
            {"name": "Oliver Hayes", "company": "Urban Kitchen Co", "title": "Owner & Head Chef"},
            {"name": "Emily Roberts", "company": "FitPro Studios", "title": "Managing Director"},
            {"name": "Lucas Bennett", "company": "Digital Edge Marketing", "title": "CEO"},
            {"name": "Isabella Clarke", "company": "Artisan Coffee House", "title": "Owner"},
            {"name": "Noah Phillips", "company": "TechStart Solutions", "title": "Founder & CTO"},
        ],
        "mock_analytics": {"replies": 63, "meetings": 18, "openRate": 72, "replyRate": 31},
        "benefit_points": [
            "Scale without hiring",
            "Focus on what you do best",
            "Predictable growth",
            "AI-powered efficiency",
        ],
    },
]

# Amounts in pence
BOAT_FUND = [
    (50000, "Initial seed money"),
    (125000, "Social Bee monthly commission"),
    (75000, "Sales Bee setup fee"),
    (20000, "Bespoke Bee consultation"),
]


async def seed(session: AsyncSession) -> dict:
    """Write the demo data. Returns how many rows of each kind were written."""
    bee_repo = BeeRepository(session)
    testimonial_repo = TestimonialRepository(session)
    abm_repo = ABMPageRepository(session)
    boat_fund_repo = BoatFundRepository(session)

    bee_ids = {}
    for data in BEES:
        record = dict(data, is_active=True, cta_cal_link=settings.CALCOM_LINK)
        bee = await bee_repo.get_by_slug(data["slug"])
        if bee:
            bee = await bee_repo.update(bee.id, record, nullable=("price_monthly",))
        else:
            bee = await bee_repo.create(record)
        bee_ids[bee.slug] = bee.id
    logger.info("Seeded %d bees", len(bee_ids))

    testimonials = 0
    for slug, data in TESTIMONIALS:
        if await testimonial_repo.exists_by_field("author", data["author"]):
            continue
        await testimonial_repo.create(dict(data, rating=5, bee_id=bee_ids[slug]))
        testimonials += 1
    logger.info("Seeded %d testimonials", testimonials)

    for data in ABM_PAGES:
        record = dict(data, hero_message=None, is_active=True)
        page = await abm_repo.get_by_identifier(data["linkedin_identifier"])
        if page:
            await abm_repo.update(page.id, record, nullable=("hero_message",))
        else:
            await abm_repo.create(record)
    logger.info("Seeded %d ABM pages", len(ABM_PAGES))

    for amount, description in BOAT_FUND:
        await boat_fund_repo.create({"amount": amount, "description": description})
    logger.info("Seeded %d boat fund contributions", len(BOAT_FUND))

    return {
        "bees": len(bee_ids),
        "testimonials": testimonials,
        "abmPages": len(ABM_PAGES),
        "boatFund": len(BOAT_FUND)
    }


async def _run() -> None:
    await init_db()
    try:
        async with get_session_factory()() as session:
            await seed(session)
    finally:
        await dispose_engine()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(_run())
    logger.info("Database seeded successfully")


if __name__ == "__main__":
    main()
