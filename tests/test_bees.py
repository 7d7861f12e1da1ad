"""Tests for the Bee catalogue and testimonials."""

import pytest

from b2bee.core.security import create_token
from b2bee.models import testimonial as testimonial_model


async def _add_testimonials(session, bee_id, count):
    for i in range(count):
        session.add(testimonial_model.Testimonial(author=f"Author {i}", quote=f"Quote {i}", rating=5, bee_id=bee_id))
    await session.commit()


class TestPublicBees:
    """Tests for GET /api/bees and /api/bees/{slug}."""

    @pytest.mark.asyncio
    async def test_lists_active_bees_in_order(self, client, make_bee):
        await make_bee(slug="sales-bee", name="Sales Bee", sort_order=2)
        await make_bee(slug="social-bee", name="Social Bee", sort_order=1)
        await make_bee(slug="old-bee", name="Old Bee", sort_order=0, is_active=False)

        response = await client.get("/api/bees")

        assert response.status_code == 200
        slugs = [bee["slug"] for bee in response.json()["bees"]]
        assert slugs == ["social-bee", "sales-bee"]

    @pytest.mark.asyncio
    async def test_listing_caps_testimonials_at_three(self, client, session, make_bee):
        bee = await make_bee()
        await _add_testimonials(session, bee.id, 5)

        response = await client.get("/api/bees")

        assert len(response.json()["bees"][0]["testimonials"]) == 3

    @pytest.mark.asyncio
    async def test_detail_shows_six_testimonials(self, client, session, make_bee):
        bee = await make_bee()
        await _add_testimonials(session, bee.id, 8)

        response = await client.get("/api/bees/sales-bee")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Sales Bee"
        assert len(body["testimonials"]) == 6

    @pytest.mark.asyncio
    async def test_inactive_or_unknown_is_404(self, client, make_bee):
        await make_bee(slug="old-bee", name="Old Bee", is_active=False)

        assert (await client.get("/api/bees/old-bee")).status_code == 404
        assert (await client.get("/api/bees/missing")).status_code == 404


class TestAdminBees:
    """Tests for /api/admin/bees."""

    @pytest.mark.asyncio
    async def test_requires_admin(self, client):
        response = await client.post("/api/admin/bees", json={"slug": "x", "name": "X"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_admin_token_rejected(self, client):
        token = create_token({"sub": "someone@x.com", "role": "viewer"})
        response = await client.get("/api/admin/bees", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client, admin_headers):
        created = await client.post("/api/admin/bees", headers=admin_headers, json={
            "slug": "sales-bee",
            "name": "Sales Bee",
            "priceMonthly": 499,
            "features": ["Book meetings automatically"],
        })
        assert created.status_code == 201
        bee_id = created.json()["id"]
        assert created.json()["priceMonthly"] == 499

        updated = await client.patch(
            f"/api/admin/bees/{bee_id}", headers=admin_headers,
            json={"tagline": "Your AI Sales Team", "priceMonthly": None},
        )
        assert updated.status_code == 200
        assert updated.json()["tagline"] == "Your AI Sales Team"
        assert updated.json()["priceMonthly"] is None
        assert updated.json()["name"] == "Sales Bee"

        deleted = await client.delete(f"/api/admin/bees/{bee_id}", headers=admin_headers)
        assert deleted.status_code == 200

        missing = await client.delete(f"/api/admin/bees/{bee_id}", headers=admin_headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_slug_is_conflict(self, client, admin_headers, make_bee):
        await make_bee()

        response = await client.post("/api/admin/bees", headers=admin_headers, json={
            "slug": "sales-bee", "name": "Another",
        })

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_rename_onto_existing_slug_is_conflict(self, client, admin_headers, make_bee):
        await make_bee()
        other = await make_bee(slug="social-bee", name="Social Bee")

        response = await client.patch(
            f"/api/admin/bees/{other.id}", headers=admin_headers, json={"slug": "sales-bee"}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_admin_list_includes_inactive(self, client, admin_headers, make_bee):
        await make_bee(is_active=False)

        response = await client.get("/api/admin/bees", headers=admin_headers)

        assert [bee["slug"] for bee in response.json()] == ["sales-bee"]


class TestTestimonials:
    """Tests for /api/testimonials."""

    @pytest.mark.asyncio
    async def test_public_list(self, client, session, make_bee):
        bee = await make_bee()
        await _add_testimonials(session, bee.id, 2)

        response = await client.get("/api/testimonials")

        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_create_requires_admin(self, client):
        response = await client.post("/api/testimonials", json={"author": "A", "quote": "Q"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client, admin_headers, make_bee):
        bee = await make_bee()

        created = await client.post("/api/testimonials", headers=admin_headers, json={
            "author": "Sarah Johnson",
            "company": "FitLife Studios",
            "quote": "Bookings up 40%",
            "rating": 5,
            "beeId": str(bee.id),
        })
        assert created.status_code == 201
        testimonial_id = created.json()["id"]

        updated = await client.patch(
            f"/api/testimonials/{testimonial_id}", headers=admin_headers, json={"rating": 4}
        )
        assert updated.json()["rating"] == 4
        assert updated.json()["author"] == "Sarah Johnson"

        deleted = await client.delete(f"/api/testimonials/{testimonial_id}", headers=admin_headers)
        assert deleted.status_code == 200

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, client, admin_headers):
        response = await client.post("/api/testimonials", headers=admin_headers, json={
            "author": "A", "quote": "Q", "rating": 6,
        })

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "rating"

    @pytest.mark.asyncio
    async def test_unknown_bee_is_404(self, client, admin_headers):
        response = await client.post("/api/testimonials", headers=admin_headers, json={
            "author": "A", "quote": "Q", "beeId": "00000000-0000-0000-0000-000000000000",
        })
        assert response.status_code == 404
