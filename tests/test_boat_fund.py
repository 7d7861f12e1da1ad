"""Tests for the boat fund ledger."""

import pytest

from b2bee.core.exceptions import ValidationError
from b2bee.schemas.boat_fund import ContributionCreate
from b2bee.services.boat_fund_service import BoatFundService


class TestBoatFund:
    """Tests for /api/boat-fund."""

    @pytest.mark.asyncio
    async def test_requires_admin(self, client):
        assert (await client.get("/api/boat-fund")).status_code == 401
        assert (await client.post("/api/boat-fund", json={"amount": 100})).status_code == 401

    @pytest.mark.asyncio
    async def test_empty_fund(self, client, admin_headers):
        response = await client.get("/api/boat-fund", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"contributions": [], "total": 0}

    @pytest.mark.asyncio
    async def test_add_and_total(self, client, admin_headers):
        await client.post("/api/boat-fund", headers=admin_headers, json={
            "amount": 50000, "description": "Initial seed money",
        })
        added = await client.post("/api/boat-fund", headers=admin_headers, json={"amount": 1250.6})

        assert added.status_code == 200
        assert added.json()["amount"] == 1251
        assert added.json()["description"] == "Contribution"

        summary = (await client.get("/api/boat-fund", headers=admin_headers)).json()
        assert summary["total"] == 51251
        assert len(summary["contributions"]) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"amount": 0}, {"amount": -5}, {"amount": 0.2}])
    async def test_invalid_amount_is_400(self, client, admin_headers, payload):
        response = await client.post("/api/boat-fund", headers=admin_headers, json=payload)

        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "amount", "message": "Valid amount is required"}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b'{"amount": NaN}', b'{"amount": Infinity}', b'{"amount": -Infinity}'])
    async def test_non_finite_amount_is_400(self, client, admin_headers, raw):
        response = await client.post(
            "/api/boat-fund",
            headers={**admin_headers, "Content-Type": "application/json"},
            content=raw,
        )

        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "amount", "message": "Valid amount is required"}]

    @pytest.mark.asyncio
    async def test_service_rejects_missing_amount(self, session):
        with pytest.raises(ValidationError):
            await BoatFundService(session).add(ContributionCreate(description="Nothing"))
