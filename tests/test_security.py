"""Tests for admin tokens, the cron secret and webhook signatures."""

from datetime import timedelta

import pytest

from b2bee.core.security import (
    check_bearer_secret,
    compute_signature,
    create_admin_token,
    create_token,
    verify_signature,
    verify_token,
)
from b2bee.create_admin import main as create_admin_main


class TestTokens:

    def test_admin_token_round_trip(self):
        payload = verify_token(create_admin_token("admin@b2bee.ai"))

        assert payload["sub"] == "admin@b2bee.ai"
        assert payload["role"] == "admin"

    def test_expired_token_rejected(self):
        token = create_admin_token("admin@b2bee.ai", expires_delta=timedelta(seconds=-1))
        assert verify_token(token) is None

    def test_garbage_rejected(self):
        assert verify_token("not.a.token") is None

    def test_wrong_type_rejected(self):
        token = create_token({"sub": "a", "role": "admin"})
        assert verify_token(token, token_type="refresh") is None

    @pytest.mark.asyncio
    async def test_expired_token_is_401_on_admin_route(self, client):
        token = create_admin_token("admin@b2bee.ai", expires_delta=timedelta(seconds=-1))

        response = await client.get("/api/admin/leads", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Could not validate credentials"}


class TestBearerSecret:

    def test_unset_secret_allows_anything(self):
        assert check_bearer_secret(None, None) is True
        assert check_bearer_secret("Bearer x", "") is True

    def test_exact_match_required(self):
        assert check_bearer_secret("Bearer s3cret", "s3cret") is True
        assert check_bearer_secret("Bearer s3cre", "s3cret") is False
        assert check_bearer_secret("s3cret", "s3cret") is False
        assert check_bearer_secret(None, "s3cret") is False


class TestSignature:

    def test_matches_hmac_sha256(self):
        body = b'{"triggerEvent":"PING"}'
        signature = compute_signature(body, "whsec")

        assert len(signature) == 64
        assert verify_signature(body, signature, "whsec") is True
        assert verify_signature(body, signature.upper(), "whsec") is True

    def test_rejects_tampered_body_or_missing_header(self):
        signature = compute_signature(b"original", "whsec")

        assert verify_signature(b"tampered", signature, "whsec") is False
        assert verify_signature(b"original", None, "whsec") is False


class TestCreateAdminCommand:

    def test_prints_admin_token(self, capsys):
        assert create_admin_main(["--email", "ops@b2bee.ai", "--days", "3"]) == 0

        token = capsys.readouterr().out.strip()
        payload = verify_token(token)
        assert payload["sub"] == "ops@b2bee.ai"
        assert payload["role"] == "admin"

    def test_rejects_non_positive_days(self, capsys):
        assert create_admin_main(["--days", "0"]) == 2
        assert "--days must be positive" in capsys.readouterr().err
