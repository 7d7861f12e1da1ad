"""Tests for the email providers and Cal.com link building."""

from unittest.mock import MagicMock

import pytest
import requests

from b2bee.config import settings
from b2bee.services import email_service as email_module
from b2bee.services.email_service import (
    MockEmailService,
    ResendEmailService,
    SMTPEmailService,
    build_cal_url,
    build_email_service,
)


class TestBuildCalUrl:

    def test_adds_prefill_params(self):
        url = build_cal_url("https://cal.com/b2bee/demo", "Jo Lee", "jo@x.com", "Company: Lee Plumbing")
        assert url == (
            "https://cal.com/b2bee/demo?name=Jo+Lee&email=jo%40x.com"
            "&notes=Company%3A+Lee+Plumbing"
        )

    def test_keeps_existing_query_and_skips_empty_notes(self):
        url = build_cal_url("https://cal.com/b2bee/demo?month=2026-01", "Jo Lee", "jo@x.com")
        assert url == "https://cal.com/b2bee/demo?month=2026-01&name=Jo+Lee&email=jo%40x.com"


class TestMockEmailService:

    @pytest.mark.asyncio
    async def test_records_notification(self):
        service = MockEmailService()

        sent = await service.send_new_lead_notification(
            "ops@b2bee.ai", "Jo", "Lee", "jo@x.com", company="Lee Plumbing", bee_name="Sales Bee"
        )

        assert sent is True
        last = service.get_last_email()
        assert last["to"] == "ops@b2bee.ai"
        assert last["subject"] == "New Lead: Jo Lee"
        assert "Lee Plumbing" in last["body"]


class TestResendEmailService:

    @pytest.mark.asyncio
    async def test_success(self, monkeypatch):
        post = MagicMock(return_value=MagicMock(status_code=200, text="{}"))
        monkeypatch.setattr(email_module.requests, "post", post)
        service = ResendEmailService("re_key", "noreply@b2bee.ai")

        assert await service.send_email("jo@x.com", "Hi", "Body", html="<p>Body</p>") is True

        payload = post.call_args.kwargs["json"]
        assert payload == {
            "from": "noreply@b2bee.ai",
            "to": ["jo@x.com"],
            "subject": "Hi",
            "text": "Body",
            "html": "<p>Body</p>",
        }
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer re_key"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 429, 500])
    async def test_rejected(self, monkeypatch, status_code):
        post = MagicMock(return_value=MagicMock(status_code=status_code, text="nope"))
        monkeypatch.setattr(email_module.requests, "post", post)

        service = ResendEmailService("re_key", "noreply@b2bee.ai")

        assert await service.send_email("jo@x.com", "Hi", "Body") is False

    @pytest.mark.asyncio
    async def test_network_error(self, monkeypatch):
        post = MagicMock(side_effect=requests.ConnectionError("down"))
        monkeypatch.setattr(email_module.requests, "post", post)

        service = ResendEmailService("re_key", "noreply@b2bee.ai")

        assert await service.send_email("jo@x.com", "Hi", "Body") is False


class TestProviderSelection:

    def test_resend_preferred(self, monkeypatch):
        monkeypatch.setattr(settings, "RESEND_API_KEY", "re_key")
        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
        assert isinstance(build_email_service(), ResendEmailService)

    def test_smtp_fallback(self, monkeypatch):
        monkeypatch.setattr(settings, "RESEND_API_KEY", "")
        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
        assert isinstance(build_email_service(), SMTPEmailService)

    def test_mock_in_dev_mode(self, monkeypatch):
        monkeypatch.setattr(settings, "RESEND_API_KEY", "")
        monkeypatch.setattr(settings, "SMTP_HOST", "")
        monkeypatch.setattr(settings, "DEV_MODE", True)
        assert isinstance(build_email_service(), MockEmailService)

    def test_disabled_in_production(self, monkeypatch):
        monkeypatch.setattr(settings, "RESEND_API_KEY", "")
        monkeypatch.setattr(settings, "SMTP_HOST", "")
        monkeypatch.setattr(settings, "DEV_MODE", False)
        assert build_email_service() is None
