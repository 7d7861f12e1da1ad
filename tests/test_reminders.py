"""Tests for the reminder job and the single-reminder admin route."""

from datetime import datetime, timedelta

import pytest
from sqlmodel import select

from b2bee.config import settings
from b2bee.core.exceptions import DependencyError, NotFoundError
from b2bee.models.lead import Lead, LeadStatus
from b2bee.repositories.lead_repo import LeadRepository
from b2bee.services.reminder_service import REMINDER_BATCH_LIMIT, ReminderService


def _service(session, email_service, delay_minutes=1):
    return ReminderService(session, email_service, delay_minutes=delay_minutes)


class TestReminderSelection:
    """Tests for which leads a run picks up."""

    @pytest.mark.asyncio
    async def test_only_new_unreminded_and_old_enough(self, session, email_service, make_lead):
        due = await make_lead(email="due@x.com", age_minutes=10)
        await make_lead(email="fresh@x.com", age_minutes=0)
        await make_lead(email="booked@x.com", age_minutes=10, status=LeadStatus.BOOKED)
        await make_lead(
            email="reminded@x.com",
            age_minutes=10,
            reminder_sent_at=datetime.utcnow() - timedelta(minutes=5),
        )

        results = await _service(session, email_service, delay_minutes=5).run()

        assert results.total == 1
        assert results.sent == 1
        assert [email["to"] for email in email_service.sent] == ["due@x.com"]
        await session.refresh(due)
        assert due.reminder_sent_at is not None

    @pytest.mark.asyncio
    async def test_second_run_sends_nothing(self, session, email_service, make_lead):
        await make_lead(email="a@x.com", age_minutes=10)
        await make_lead(email="b@x.com", age_minutes=10)

        first = await _service(session, email_service).run()
        second = await _service(session, email_service).run()

        assert first.sent == 2
        assert second.total == 0
        assert second.sent == 0
        assert len(email_service.sent) == 2

    @pytest.mark.asyncio
    async def test_batch_ceiling(self, session, email_service, make_lead):
        for i in range(REMINDER_BATCH_LIMIT + 5):
            await make_lead(email=f"lead{i}@x.com", age_minutes=100 - i)

        results = await _service(session, email_service).run()

        assert results.total == REMINDER_BATCH_LIMIT
        assert results.sent == REMINDER_BATCH_LIMIT
        # Oldest first
        assert email_service.sent[0]["to"] == "lead0@x.com"

        remaining = await _service(session, email_service).run()
        assert remaining.total == 5

    @pytest.mark.asyncio
    async def test_reminder_content(self, session, email_service, make_bee, make_lead):
        bee = await make_bee()
        await make_lead(age_minutes=10, company="Lee Plumbing", bee_id=bee.id)

        await _service(session, email_service).run()

        email = email_service.sent[0]
        assert email["subject"] == "Don't miss out! Book your Sales Bee demo"
        assert "name=Jo+Lee" in email["body"]
        assert "email=jo%40x.com" in email["body"]
        assert "notes=Company%3A+Lee+Plumbing" in email["body"]
        assert "Book Your Free Demo" in email["html"]

    @pytest.mark.asyncio
    async def test_default_bee_name_in_subject(self, session, email_service, make_lead):
        await make_lead(age_minutes=10)

        await _service(session, email_service).run()

        assert email_service.sent[0]["subject"] == "Don't miss out! Book your B2Bee demo"


class TestReminderFailures:
    """Tests that one bad send does not stop the batch."""

    @pytest.mark.asyncio
    async def test_undelivered_counts_as_failed_and_stays_eligible(
        self, session, email_service, make_lead
    ):
        bad = await make_lead(email="bad@x.com", age_minutes=20)
        await make_lead(email="good@x.com", age_minutes=10)
        email_service.fail_for.add("bad@x.com")

        results = await _service(session, email_service).run()

        assert (results.total, results.sent, results.failed) == (2, 1, 1)
        await session.refresh(bad)
        assert bad.reminder_sent_at is None

        email_service.fail_for.clear()
        retry = await _service(session, email_service).run()
        assert retry.sent == 1

    @pytest.mark.asyncio
    async def test_exception_counts_as_failed(self, session, email_service, make_lead):
        await make_lead(age_minutes=10)
        email_service.error = RuntimeError("smtp exploded")

        results = await _service(session, email_service).run()

        assert results.failed == 1
        assert results.sent == 0

    @pytest.mark.asyncio
    async def test_failed_mark_counts_once_and_batch_continues(
        self, session, email_service, make_lead, monkeypatch
    ):
        """Test that a store error while marking is one failure, not a send and a failure."""
        bad = await make_lead(email="bad@x.com", age_minutes=20)
        good = await make_lead(email="good@x.com", age_minutes=10)
        bad_id = bad.id
        original_mark = LeadRepository.mark_reminder_sent

        async def mark_or_fail(repo, lead_id, sent_at):
            if lead_id == bad_id:
                raise RuntimeError("connection reset")
            return await original_mark(repo, lead_id, sent_at)

        monkeypatch.setattr(LeadRepository, "mark_reminder_sent", mark_or_fail)

        results = await _service(session, email_service).run()

        assert (results.total, results.sent, results.failed) == (2, 1, 1)
        await session.refresh(bad)
        await session.refresh(good)
        assert bad.reminder_sent_at is None
        assert good.reminder_sent_at is not None

    @pytest.mark.asyncio
    async def test_no_email_service_fails_every_lead(self, session, make_lead):
        await make_lead(age_minutes=10)

        results = await _service(session, None).run()

        assert results.failed == 1
        lead = (await session.exec(select(Lead))).one()
        assert lead.reminder_sent_at is None


class TestCronRoute:
    """Tests for GET /api/cron/send-reminders."""

    @pytest.mark.asyncio
    async def test_wrong_secret_is_401_and_sends_nothing(
        self, client, email_service, make_lead, monkeypatch
    ):
        monkeypatch.setattr(settings, "CRON_SECRET", "s3cret")
        await make_lead(age_minutes=10)

        response = await client.get(
            "/api/cron/send-reminders", headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401
        assert email_service.sent == []

    @pytest.mark.asyncio
    async def test_missing_secret_is_401(self, client, monkeypatch):
        monkeypatch.setattr(settings, "CRON_SECRET", "s3cret")

        response = await client.get("/api/cron/send-reminders")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_correct_secret_runs_job(self, client, email_service, make_lead, monkeypatch):
        monkeypatch.setattr(settings, "CRON_SECRET", "s3cret")
        monkeypatch.setattr(settings, "REMINDER_DELAY_MINUTES", 1)
        await make_lead(age_minutes=10)

        response = await client.get(
            "/api/cron/send-reminders", headers={"Authorization": "Bearer s3cret"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Reminder job completed",
            "results": {"total": 1, "sent": 1, "failed": 0},
        }

    @pytest.mark.asyncio
    async def test_unset_secret_allows_call(self, client, monkeypatch):
        monkeypatch.setattr(settings, "CRON_SECRET", None)

        response = await client.get("/api/cron/send-reminders")

        assert response.status_code == 200
        assert response.json()["results"]["total"] == 0


class TestSingleReminder:
    """Tests for send_single_reminder and POST /api/test-reminder."""

    @pytest.mark.asyncio
    async def test_sends_and_marks(self, session, email_service, make_lead):
        lead = await make_lead()

        response = await _service(session, email_service).send_single_reminder("jo@x.com")

        assert response.success is True
        assert response.lead_id == lead.id
        await session.refresh(lead)
        assert lead.reminder_sent_at is not None

    @pytest.mark.asyncio
    async def test_already_reminded(self, session, email_service, make_lead):
        await make_lead(reminder_sent_at=datetime.utcnow())

        response = await _service(session, email_service).send_single_reminder("jo@x.com")

        assert response.success is False
        assert email_service.sent == []

    @pytest.mark.asyncio
    async def test_not_new(self, session, email_service, make_lead):
        await make_lead(status=LeadStatus.BOOKED)

        response = await _service(session, email_service).send_single_reminder("jo@x.com")

        assert response.success is False
        assert "BOOKED" in response.message

    @pytest.mark.asyncio
    async def test_unknown_email(self, session, email_service):
        with pytest.raises(NotFoundError):
            await _service(session, email_service).send_single_reminder("nobody@x.com")

    @pytest.mark.asyncio
    async def test_delivery_failure_is_dependency_error(self, session, email_service, make_lead):
        await make_lead()
        email_service.fail = True

        with pytest.raises(DependencyError):
            await _service(session, email_service).send_single_reminder("jo@x.com")

    @pytest.mark.asyncio
    async def test_route_requires_admin(self, client):
        response = await client.post("/api/test-reminder", json={"email": "jo@x.com"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_route_sends(self, client, email_service, make_lead, admin_headers):
        await make_lead()

        response = await client.post(
            "/api/test-reminder", json={"email": "jo@x.com"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert len(email_service.sent) == 1
