"""
Email service - handles sending emails.
Supports: Resend (production), SMTP (fallback) and Mock (development).
"""
import asyncio
import html as html_lib
import logging
import smtplib
from abc import ABC, abstractmethod
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

import requests

from b2bee.config import settings

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_BEE_NAME = "B2Bee"


def build_cal_url(base_link: str, name: str, email: str, notes: Optional[str] = None) -> str:
    """Cal.com link with the booking form pre-filled."""
    parts = urlsplit(base_link)
    query = dict(parse_qsl(parts.query))
    query["name"] = name
    query["email"] = email
    if notes:
        query["notes"] = notes
    return urlunsplit(parts._replace(query=urlencode(query)))


class EmailService(ABC):
    """Base email service interface."""

    @abstractmethod
    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        html: Optional[str] = None
    ) -> bool:
        """Send an email. Returns False on delivery failure."""
        pass

    async def send_new_lead_notification(
        self,
        to: str,
        first_name: str,
        last_name: str,
        email: str,
        company: Optional[str] = None,
        bee_name: Optional[str] = None,
        notes: Optional[str] = None
    ) -> bool:
        """Tell the team a lead came in."""
        esc = html_lib.escape
        subject = f"New Lead: {first_name} {last_name}"
        created = datetime.utcnow().strftime("%Y-%m-%d %H:%M UTC")

        lines = [
            f"Name: {first_name} {last_name}",
            f"Email: {email}",
        ]
        if company:
            lines.append(f"Company: {company}")
        if bee_name:
            lines.append(f"Interested in: {bee_name}")
        if notes:
            lines.append(f"Notes: {notes}")
        lines.append(f"Created: {created}")
        body = "New Lead Submission\n\n" + "\n".join(lines)

        html = "<h2>New Lead Submission</h2>" + "".join(
            f"<p><strong>{esc(label)}:</strong> {esc(value)}</p>"
            for label, value in (line.split(": ", 1) for line in lines)
        )

        return await self.send_email(to, subject, body, html)

    async def send_reminder_email(
        self,
        to: str,
        first_name: str,
        last_name: str,
        company: Optional[str] = None,
        bee_name: Optional[str] = None
    ) -> bool:
        """Nudge a lead who has not booked a demo yet."""
        bee_name = bee_name or DEFAULT_BEE_NAME
        cal_url = build_cal_url(
            settings.CALCOM_LINK,
            name=f"{first_name} {last_name}",
            email=to,
            notes=f"Company: {company}" if company else None
        )
        base_url = settings.APP_URL.rstrip("/")

        subject = f"Don't miss out! Book your {bee_name} demo"
        body = f"""
Hi {first_name},

Thanks for your interest in {bee_name}! We noticed you haven't booked your demo yet.

Why book a demo?
- See {bee_name} in action with real examples
- Get personalized recommendations for your business
- Ask questions and explore custom solutions
- No commitment required - just a friendly conversation

Choose your preferred time here:

{cal_url}

Best regards,
The B2Bee Team
{base_url}
        """

        esc = html_lib.escape
        html = f"""
        <html>
        <body style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: 0 auto;">
            <div style="text-align: center; padding: 30px 0; border-bottom: 3px solid #f97316;">
                <img src="{base_url}/logo.png" alt="B2Bee" style="max-width: 200px;" />
            </div>
            <h2>Hi {esc(first_name)},</h2>
            <p>Thanks for your interest in <strong>{esc(bee_name)}</strong>!
               We noticed you haven't booked your demo yet.</p>
            <div style="background: #fef3c7; padding: 15px; border-radius: 8px;">
                <strong>Why book a demo?</strong>
                <ul>
                    <li>See {esc(bee_name)} in action with real examples</li>
                    <li>Get personalized recommendations for your business</li>
                    <li>Ask questions and explore custom solutions</li>
                    <li>No commitment required - just a friendly conversation</li>
                </ul>
            </div>
            <p style="text-align: center;">
                <a href="{esc(cal_url)}"
                   style="background-color: #f97316; color: white; padding: 14px 30px;
                          text-decoration: none; display: inline-block; border-radius: 8px;">
                    Book Your Free Demo
                </a>
            </p>
            <p>Best regards,<br><strong>The B2Bee Team</strong></p>
            <p style="text-align: center; color: #6b7280; font-size: 14px;">
                B2Bee - AI Automation for Small Business<br>
                <a href="{base_url}" style="color: #f97316;">{base_url}</a>
            </p>
        </body>
        </html>
        """

        return await self.send_email(to, subject, body, html)


class MockEmailService(EmailService):
    """
    Mock email service for development.
    Logs emails instead of sending.
    """

    def __init__(self):
        # Kept for debugging
        self.sent_emails: list = []

    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        html: Optional[str] = None
    ) -> bool:
        """Mock send - logs and stores the email."""
        self.sent_emails.append({"to": to, "subject": subject, "body": body})
        logger.info("[MOCK EMAIL] To: %s, Subject: %s\n%s", to, subject, body)
        return True

    def get_last_email(self) -> Optional[dict]:
        """Get the last sent email."""
        return self.sent_emails[-1] if self.sent_emails else None


class SMTPEmailService(EmailService):
    """
    SMTP email service.
    Configure with environment variables:
    - SMTP_HOST
    - SMTP_PORT
    - SMTP_USER
    - SMTP_PASSWORD
    - RESEND_FROM_EMAIL (sender address)
    """

    def __init__(self):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.RESEND_FROM_EMAIL

    def _send(self, to: str, subject: str, body: str, html: Optional[str]) -> None:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = self.from_email
        msg['To'] = to

        msg.attach(MIMEText(body, 'plain'))
        if html:
            msg.attach(MIMEText(html, 'html'))

        with smtplib.SMTP(self.host, self.port, timeout=DEFAULT_TIMEOUT_SECONDS) as server:
            server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.sendmail(self.from_email, to, msg.as_string())

    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        html: Optional[str] = None
    ) -> bool:
        """Send email via SMTP."""
        try:
            await asyncio.to_thread(self._send, to, subject, body, html)
            logger.info("Email sent to %s: %s", to, subject)
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return False


class ResendEmailService(EmailService):
    """
    Resend email API.
    API Docs: https://resend.com/docs/api-reference/emails/send-email
    """

    def __init__(self, api_key: str, from_email: str):
        self.api_key = api_key
        self.from_email = from_email
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json"
        }

    def _post(self, payload: dict) -> requests.Response:
        return requests.post(
            RESEND_API_URL,
            headers=self.headers,
            json=payload,
            timeout=DEFAULT_TIMEOUT_SECONDS
        )

    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        html: Optional[str] = None
    ) -> bool:
        """Send email via the Resend HTTP API."""
        payload = {
            "from": self.from_email,
            "to": [to],
            "subject": subject,
            "text": body
        }
        if html:
            payload["html"] = html

        try:
            response = await asyncio.to_thread(self._post, payload)
        except requests.RequestException as e:
            logger.error("Resend request failed for %s: %s", to, e)
            return False

        if response.status_code in (200, 201):
            logger.info("Email sent to %s: %s", to, subject)
            return True

        if response.status_code == 429:
            logger.warning("Resend rate limit exceeded sending to %s", to)
        else:
            logger.error(
                "Resend rejected email to %s: %s %s",
                to, response.status_code, response.text[:200]
            )
        return False


# =============================================================================
# EMAIL SERVICE SINGLETON
# =============================================================================

_email_service: Optional[EmailService] = None
_resolved = False


def build_email_service() -> Optional[EmailService]:
    """Pick a provider from settings; None when email is not configured."""
    if settings.RESEND_API_KEY:
        logger.info("Using Resend Email Service")
        return ResendEmailService(settings.RESEND_API_KEY, settings.RESEND_FROM_EMAIL)
    if settings.SMTP_HOST:
        logger.info("Using SMTP Email Service")
        return SMTPEmailService()
    if settings.DEV_MODE:
        logger.info("Using Mock Email Service (emails are logged)")
        return MockEmailService()
    logger.warning("No email provider configured, emails are disabled")
    return None


def get_email_service() -> Optional[EmailService]:
    """Get the email service instance (FastAPI dependency)."""
    global _email_service, _resolved

    if not _resolved:
        _email_service = build_email_service()
        _resolved = True

    return _email_service


def set_email_service(service: Optional[EmailService]) -> None:
    """Set a custom email service."""
    global _email_service, _resolved
    _email_service = service
    _resolved = True
