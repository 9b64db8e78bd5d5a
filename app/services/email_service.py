"""
Email Service - notification emails for new form submissions.

Each accepted employment/education form triggers one high-priority email to
the configured recipient (TO_EMAIL), sent from the configured account
(EMAIL_USER / EMAIL_PASS). The plain-text part is the full submitted document
as JSON, the HTML part is a short summary of the interesting fields.

Sending is awaited inside the request; a failure is surfaced to the caller.
"""

import html
import json
import logging
from email.message import EmailMessage
from typing import Any, Dict, List, Tuple

import aiosmtplib
from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

EMPLOYMENT_SUBJECT = "📩 New Employment form Submission"
EDUCATION_SUBJECT = "📩 New Education form Submission"

# (label, key) pairs shown in the HTML summary
EMPLOYMENT_SUMMARY_FIELDS: List[Tuple[str, str]] = [
    ("Name", "name"),
    ("Email", "email"),
    ("Mobile", "mobile"),
    ("Desired Job", "desiredJob"),
    ("Destination", "destination"),
    ("Location", "location"),
    ("Skills", "skills"),
    ("Message", "message"),
]

EDUCATION_SUMMARY_FIELDS: List[Tuple[str, str]] = [
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Subject", "subject"),
    ("Message", "message"),
]


def _render_summary(title: str, form: Dict[str, Any], fields: List[Tuple[str, str]]) -> str:
    rows = []
    for label, key in fields:
        value = form.get(key)
        value = "" if value is None else html.escape(str(value))
        rows.append(f"<p><b>{label}:</b> {value}</p>")
    return f"<h3>{title}</h3>\n" + "\n".join(rows)


def _render_text(form: Dict[str, Any]) -> str:
    # default=str covers the ObjectId added by insert_one
    return json.dumps(form, indent=2, default=str, ensure_ascii=False)


def employment_form_email(form: Dict[str, Any]) -> Tuple[str, str, str]:
    """Returns (subject, text, html) for an employment submission."""
    return (
        EMPLOYMENT_SUBJECT,
        _render_text(form),
        _render_summary("New Employment Form Submission", form, EMPLOYMENT_SUMMARY_FIELDS),
    )


def education_form_email(form: Dict[str, Any]) -> Tuple[str, str, str]:
    """Returns (subject, text, html) for an education submission."""
    return (
        EDUCATION_SUBJECT,
        _render_text(form),
        _render_summary("New Education Form Submission", form, EDUCATION_SUMMARY_FIELDS),
    )


class EmailService:
    """
    Thin wrapper around aiosmtplib.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS
    when the server offers it.
    """

    def __init__(self, settings: Settings):
        self.sender = settings.email_user
        self.password = settings.email_pass
        self.recipient = settings.to_email
        self.hostname = settings.smtp_host
        self.port = settings.smtp_port

    def build_message(self, subject: str, text: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = self.recipient
        message["Subject"] = subject
        message["X-Priority"] = "1"  # 1 = High, 3 = Normal, 5 = Low
        message.set_content(text)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, subject: str, text: str, html_body: str) -> None:
        message = self.build_message(subject, text, html_body)
        await aiosmtplib.send(
            message,
            hostname=self.hostname,
            port=self.port,
            username=self.sender or None,
            password=self.password or None,
            use_tls=self.port == 465,
        )
        logger.info("Sent '%s' to %s", subject, self.recipient)


def get_email_service(settings: Settings = Depends(get_settings)) -> EmailService:
    return EmailService(settings)
