import asyncio

from app.core.config import Settings
from app.services import email_service
from app.services.email_service import (
    EmailService, employment_form_email, education_form_email
)


def make_settings(**overrides):
    values = dict(
        email_user="sender@example.com",
        email_pass="secret",
        to_email="team@example.com",
        smtp_host="smtp.example.com",
        smtp_port=587,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_build_message_is_high_priority_multipart():
    service = EmailService(make_settings())

    message = service.build_message("Hello", "plain body", "<p>html body</p>")

    assert message["From"] == "sender@example.com"
    assert message["To"] == "team@example.com"
    assert message["Subject"] == "Hello"
    assert message["X-Priority"] == "1"
    assert message.is_multipart()
    assert message.get_body(("plain",)).get_content().strip() == "plain body"
    assert "html body" in message.get_body(("html",)).get_content()


def test_employment_email_escapes_and_blanks_missing_fields():
    subject, text, html = employment_form_email(
        {"name": "<script>", "email": "a@x.com", "mobile": "123"}
    )

    assert subject == "📩 New Employment form Submission"
    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert "<b>Skills:</b> </p>" in html
    assert '"name": "<script>"' in text


def test_education_email_uses_phone_and_subject():
    _, _, html = education_form_email(
        {"name": "B", "email": "b@x.com", "phone": "456", "subject": "Nursing"}
    )
    assert "<b>Phone:</b> 456" in html
    assert "<b>Subject:</b> Nursing" in html
    assert "Mobile" not in html


def test_text_part_handles_non_json_values():
    from bson import ObjectId

    oid = ObjectId()
    _, text, _ = employment_form_email({"_id": oid, "name": "A"})
    assert str(oid) in text


def test_send_uses_starttls_port(monkeypatch):
    calls = []

    async def fake_send(message, **kwargs):
        calls.append((message, kwargs))

    monkeypatch.setattr(email_service.aiosmtplib, "send", fake_send)

    asyncio.run(EmailService(make_settings()).send("S", "t", "<p>h</p>"))

    message, kwargs = calls[0]
    assert message["Subject"] == "S"
    assert kwargs["hostname"] == "smtp.example.com"
    assert kwargs["port"] == 587
    assert kwargs["username"] == "sender@example.com"
    assert kwargs["password"] == "secret"
    assert kwargs["use_tls"] is False


def test_send_uses_implicit_tls_on_465(monkeypatch):
    calls = []

    async def fake_send(message, **kwargs):
        calls.append(kwargs)

    monkeypatch.setattr(email_service.aiosmtplib, "send", fake_send)

    asyncio.run(EmailService(make_settings(smtp_port=465)).send("S", "t", "h"))

    assert calls[0]["use_tls"] is True
