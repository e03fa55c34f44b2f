"""
Outgoing email over SMTP.

The blocking smtplib session runs in a worker thread so request handlers and
background tasks never stall the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from core import settings

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")


class MailerError(RuntimeError):
    pass


def _plain_text(html_body: str) -> str:
    text = _TAG_RE.sub(" ", html_body or "")
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


def build_message(*, sender: str, to: str, subject: str, html_body: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    msg.attach(MIMEText(_plain_text(html_body), "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


def _send_blocking(msg: MIMEMultipart) -> None:
    host = settings.smtp_host()
    port = settings.smtp_port()
    username = settings.smtp_username()
    password = settings.smtp_password()

    with smtplib.SMTP(host, port, timeout=30) as server:
        if username:
            server.starttls()
            server.login(username, password)
        server.send_message(msg)


async def send_mail(to: str, subject: str, html_body: str) -> None:
    """
    Send an HTML email (with a plain-text alternative) to `to`.
    """
    to = (to or "").strip()
    if not to:
        raise MailerError("Recipient address is empty.")
    if not settings.smtp_host():
        raise MailerError("SMTP_HOST is not configured.")
    sender = settings.mail_from()
    if not sender:
        raise MailerError("MAIL_FROM is not configured.")

    msg = build_message(sender=sender, to=to, subject=subject, html_body=html_body)
    try:
        await asyncio.to_thread(_send_blocking, msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise MailerError(f"Failed to send email to {to}: {exc}") from exc
    logger.info("mail_sent to=%s subject=%r", to, subject)
