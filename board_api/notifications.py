"""Outgoing email notifications.

Notifiers raise on delivery failure. ``deliver_password_reset`` is the
background task the reset route schedules; it logs failures instead of
raising, since the response has already been sent by then.
"""

import logging
from datetime import datetime
from html import escape
from typing import Optional, Protocol

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from board_api.config import Settings

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Your password has been reset"

RESET_HTML = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #1976d2;">Password reset complete</h2>
  <p>Hello, <strong>{name}</strong>!</p>
  <p>The password for your board account has been reset.
     You can now sign in with your new password.</p>
  <div style="background-color: #f5f5f5; padding: 15px; margin: 20px 0; border-radius: 5px;">
    <p><strong>Reset at:</strong> {reset_at}</p>
    <p><strong>Email:</strong> {email}</p>
  </div>
  <p>If you did not request this change, contact an administrator immediately.</p>
  <hr style="margin: 30px 0;">
  <p style="color: #666; font-size: 12px;">This message was sent automatically. Please do not reply.</p>
</div>
"""


class Notifier(Protocol):
    async def send_password_reset_notification(self, email: str, name: str) -> None: ...


def build_password_reset_message(
    email: str, name: str, reset_at: Optional[datetime] = None,
) -> MessageSchema:
    stamp = (reset_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return MessageSchema(
        subject=RESET_SUBJECT,
        recipients=[email],
        body=RESET_HTML.format(name=escape(name), email=escape(email), reset_at=stamp),
        subtype=MessageType.html,
    )


def build_mail_config(settings: Settings) -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.smtp_username or "",
        MAIL_PASSWORD=settings.smtp_password or "",
        MAIL_FROM=settings.mail_from,
        MAIL_FROM_NAME=settings.mail_from_name,
        MAIL_PORT=settings.smtp_port,
        MAIL_SERVER=settings.smtp_host,
        MAIL_STARTTLS=settings.smtp_use_tls,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(settings.smtp_username),
        VALIDATE_CERTS=True,
    )


class FastMailNotifier:
    """Sends notification mail through the configured SMTP relay."""

    def __init__(self, config: ConnectionConfig):
        self.mail = FastMail(config)

    async def send_password_reset_notification(self, email: str, name: str) -> None:
        await self.mail.send_message(build_password_reset_message(email, name))
        logger.info("Password reset notification sent", extra={"email": email})


class LoggingNotifier:
    """Stand-in used when no SMTP relay is configured."""

    async def send_password_reset_notification(self, email: str, name: str) -> None:
        logger.info(
            "SMTP not configured; skipping password reset mail",
            extra={"email": email},
        )


def build_notifier(settings: Settings) -> Notifier:
    if not settings.smtp_host:
        return LoggingNotifier()
    return FastMailNotifier(build_mail_config(settings))


async def deliver_password_reset(notifier: Notifier, email: str, name: str) -> None:
    try:
        await notifier.send_password_reset_notification(email, name)
    except Exception:
        # reset stays committed when delivery fails
        logger.exception("Password reset notification failed", extra={"email": email})
