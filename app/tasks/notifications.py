import logging
import smtplib
from email.message import EmailMessage
from celery import shared_task
from flask import current_app

logger = logging.getLogger(__name__)


class NotificationFailed(Exception):
    """Outbound mail could not be delivered."""


def build_message(to: str, subject: str, body: str, sender: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


def deliver(msg: EmailMessage, cfg) -> None:
    with smtplib.SMTP(cfg["MAIL_SERVER"], cfg["MAIL_PORT"], timeout=10) as smtp:
        if cfg.get("MAIL_USE_TLS"):
            smtp.starttls()
        if cfg.get("MAIL_USERNAME"):
            smtp.login(cfg["MAIL_USERNAME"], cfg["MAIL_PASSWORD"])
        smtp.send_message(msg)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_email_task(self, to: str, subject: str, body: str, sender: str = None) -> bool:
    """Send one plain-text email, or only log it when sending is suppressed."""
    cfg = current_app.config
    msg = build_message(to, subject, body, sender or cfg["MAIL_DEFAULT_SENDER"])
    if cfg.get("MAIL_SUPPRESS_SEND"):
        logger.info({"event": "mail_suppressed", "to": to, "subject": subject})
        return False
    try:
        deliver(msg, cfg)
    except (smtplib.SMTPException, OSError) as exc:
        raise self.retry(exc=NotificationFailed(f"mail to {to} failed: {exc}"))
    logger.info({"event": "mail_sent", "to": to, "subject": subject})
    return True
