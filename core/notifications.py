# core/notifications.py
import requests
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Optional
from core.config import settings
from core.errors import ValidationError
from core.logging_config import logger
from models.enums import NotificationType


SUBJECTS = {
    NotificationType.move_out_intention: "Move-out intention submitted",
    NotificationType.inspection_finalized: "Move-out inspection finalized",
    NotificationType.move_in_signed: "Move-in acknowledgement signed",
}


# -----------------------------------------------------
# 📨 Send webhook (Discord, Slack, etc.)
# -----------------------------------------------------
def send_webhook_message(message: str):
    webhook_url = settings.NOTIFY_WEBHOOK_URL
    if not webhook_url:
        logger.debug("Webhook URL not configured — skipping.")
        return

    try:
        response = requests.post(webhook_url, json={"content": message}, timeout=10)
        logger.info(f"Webhook sent (status {response.status_code})")
    except Exception as e:
        logger.warning(f"Webhook failed: {e}")


# -----------------------------------------------------
# 📧 Send email (SMTP)
# -----------------------------------------------------
def send_email(
    subject: str,
    body: str,
    recipients: Optional[List[str]] = None,
    html_body: Optional[str] = None,
):
    smtp_host = settings.SMTP_HOST
    smtp_port = settings.SMTP_PORT
    smtp_user = settings.SMTP_USER
    smtp_pass = settings.SMTP_PASS

    recipient_list = recipients or admin_recipients()

    if not recipient_list:
        logger.warning("No recipients specified — skipping email.")
        return

    if not all([smtp_host, smtp_port, smtp_user, smtp_pass]):
        logger.warning("Email credentials missing — skipping email.")
        return

    try:
        msg = MIMEMultipart("alternative")
        msg["From"] = settings.SMTP_FROM or smtp_user
        msg["To"] = ", ".join(recipient_list)
        msg["Subject"] = subject

        msg.attach(MIMEText(body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        with smtplib.SMTP_SSL(smtp_host, smtp_port) as server:
            server.login(smtp_user, smtp_pass)
            server.send_message(msg)

        logger.info(f"Email sent to {', '.join(recipient_list)}")

    except Exception as e:
        logger.error(f"Email failed: {e}")
        raise


def admin_recipients() -> List[str]:
    raw = settings.ADMIN_NOTIFY_EMAILS or ""
    return [addr.strip() for addr in raw.split(",") if addr.strip()]


def _format_body(kind: NotificationType, data: dict) -> str:
    lines = [SUBJECTS[kind]]
    for key in sorted(data):
        if key == "recipients":
            continue
        lines.append(f"  {key}: {data[key]}")
    return "\n".join(lines)


# -----------------------------------------------------
# Lifecycle notifications
# -----------------------------------------------------
def notify(notification_type: str, data: dict) -> dict:
    """
    Announce a lifecycle event to coordinators/admins.

    Unknown types raise ValidationError. Delivery problems are logged and
    swallowed so the triggering operation still succeeds.
    """
    try:
        kind = NotificationType(notification_type)
    except ValueError:
        raise ValidationError(f"Unknown notification type: {notification_type}")

    body = _format_body(kind, data)
    logger.info(f"Notification triggered: {kind.value}")

    send_webhook_message(body)

    try:
        send_email(SUBJECTS[kind], body, recipients=data.get("recipients"))
    except Exception as e:
        logger.warning(f"Notification email for {kind.value} not delivered: {e}")

    return {"success": True, "type": kind.value}
