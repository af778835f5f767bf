# Fire-and-forget notifications for application events.
import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("uvicorn.error")

SMTP_SERVER = os.getenv("SMTP_SERVER")
SMTP_PORT = int(os.getenv("SMTP_PORT", 2525))
EMAIL_USER = os.getenv("EMAIL_USER")
EMAIL_PASS = os.getenv("EMAIL_PASS")


def send_email(recipient: str, subject: str, body: str) -> None:
    msg = MIMEMultipart()
    msg["From"] = EMAIL_USER
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.attach(MIMEText(body, "plain"))

    server = smtplib.SMTP(SMTP_SERVER, SMTP_PORT, timeout=10)
    try:
        server.starttls()
        if EMAIL_USER and EMAIL_PASS:
            server.login(EMAIL_USER, EMAIL_PASS)
        server.sendmail(EMAIL_USER, recipient, msg.as_string())
    finally:
        server.quit()


def send_notification(event: str, recipient: Optional[str], subject: str, body: str) -> None:
    """Record an application event and mail it when SMTP is configured.

    Never raises: a lost email must not undo a committed transition.
    """
    logger.info(f"Notification {event} -> {recipient or '<no recipient>'}: {subject}")
    if not SMTP_SERVER or not recipient:
        return
    try:
        send_email(recipient, subject, body)
    except (smtplib.SMTPException, OSError):
        logger.exception(f"Failed to deliver {event} notification to {recipient}")
