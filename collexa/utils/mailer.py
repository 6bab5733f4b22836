"""
Outbound email over SMTP.

When no SMTP credentials are configured the message is logged instead of
sent, so password reset can be exercised locally.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from collexa.core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    pass


def send_email(settings: Settings, to: str, subject: str, text: str, html: Optional[str] = None) -> None:
    """
    Send one email.

    Raises:
        EmailDeliveryError if the SMTP exchange fails
    """
    if not settings.smtp_configured:
        logger.warning("SMTP not configured; email to %s not sent. Subject: %s\n%s", to, subject, text)
        return

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f"{settings.from_name} <{settings.smtp_email}>"
    msg["To"] = to
    msg.set_content(text)
    if html:
        msg.add_alternative(html, subtype="html")

    # Port 465 is implicit TLS; anything else upgrades with STARTTLS
    use_ssl = settings.smtp_port == 465
    smtp_class = smtplib.SMTP_SSL if use_ssl else smtplib.SMTP
    try:
        with smtp_class(settings.smtp_host, settings.smtp_port, timeout=10) as server:
            if not use_ssl:
                server.starttls()
            server.login(settings.smtp_email, settings.smtp_password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailDeliveryError(str(e)) from e

    logger.info("Sent email to %s with subject: %s", to, subject)
