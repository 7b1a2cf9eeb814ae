"""
SendGrid Notification Service

Production e-mail delivery. Used when ENV_MODE=production or staging.
"""

import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from yummify.core.config import get_settings
from yummify.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)

logger = logging.getLogger(__name__)


class SendGridNotificationService(BaseNotificationService):
    """Production notification service using SendGrid."""

    def __init__(self, client: Optional[SendGridAPIClient] = None):
        settings = get_settings()

        if client is not None:
            self.sendgrid_client = client
        elif settings.sendgrid_api_key:
            self.sendgrid_client = SendGridAPIClient(settings.sendgrid_api_key)
        else:
            self.sendgrid_client = None
            logger.warning("SendGrid credentials not configured")
        self.sendgrid_from_email = settings.sendgrid_from_email

        logger.info("SendGridNotificationService initialized")

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Send email via SendGrid."""
        if not self.sendgrid_client:
            return NotificationResult(
                success=False,
                error_message="SendGrid not configured",
                provider="sendgrid"
            )

        message = Mail(
            from_email=self.sendgrid_from_email,
            to_emails=to_email,
            subject=subject,
            html_content=body_html,
            plain_text_content=body_text
        )

        try:
            response = self.sendgrid_client.send(message)
        except Exception as e:
            logger.error(f"SendGrid error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="sendgrid"
            )

        logger.info(f"Email sent to {to_email}: {response.status_code}")

        return NotificationResult(
            success=response.status_code in [200, 201, 202],
            message_id=response.headers.get('X-Message-Id'),
            provider="sendgrid"
        )
