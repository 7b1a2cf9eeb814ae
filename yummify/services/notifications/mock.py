"""
Mock Notification Service

Simulates e-mail sending for development.
No actual messages are sent - just logged.
"""

import uuid
import logging
from typing import Optional

from yummify.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)

logger = logging.getLogger(__name__)


class MockNotificationService(BaseNotificationService):
    """Mock notification service for development."""

    def __init__(self):
        self.outbox: list[dict] = []
        logger.info("MockNotificationService initialized")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Record the e-mail instead of sending it."""
        message_id = f"email_mock_{uuid.uuid4().hex[:12]}"
        self.outbox.append({
            "message_id": message_id,
            "to": to_email,
            "subject": subject,
            "body_text": body_text,
        })
        logger.info(f"Mock email sent to {to_email}: {subject} (ID: {message_id})")

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock"
        )
