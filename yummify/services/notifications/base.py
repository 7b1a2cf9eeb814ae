"""
Notification Service Abstract Base Class

Defines the interface for e-mailing restaurant owners.
Supports both Mock (development) and SendGrid (production) implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


class BaseNotificationService(ABC):
    """Abstract base class for notification services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Send an email."""
        pass

    async def send_owner_credentials(
        self,
        to_email: str,
        first_name: str,
        username: str,
        temporary_password: str,
        login_url: str,
    ) -> NotificationResult:
        """E-mail a newly provisioned owner their one-time password."""
        subject = "Your Yummify restaurant account"
        body_text = (
            f"Hi {first_name},\n\n"
            f"Your restaurant has been registered.\n"
            f"Username: {username}\n"
            f"Temporary password: {temporary_password}\n\n"
            f"Sign in at {login_url} - you will be asked to choose a new password."
        )
        body_html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h1>Welcome to Yummify!</h1>
            <p>Hi {first_name},</p>
            <p>Your restaurant has been registered.</p>
            <p>Username: <strong>{username}</strong><br>
               Temporary password: <strong>{temporary_password}</strong></p>
            <p><a href="{login_url}">Sign in</a> - you will be asked to choose a new password.</p>
        </div>
        """
        return await self.send_email(to_email, subject, body_html, body_text)
