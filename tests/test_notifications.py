"""Tests for owner e-mail delivery."""

from unittest.mock import MagicMock

import pytest

from yummify.services.notifications import (
    MockNotificationService,
    SendGridNotificationService,
    get_notification_service,
    reset_notification_service,
)
from yummify.tasks import NotificationDeliveryError, send_owner_credentials


OWNER_DATA = {
    "email": "owner@example.com",
    "first_name": "Jane",
    "username": "restaurantOwner",
    "temporary_password": "tmp-Pa55word",
    "login_url": "https://auth.example.com/realms/yummify/account",
}


class TestMockNotificationService:

    @pytest.mark.asyncio
    async def test_send_owner_credentials(self):
        """Test that the credentials e-mail carries username and password."""
        service = MockNotificationService()

        result = await service.send_owner_credentials(
            to_email="owner@example.com",
            first_name="Jane",
            username="restaurantOwner",
            temporary_password="tmp-Pa55word",
            login_url="https://auth.example.com/realms/yummify/account",
        )

        assert result.success is True
        assert result.provider == "mock"
        assert result.message_id.startswith("email_mock_")

        [email] = service.outbox
        assert email["to"] == "owner@example.com"
        assert email["subject"] == "Your Yummify restaurant account"
        assert "Username: restaurantOwner" in email["body_text"]
        assert "Temporary password: tmp-Pa55word" in email["body_text"]


class TestSendGridNotificationService:

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.send.return_value = MagicMock(status_code=202, headers={"X-Message-Id": "sg-123"})
        return client

    @pytest.mark.asyncio
    async def test_send_email(self, client):
        service = SendGridNotificationService(client=client)

        result = await service.send_email("owner@example.com", "Hello", "<p>Hi</p>", "Hi")

        assert result.success is True
        assert result.message_id == "sg-123"
        assert result.provider == "sendgrid"
        client.send.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_email_rejected(self, client):
        client.send.return_value = MagicMock(status_code=400, headers={})
        service = SendGridNotificationService(client=client)

        result = await service.send_email("owner@example.com", "Hello", "<p>Hi</p>")

        assert result.success is False

    @pytest.mark.asyncio
    async def test_send_email_error(self, client):
        """Test that client errors are reported in the result."""
        client.send.side_effect = RuntimeError("boom")
        service = SendGridNotificationService(client=client)

        result = await service.send_email("owner@example.com", "Hello", "<p>Hi</p>")

        assert result.success is False
        assert result.error_message == "boom"

    @pytest.mark.asyncio
    async def test_not_configured(self, monkeypatch, fresh_settings):
        monkeypatch.delenv("SENDGRID_API_KEY", raising=False)
        fresh_settings.cache_clear()
        service = SendGridNotificationService()

        result = await service.send_email("owner@example.com", "Hello", "<p>Hi</p>")

        assert result.success is False
        assert result.error_message == "SendGrid not configured"


class TestSendOwnerCredentialsTask:

    @pytest.fixture(autouse=True)
    def development(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("ENV_MODE", "development")
        fresh_settings.cache_clear()
        reset_notification_service()
        yield
        reset_notification_service()

    def test_sends_email(self):
        """Test that the task e-mails the owner through the configured service."""
        result = send_owner_credentials(OWNER_DATA)

        assert result["success"] is True
        assert result["provider"] == "mock"

        [email] = get_notification_service().outbox
        assert email["to"] == "owner@example.com"
        assert email["message_id"] == result["message_id"]

    def test_failed_delivery_raises(self, monkeypatch):
        service = get_notification_service()

        async def reject(*args, **kwargs):
            return MagicMock(success=False, error_message="mailbox unavailable")

        monkeypatch.setattr(service, "send_email", reject)

        with pytest.raises(NotificationDeliveryError, match="mailbox unavailable"):
            send_owner_credentials(OWNER_DATA)
