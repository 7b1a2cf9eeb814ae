"""
Celery Tasks
Background delivery of owner onboarding e-mails.
"""

import asyncio
import logging
import time

from yummify.celery_worker import celery_app
from yummify.services.notifications import get_notification_service

logger = logging.getLogger(__name__)


class NotificationDeliveryError(Exception):
    """Raised so Celery retries a rejected e-mail."""
    pass


@celery_app.task(
    bind=True,
    max_retries=3,
    default_retry_delay=5,
    autoretry_for=(NotificationDeliveryError,),
    retry_backoff=True
)
def send_owner_credentials(self, owner_data: dict) -> dict:
    """
    E-mail a newly provisioned restaurant owner their temporary password.

    Args:
        owner_data: email, first_name, username, temporary_password, login_url

    Returns:
        dict: Delivery result
    """
    task_id = self.request.id
    start_time = time.time()

    service = get_notification_service()
    result = asyncio.run(service.send_owner_credentials(
        to_email=owner_data["email"],
        first_name=owner_data["first_name"],
        username=owner_data["username"],
        temporary_password=owner_data["temporary_password"],
        login_url=owner_data["login_url"],
    ))

    elapsed = round(time.time() - start_time, 3)
    if not result.success:
        logger.warning(
            f"Task {task_id}: credentials e-mail to {owner_data['email']} "
            f"failed after {elapsed}s - {result.error_message}"
        )
        raise NotificationDeliveryError(result.error_message)

    logger.info(f"Task {task_id}: credentials e-mail sent to {owner_data['email']} in {elapsed}s")
    return {
        'success': True,
        'message_id': result.message_id,
        'provider': result.provider,
        'task_id': task_id,
        'processing_time_seconds': elapsed,
    }

