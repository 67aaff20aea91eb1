"""Celery tasks for the props app."""

import logging

from asgiref.sync import async_to_sync
from celery import shared_task
from channels.layers import get_channel_layer

from django.db import OperationalError

logger = logging.getLogger(__name__)


def notification_group(user_id) -> str:
    """Channels group that receives live notifications for a user."""
    return f"notifications_{user_id}"


def push_live_notification(notification) -> bool:
    """Push a saved notification to the user's open websockets.

    Returns False if the channel layer is unavailable or the send
    failed; the notification row is still stored.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    try:
        async_to_sync(channel_layer.group_send)(
            notification_group(notification.user_id),
            {
                "type": "notification.created",
                "notification": notification.as_payload(),
            },
        )
    except Exception as exc:
        logger.warning(
            "Live push of notification %s to user %s failed: %s",
            notification.pk,
            notification.user_id,
            exc,
        )
        return False
    return True


@shared_task(
    autoretry_for=(OperationalError,),
    max_retries=3,
    retry_backoff=10,
    retry_backoff_max=120,
)
def deliver_notification(
    user_id: int,
    type: str,
    title: str,
    message: str,
    prop_id: int | None = None,
    show_id: int | None = None,
    task_card_id: int | None = None,
    metadata: dict | None = None,
):
    """Store one notification and push it live. Returns its id."""
    from .models import Notification

    notification = Notification.objects.create(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        prop_id=prop_id,
        show_id=show_id,
        task_card_id=task_card_id,
        metadata=metadata or {},
    )
    push_live_notification(notification)
    return notification.pk


@shared_task
def auto_revert_repaired_props():
    """Revert props left in 'repaired_back_in_show' to 'confirmed'."""
    from .services.revert import revert_repaired_props

    count = revert_repaired_props()
    if count:
        logger.info("Reverted %d repaired props to confirmed", count)
    else:
        logger.info("No props needed status reversion")
    return count
