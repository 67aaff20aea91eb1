"""WebSocket consumer for live in-app notifications."""

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .tasks import notification_group

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """Streams a signed-in user's new notifications.

    ``props.tasks.push_live_notification`` sends ``notification.created``
    events to the user's group; each is forwarded as JSON.
    """

    async def connect(self):
        self.group_name = None
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            await self.close()
            return

        self.group_name = notification_group(user.pk)
        await self.channel_layer.group_add(
            self.group_name, self.channel_name
        )
        await self.accept()
        logger.debug("User %s subscribed to notifications", user.pk)

    async def disconnect(self, code):
        if self.group_name:
            await self.channel_layer.group_discard(
                self.group_name, self.channel_name
            )

    async def receive_json(self, content, **kwargs):
        # Read-only stream; clients only listen.
        if content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    async def notification_created(self, event):
        await self.send_json(
            {
                "type": "notification",
                "notification": event["notification"],
            }
        )
