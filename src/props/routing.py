"""WebSocket URL routing for the props app."""

from django.urls import path

from props.consumers import NotificationConsumer

websocket_urlpatterns = [
    path(
        "ws/notifications/",
        NotificationConsumer.as_asgi(),
    ),
]
