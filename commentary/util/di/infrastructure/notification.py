"""Notification infrastructure providers."""

from dishka import Scope, provide

from commentary.adapter.notification.relay import NotificationRelay, RelayEventPublisher
from commentary.config import NotificationSettings
from commentary.domain.service import EventPublisher
from commentary.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider using the in-process relay."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_relay(self, settings: NotificationSettings) -> NotificationRelay:
        """Provide the relay shared by all requests and admin connections."""
        return NotificationRelay(queue_size=settings.subscriber_queue_size)

    @provide(scope=Scope.APP)
    def get_event_publisher(self, relay: NotificationRelay) -> EventPublisher:
        """Provide the event publisher."""
        return RelayEventPublisher(relay)
