"""Mock notification providers for testing."""

from dishka import Scope, provide

from commentary.adapter.notification.relay import (
    NotificationRelay,
    RecordingEventPublisher,
)
from commentary.config import NotificationSettings
from commentary.domain.service import EventPublisher
from commentary.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Mock notification provider that records events instead of relaying them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_relay(self, settings: NotificationSettings) -> NotificationRelay:
        """Provide an idle relay so the admin channel still resolves."""
        return NotificationRelay(queue_size=settings.subscriber_queue_size)

    @provide(scope=Scope.APP)
    def get_recorder(self) -> RecordingEventPublisher:
        """Provide the recorder tests inspect."""
        return RecordingEventPublisher()

    @provide(scope=Scope.APP)
    def get_event_publisher(self, recorder: RecordingEventPublisher) -> EventPublisher:
        """Provide the recorder as the event publisher."""
        return recorder
