"""Admin notification relay.

Domain events are fanned out to every connected admin client through a
bounded per-client queue. A slow client loses events rather than slowing
down the request that produced them.
"""

import asyncio
from typing import Any

import logfire

from commentary.adapter.error import NotificationDeliveryError
from commentary.domain.model.event import DomainEvent
from commentary.domain.service.event_service import EventPublisher


class NotificationRelay:
    """In-process pub/sub hub for admin clients."""

    def __init__(self, queue_size: int = 100) -> None:
        """Initialize relay.

        Args:
            queue_size: Events buffered per subscriber before dropping
        """
        self.queue_size = queue_size
        self._subscribers: set[asyncio.Queue[dict[str, Any]]] = set()

    @property
    def subscriber_count(self) -> int:
        """Number of connected subscribers."""
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[dict[str, Any]]:
        """Register a subscriber.

        Returns:
            Queue the subscriber reads messages from
        """
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        logfire.info("Notification subscriber added", subscribers=len(self._subscribers))
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        """Remove a subscriber. Unknown queues are ignored."""
        self._subscribers.discard(queue)
        logfire.info(
            "Notification subscriber removed", subscribers=len(self._subscribers)
        )

    def broadcast(self, message: dict[str, Any]) -> int:
        """Queue a message for every subscriber.

        Args:
            message: JSON-serializable message

        Returns:
            Number of subscribers the message was queued for
        """
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logfire.warn(
                    "Notification dropped for slow subscriber",
                    event_name=message.get("event"),
                )
                continue
            delivered += 1
        return delivered


class RelayEventPublisher(EventPublisher):
    """Publishes domain events to the notification relay."""

    def __init__(self, relay: NotificationRelay) -> None:
        self.relay = relay

    async def publish(self, event: DomainEvent) -> None:
        """Serialize and broadcast an event.

        Raises:
            NotificationDeliveryError: If the event cannot be serialized
        """
        try:
            message = event.to_message()
        except (TypeError, ValueError) as e:
            raise NotificationDeliveryError(
                f"Cannot serialize event {event.name}: {e}"
            ) from e
        delivered = self.relay.broadcast(message)
        logfire.debug("Event broadcast", event_name=event.name, delivered=delivered)


class RecordingEventPublisher(EventPublisher):
    """Mock publisher that keeps events in memory for tests."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        """Record the event."""
        self.events.append(event)

    def names(self) -> list[str]:
        """Names of recorded events in emission order."""
        return [event.name for event in self.events]

    def clear(self) -> None:
        """Forget recorded events."""
        self.events.clear()
