"""Domain event emission."""

from abc import ABC, abstractmethod

import logfire

from commentary.domain.model.event import DomainEvent

from .base import Service


class EventPublisher(ABC):
    """Generic publisher interface for the notification layer."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Hand an event to the notification layer.

        Args:
            event: Event to deliver
        """
        pass


class EventService(Service):
    """Fire-and-forget event emission.

    Events describe mutations that already happened. A delivery failure is
    logged and never propagates, so it cannot undo the mutation.

    While a transaction is open, events are held back and only published
    once it commits (``hold`` / ``release``). Events of a rolled back
    transaction are dropped with ``discard``.
    """

    def __init__(self, publisher: EventPublisher) -> None:
        """Initialize event service.

        Args:
            publisher: Notification layer publisher
        """
        self.publisher = publisher
        self._held: list[DomainEvent] | None = None

    @property
    def held_count(self) -> int:
        """Number of events waiting for the transaction to commit."""
        return len(self._held) if self._held is not None else 0

    def hold(self) -> None:
        """Queue emitted events until ``release`` or ``discard``."""
        if self._held is None:
            self._held = []

    async def release(self) -> None:
        """Publish held events in emission order and stop holding."""
        events, self._held = self._held or [], None
        for event in events:
            await self._publish(event)

    def discard(self) -> None:
        """Drop held events and stop holding."""
        if self._held:
            logfire.info("Discarding events of rolled back work", count=len(self._held))
        self._held = None

    async def emit(self, event: DomainEvent) -> None:
        """Emit an event, logging delivery failures.

        Args:
            event: Event to emit
        """
        if self._held is not None:
            self._held.append(event)
            return
        await self._publish(event)

    async def _publish(self, event: DomainEvent) -> None:
        try:
            await self.publisher.publish(event)
        except Exception as e:
            logfire.error(
                "Event delivery failed",
                event_name=event.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return
        logfire.debug("Event emitted", event_name=event.name)
