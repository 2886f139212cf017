"""Unit tests for the notification relay and event emission."""

from uuid import uuid4

import pytest

from commentary.adapter.notification.relay import (
    NotificationRelay,
    RecordingEventPublisher,
    RelayEventPublisher,
)
from commentary.domain.model import CommentStatusChanged
from commentary.domain.service import EventPublisher, EventService
from commentary.domain.value import CommentId, ModerationAction, ModerationState


def _event() -> CommentStatusChanged:
    return CommentStatusChanged(
        comment_id=CommentId(uuid4()),
        action=ModerationAction.APPROVE,
        from_state=ModerationState.PENDING,
        to_state=ModerationState.APPROVED,
    )


class FailingPublisher(EventPublisher):
    """Publisher whose delivery always fails."""

    async def publish(self, event):
        raise RuntimeError("relay is down")


class TestNotificationRelay:
    """Tests for NotificationRelay."""

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_subscriber(self):
        relay = NotificationRelay()
        first = relay.subscribe()
        second = relay.subscribe()

        delivered = relay.broadcast({"event": "ping"})

        assert delivered == 2
        assert first.get_nowait() == {"event": "ping"}
        assert second.get_nowait() == {"event": "ping"}

    @pytest.mark.asyncio
    async def test_full_queue_drops_message(self):
        """A slow subscriber loses messages instead of blocking others."""
        relay = NotificationRelay(queue_size=1)
        slow = relay.subscribe()
        fast = relay.subscribe()

        relay.broadcast({"event": "one"})
        fast.get_nowait()
        delivered = relay.broadcast({"event": "two"})

        assert delivered == 1
        assert slow.qsize() == 1
        assert fast.get_nowait() == {"event": "two"}

    @pytest.mark.asyncio
    async def test_unsubscribed_queue_receives_nothing(self):
        relay = NotificationRelay()
        queue = relay.subscribe()
        relay.unsubscribe(queue)
        relay.unsubscribe(queue)

        assert relay.broadcast({"event": "ping"}) == 0
        assert queue.empty()
        assert relay.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_publisher_serializes_event(self):
        relay = NotificationRelay()
        queue = relay.subscribe()
        event = _event()

        await RelayEventPublisher(relay).publish(event)

        message = queue.get_nowait()
        assert message["event"] == "comment.status_changed"
        assert message["data"]["comment_id"] == str(event.comment_id)
        assert message["data"]["to_state"] == "APPROVED"
        assert message["timestamp"] == event.occurred_at.isoformat()


class TestEventService:
    """Tests for EventService."""

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self):
        """A broken notification layer never fails the mutation."""
        service = EventService(FailingPublisher())

        await service.emit(_event())

    @pytest.mark.asyncio
    async def test_held_events_wait_for_release(self):
        recorder = RecordingEventPublisher()
        service = EventService(recorder)
        first, second = _event(), _event()

        service.hold()
        await service.emit(first)
        await service.emit(second)

        assert recorder.events == []
        assert service.held_count == 2

        await service.release()

        assert recorder.events == [first, second]
        assert service.held_count == 0

    @pytest.mark.asyncio
    async def test_discarded_events_are_never_published(self):
        recorder = RecordingEventPublisher()
        service = EventService(recorder)

        service.hold()
        await service.emit(_event())
        service.discard()
        await service.release()

        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_emits_immediately_after_release(self):
        recorder = RecordingEventPublisher()
        service = EventService(recorder)
        service.hold()
        await service.release()

        event = _event()
        await service.emit(event)

        assert recorder.events == [event]

    @pytest.mark.asyncio
    async def test_abstract_publisher_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            EventPublisher()
