"""Admin notification feed.

Streams domain events (``comment.created``, ``comment.reported``,
``comment.status_changed``) to connected moderators as JSON messages.
"""

import asyncio

import logfire
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from commentary.adapter.notification.relay import NotificationRelay
from commentary.config import AuthSettings
from commentary.interface.api.auth import AUTH_COOKIE, optional_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


async def _forward(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        message = await queue.get()
        await websocket.send_json(message)


async def _drain(websocket: WebSocket) -> None:
    # Client messages are ignored; receiving only detects disconnects
    while True:
        await websocket.receive_text()


@router.websocket("/admin")
async def admin_feed(websocket: WebSocket) -> None:
    """Push moderation events to an admin client until it disconnects."""
    container = websocket.app.state.dishka_container
    auth_settings = await container.get(AuthSettings)
    relay = await container.get(NotificationRelay)

    user = optional_user(websocket.cookies.get(AUTH_COOKIE), auth_settings)
    if user is None or not user.is_admin:
        logfire.warn("Rejected notification subscriber", authenticated=user is not None)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    # Subscribe first: every event after the handshake must reach this client
    queue = relay.subscribe()
    tasks: list[asyncio.Task] = []
    try:
        await websocket.accept()
        logfire.info("Admin subscribed to notifications", user_id=user.user_id)
        tasks = [
            asyncio.create_task(_forward(websocket, queue)),
            asyncio.create_task(_drain(websocket)),
        ]
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                raise error
    finally:
        for task in tasks:
            task.cancel()
        relay.unsubscribe(queue)
        logfire.info("Admin unsubscribed from notifications", user_id=user.user_id)
