"""SSE Manager — in-process event broadcaster for cache change notifications."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from functools import partial
from typing import Any

from bizdesk.application.services.data_manager import Collection, DataManager, Unsubscribe

logger = logging.getLogger(__name__)

COLLECTION_CHANGED = "collection_changed"


class SSEManager:
    """Manages SSE client connections and broadcasts collection change events.

    Each connected client gets its own bounded asyncio.Queue. Broadcasting
    pushes the event to all queues. Clients consume events via an async
    generator and re-read the changed collection over the REST API.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Subscribe to SSE events. Yields formatted SSE strings.

        The generator automatically unsubscribes when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        """Broadcast an SSE event to all connected clients.

        Synchronous so it can be used directly as a DataManager subscriber.
        """
        sse_message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("SSE client queue full — disconnecting")

        for q in dead_queues:
            self._queues.remove(q)
            _drain(q)
            q.put_nowait(None)

    def follow(self, data_manager: DataManager) -> list[Unsubscribe]:
        """Relay every change of every cached collection as a ``collection_changed`` event."""
        return [
            data_manager.subscribe(
                collection,
                partial(self.broadcast, COLLECTION_CHANGED, {"collection": collection.value}),
            )
            for collection in Collection
        ]

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in self._queues:
            _drain(queue)
            queue.put_nowait(None)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)


def _drain(queue: asyncio.Queue[str | None]) -> None:
    # Make room for the disconnect sentinel
    while not queue.empty():
        queue.get_nowait()
