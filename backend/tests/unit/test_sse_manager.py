"""Unit tests for the SSEManager change relay."""

import asyncio
import json

import pytest

from bizdesk.application.services import CacheOperation, Collection, SSEManager


@pytest.mark.asyncio
async def test_cache_changes_are_broadcast_as_events(data_manager):
    sse = SSEManager()
    sse.follow(data_manager)
    stream = sse.subscribe()
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)

    data_manager.update_local_data(Collection.QUOTES, CacheOperation.ADD, {"id": "q1"})
    event = await asyncio.wait_for(pending, timeout=1)

    assert event.startswith("event: collection_changed\n")
    payload = json.loads(event.split("data: ", 1)[1])
    assert payload == {"collection": "quotes"}
    await stream.aclose()


@pytest.mark.asyncio
async def test_unsubscribing_stops_the_relay(data_manager):
    sse = SSEManager()
    for unsubscribe in sse.follow(data_manager):
        unsubscribe()

    assert all(data_manager.subscriber_count(c) == 0 for c in Collection)


@pytest.mark.asyncio
async def test_full_queue_disconnects_slow_client():
    sse = SSEManager(queue_size=1)
    stream = sse.subscribe()
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)
    assert sse.client_count == 1

    sse.broadcast("collection_changed", {"collection": "clients"})
    sse.broadcast("collection_changed", {"collection": "orders"})

    assert sse.client_count == 0
    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(pending, timeout=1)


@pytest.mark.asyncio
async def test_shutdown_ends_streams():
    sse = SSEManager()
    stream = sse.subscribe()
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)

    await sse.shutdown()

    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(pending, timeout=1)
    assert sse.client_count == 0
