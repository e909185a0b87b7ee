"""Unit tests for the DataManager reactive cache."""

import asyncio

import pytest

from bizdesk.application.services import CacheOperation, Collection, DataManager


class ScriptedFetcher:
    """Fetcher returning ``result`` (or raising ``error``), optionally held until released."""

    def __init__(self, result=(), gated: bool = False):
        self.result = list(result) if isinstance(result, (list, tuple)) else result
        self.error: Exception | None = None
        self.calls = 0
        self.release = asyncio.Event()
        if not gated:
            self.release.set()

    async def __call__(self):
        self.calls += 1
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return list(self.result) if isinstance(self.result, list) else self.result


class QueuedFetcher:
    """Fetcher whose n-th call waits on its own gate and returns the n-th result."""

    def __init__(self, *results):
        self.results = [list(r) for r in results]
        self.gates = [asyncio.Event() for _ in results]
        self.calls = 0

    async def __call__(self):
        index = self.calls
        self.calls += 1
        await self.gates[index].wait()
        return list(self.results[index])


def _manager(**fetchers) -> DataManager:
    defaults = {
        Collection.CLIENTS: ScriptedFetcher(),
        Collection.QUOTES: ScriptedFetcher(),
        Collection.ORDERS: ScriptedFetcher(),
        Collection.COMPANY_SETTINGS: ScriptedFetcher(result=None),
    }
    for name, fetch in fetchers.items():
        defaults[Collection(name)] = fetch
    return DataManager(defaults)


class Recorder:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def test_missing_fetcher_is_rejected():
    with pytest.raises(ValueError, match="company_settings"):
        DataManager({
            Collection.CLIENTS: ScriptedFetcher(),
            Collection.QUOTES: ScriptedFetcher(),
            Collection.ORDERS: ScriptedFetcher(),
        })


def test_initial_state_is_empty_and_unloaded():
    dm = _manager()
    assert dm.get_data(Collection.CLIENTS) == []
    assert dm.get_data(Collection.COMPANY_SETTINGS) is None
    assert not dm.is_loaded("clients")
    assert not dm.is_loading("clients")


@pytest.mark.asyncio
async def test_concurrent_loads_fetch_once_and_late_caller_gets_stale_snapshot():
    fetch = ScriptedFetcher(result=[{"id": "a"}], gated=True)
    dm = _manager(clients=fetch)

    first = asyncio.create_task(dm.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    assert dm.is_loading(Collection.CLIENTS)

    second = await dm.load_data(Collection.CLIENTS)
    assert second == []

    fetch.release.set()
    assert await first == [{"id": "a"}]
    assert fetch.calls == 1
    assert not dm.is_loading(Collection.CLIENTS)
    assert dm.is_loaded(Collection.CLIENTS)


@pytest.mark.asyncio
async def test_forced_reload_fetches_even_while_another_fetch_runs():
    fetch = ScriptedFetcher(result=[{"id": "a"}], gated=True)
    dm = _manager(clients=fetch)

    first = asyncio.create_task(dm.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    forced = asyncio.create_task(dm.invalidate_and_reload(Collection.CLIENTS))
    await asyncio.sleep(0)
    fetch.release.set()
    await asyncio.gather(first, forced)

    assert fetch.calls == 2
    assert not dm.is_loading(Collection.CLIENTS)


@pytest.mark.asyncio
async def test_overlapping_loads_leave_the_snapshot_of_the_last_to_complete():
    fetch = QueuedFetcher([{"id": "old"}], [{"id": "new"}])
    dm = _manager(clients=fetch)

    plain = asyncio.create_task(dm.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    forced = asyncio.create_task(dm.invalidate_and_reload(Collection.CLIENTS))
    await asyncio.sleep(0)

    fetch.gates[1].set()
    assert await forced == [{"id": "new"}]
    assert dm.get_data(Collection.CLIENTS) == [{"id": "new"}]

    fetch.gates[0].set()
    assert await plain == [{"id": "old"}]
    assert dm.get_data(Collection.CLIENTS) == [{"id": "old"}]


@pytest.mark.asyncio
async def test_forced_reload_finishing_last_wins_over_the_plain_load():
    fetch = QueuedFetcher([{"id": "old"}], [{"id": "new"}])
    dm = _manager(clients=fetch)

    plain = asyncio.create_task(dm.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    forced = asyncio.create_task(dm.invalidate_and_reload(Collection.CLIENTS))
    await asyncio.sleep(0)

    fetch.gates[0].set()
    await plain
    fetch.gates[1].set()
    await forced

    assert dm.get_data(Collection.CLIENTS) == [{"id": "new"}]
    assert not dm.is_loading(Collection.CLIENTS)


@pytest.mark.asyncio
async def test_wait_for_load_returns_the_snapshot_of_the_running_fetch():
    fetch = ScriptedFetcher(result=[{"id": "a"}], gated=True)
    dm = _manager(clients=fetch)

    loader = asyncio.create_task(dm.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    waiter = asyncio.create_task(dm.wait_for_load(Collection.CLIENTS))
    await asyncio.sleep(0)
    assert not waiter.done()

    fetch.release.set()

    assert await waiter == [{"id": "a"}]
    await loader
    assert fetch.calls == 1


@pytest.mark.asyncio
async def test_wait_for_load_without_running_fetch_returns_snapshot():
    dm = _manager()
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})

    assert await dm.wait_for_load(Collection.CLIENTS) == [{"id": "a"}]


@pytest.mark.asyncio
async def test_wait_for_load_swallows_the_fetch_error():
    fetch = ScriptedFetcher(gated=True)
    fetch.error = ConnectionError("store down")
    dm = _manager(orders=fetch)

    loader = asyncio.create_task(dm.load_data(Collection.ORDERS))
    await asyncio.sleep(0)
    waiter = asyncio.create_task(dm.wait_for_load(Collection.ORDERS))
    await asyncio.sleep(0)
    fetch.release.set()

    assert await waiter == []
    with pytest.raises(ConnectionError):
        await loader
    assert not dm.is_loaded(Collection.ORDERS)


@pytest.mark.asyncio
async def test_optimistic_add_is_visible_immediately_and_prepended():
    dm = _manager(clients=ScriptedFetcher(result=[{"id": "a"}]))
    await dm.load_data(Collection.CLIENTS)
    recorder = Recorder()
    dm.subscribe(Collection.CLIENTS, recorder)

    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "b"})

    assert dm.get_data(Collection.CLIENTS) == [{"id": "b"}, {"id": "a"}]
    assert recorder.calls == 1


@pytest.mark.asyncio
async def test_update_replaces_in_place():
    dm = _manager(quotes=ScriptedFetcher(result=[{"id": "a", "v": 1}, {"id": "b", "v": 1}]))
    await dm.load_data(Collection.QUOTES)

    dm.update_local_data("quotes", "update", {"id": "b", "v": 2}, "b")

    assert dm.get_data(Collection.QUOTES) == [{"id": "a", "v": 1}, {"id": "b", "v": 2}]


@pytest.mark.asyncio
async def test_update_with_unknown_id_changes_nothing_but_notifies_once():
    dm = _manager(orders=ScriptedFetcher(result=[{"id": "a"}]))
    await dm.load_data(Collection.ORDERS)
    recorder = Recorder()
    dm.subscribe(Collection.ORDERS, recorder)

    dm.update_local_data(Collection.ORDERS, CacheOperation.UPDATE, {"id": "zzz"}, "zzz")

    assert dm.get_data(Collection.ORDERS) == [{"id": "a"}]
    assert recorder.calls == 1


@pytest.mark.asyncio
async def test_delete_removes_matching_item():
    dm = _manager(clients=ScriptedFetcher(result=[{"id": "a"}, {"id": "b"}]))
    await dm.load_data(Collection.CLIENTS)

    dm.update_local_data(Collection.CLIENTS, CacheOperation.DELETE, None, "a")

    assert dm.get_data(Collection.CLIENTS) == [{"id": "b"}]


def test_local_mutation_does_not_mark_loaded():
    dm = _manager()
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})
    assert not dm.is_loaded(Collection.CLIENTS)


def test_company_settings_are_replaced_whatever_the_operation():
    dm = _manager()
    dm.update_local_data(Collection.COMPANY_SETTINGS, CacheOperation.DELETE, {"company_name": "ACME"})
    assert dm.get_data(Collection.COMPANY_SETTINGS) == {"company_name": "ACME"}


@pytest.mark.asyncio
async def test_failed_fetch_keeps_snapshot_and_does_not_notify():
    fetch = ScriptedFetcher(result=[{"id": "a"}])
    dm = _manager(clients=fetch)
    await dm.load_data(Collection.CLIENTS)
    recorder = Recorder()
    dm.subscribe(Collection.CLIENTS, recorder)

    fetch.error = ConnectionError("store down")
    with pytest.raises(ConnectionError, match="store down"):
        await dm.invalidate_and_reload(Collection.CLIENTS)

    assert dm.get_data(Collection.CLIENTS) == [{"id": "a"}]
    assert recorder.calls == 0
    assert not dm.is_loading(Collection.CLIENTS)


@pytest.mark.asyncio
async def test_first_load_failure_leaves_collection_unloaded():
    fetch = ScriptedFetcher()
    fetch.error = TimeoutError("slow store")
    dm = _manager(orders=fetch)

    with pytest.raises(TimeoutError):
        await dm.load_data(Collection.ORDERS)

    assert not dm.is_loaded(Collection.ORDERS)
    assert dm.get_data(Collection.ORDERS) == []


@pytest.mark.asyncio
async def test_unsubscribe_stops_notifications_for_that_callback_only():
    dm = _manager(clients=ScriptedFetcher(result=[{"id": "a"}]))
    kept, dropped = Recorder(), Recorder()
    dm.subscribe(Collection.CLIENTS, kept)
    unsubscribe = dm.subscribe(Collection.CLIENTS, dropped)

    unsubscribe()
    await dm.load_data(Collection.CLIENTS)

    assert kept.calls == 1
    assert dropped.calls == 0
    assert dm.subscriber_count(Collection.CLIENTS) == 1


def test_subscribing_twice_registers_once():
    dm = _manager()
    recorder = Recorder()
    dm.subscribe(Collection.QUOTES, recorder)
    dm.subscribe(Collection.QUOTES, recorder)

    dm.update_local_data(Collection.QUOTES, CacheOperation.ADD, {"id": "a"})

    assert recorder.calls == 1


def test_subscribers_only_hear_their_collection():
    dm = _manager()
    recorder = Recorder()
    dm.subscribe(Collection.ORDERS, recorder)

    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})

    assert recorder.calls == 0


@pytest.mark.asyncio
async def test_forced_reload_twice_gives_same_snapshot_and_two_notifications():
    dm = _manager(quotes=ScriptedFetcher(result=[{"id": "a"}, {"id": "b"}]))
    recorder = Recorder()
    dm.subscribe(Collection.QUOTES, recorder)

    first = await dm.invalidate_and_reload(Collection.QUOTES)
    second = await dm.invalidate_and_reload(Collection.QUOTES)

    assert first == second == [{"id": "a"}, {"id": "b"}]
    assert recorder.calls == 2


def test_failing_subscriber_does_not_block_the_others():
    dm = _manager()
    recorder = Recorder()

    def broken():
        raise RuntimeError("boom")

    dm.subscribe(Collection.CLIENTS, broken)
    dm.subscribe(Collection.CLIENTS, recorder)

    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})

    assert recorder.calls == 1


def test_subscriber_may_unsubscribe_itself_during_notification():
    dm = _manager()
    calls = []

    def once():
        calls.append(1)
        unsubscribe()

    unsubscribe = dm.subscribe(Collection.CLIENTS, once)
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "b"})

    assert calls == [1]


def test_get_data_returns_a_copy():
    dm = _manager()
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "a"})

    snapshot = dm.get_data(Collection.CLIENTS)
    snapshot.clear()

    assert dm.get_data(Collection.CLIENTS) == [{"id": "a"}]


@pytest.mark.asyncio
async def test_invalidate_multiple_reloads_each_collection():
    clients = ScriptedFetcher(result=[{"id": "c"}])
    orders = ScriptedFetcher(result=[{"id": "o"}])
    dm = _manager(clients=clients, orders=orders)

    results = await dm.invalidate_multiple([Collection.CLIENTS, Collection.ORDERS])

    assert results == [[{"id": "c"}], [{"id": "o"}]]
    assert clients.calls == 1
    assert orders.calls == 1


@pytest.mark.asyncio
async def test_invalidate_multiple_raises_and_keeps_collections_that_reloaded():
    clients = ScriptedFetcher(result=[{"id": "fresh"}])
    orders = ScriptedFetcher(result=[{"id": "o"}])
    dm = _manager(clients=clients, orders=orders)
    await dm.load_data(Collection.ORDERS)
    dm.update_local_data(Collection.CLIENTS, CacheOperation.ADD, {"id": "stale"})

    orders.error = ConnectionError("orders unavailable")
    orders.release.clear()
    # Let the orders fetch fail only once the clients snapshot is in place
    dm.subscribe(Collection.CLIENTS, orders.release.set)

    with pytest.raises(ConnectionError, match="orders unavailable"):
        await dm.invalidate_multiple([Collection.CLIENTS, Collection.ORDERS])

    assert dm.get_data(Collection.CLIENTS) == [{"id": "fresh"}]
    assert dm.is_loaded(Collection.CLIENTS)
    assert dm.get_data(Collection.ORDERS) == [{"id": "o"}]
    assert not dm.is_loading(Collection.ORDERS)


@pytest.mark.asyncio
async def test_invalidate_all_loads_everything():
    dm = _manager(company_settings=ScriptedFetcher(result={"company_name": "ACME"}))

    await dm.invalidate_all()

    assert all(dm.is_loaded(c) for c in Collection)
    assert dm.get_data(Collection.COMPANY_SETTINGS) == {"company_name": "ACME"}


@pytest.mark.asyncio
async def test_reset_clears_data_keeps_subscribers_and_notifies():
    dm = _manager(clients=ScriptedFetcher(result=[{"id": "a"}]))
    await dm.load_data(Collection.CLIENTS)
    recorder = Recorder()
    dm.subscribe(Collection.CLIENTS, recorder)

    dm.reset()

    assert dm.get_data(Collection.CLIENTS) == []
    assert not dm.is_loaded(Collection.CLIENTS)
    assert recorder.calls == 1
    assert dm.subscriber_count(Collection.CLIENTS) == 1


@pytest.mark.asyncio
async def test_snapshot_status_reports_sizes_and_flags():
    dm = _manager(clients=ScriptedFetcher(result=[{"id": "a"}, {"id": "b"}]))
    await dm.load_data(Collection.CLIENTS)
    dm.subscribe(Collection.CLIENTS, Recorder())

    status = dm.snapshot_status()

    assert status["clients"] == {"loading": False, "loaded": True, "size": 2, "subscribers": 1}
    assert status["company_settings"]["size"] == 0
    assert status["orders"]["loaded"] is False
