"""DataManager — in-process reactive cache of the business collections.

Holds one snapshot per collection (clients, quotes, orders, company
settings), loads each from the store on demand, and tells subscribers
whenever a snapshot changes. Views read snapshots with ``get_data`` and
re-read them when notified; writers push optimistic changes with
``update_local_data`` and reconcile with ``invalidate_and_reload``.

The instance is created once by the application and injected where needed;
it is not a module-level global.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    """Names of the cached collections."""

    CLIENTS = "clients"
    QUOTES = "quotes"
    ORDERS = "orders"
    COMPANY_SETTINGS = "company_settings"


class CacheOperation(str, Enum):
    """Local mutations accepted by ``DataManager.update_local_data``."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


Fetcher = Callable[[], Awaitable[Any]]
Subscriber = Callable[[], None]
Unsubscribe = Callable[[], None]

# Collections holding a single nullable record instead of a list
_SINGLETONS = frozenset({Collection.COMPANY_SETTINGS})


def _identity(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("id")
    return getattr(item, "id", None)


class DataManager:
    """Reactive cache with per-collection subscribers and fetch de-duplication.

    A non-forced ``load_data`` issued while a fetch for the same collection
    is still running does not start another one: it returns the current
    (stale) snapshot straight away. The running fetch is registered before
    the first suspension point, so two loads scheduled in the same loop
    iteration cannot both slip through. Forced reloads always fetch; when
    several fetches overlap, the last one to complete wins.
    """

    def __init__(self, fetchers: Mapping[Collection | str, Fetcher]) -> None:
        self._fetchers: dict[Collection, Fetcher] = {
            Collection(name): fetch for name, fetch in fetchers.items()
        }
        missing = [c.value for c in Collection if c not in self._fetchers]
        if missing:
            raise ValueError(f"No fetcher configured for: {', '.join(missing)}")

        self._data: dict[Collection, Any] = {c: self._empty(c) for c in Collection}
        self._loaded: set[Collection] = set()
        self._listeners: dict[Collection, dict[Subscriber, None]] = {c: {} for c in Collection}
        self._in_flight: dict[Collection, set[asyncio.Task[Any]]] = {c: set() for c in Collection}

    # ── Subscriptions ───────────────────────────────────────────────

    def subscribe(self, collection: Collection | str, callback: Subscriber) -> Unsubscribe:
        """Call ``callback`` (no arguments) every time ``collection`` changes.

        Registering the same callback twice has no extra effect. Returns a
        function that removes exactly this callback.
        """
        listeners = self._listeners[Collection(collection)]
        listeners[callback] = None

        def unsubscribe() -> None:
            listeners.pop(callback, None)

        return unsubscribe

    def subscriber_count(self, collection: Collection | str) -> int:
        return len(self._listeners[Collection(collection)])

    def _notify(self, collection: Collection) -> None:
        for callback in list(self._listeners[collection]):
            try:
                callback()
            except Exception:
                logger.exception("Subscriber %r failed on %s change", callback, collection.value)

    # ── Reads ───────────────────────────────────────────────────────

    def get_data(self, collection: Collection | str) -> Any:
        """Return the current snapshot without fetching.

        Lists are returned as a fresh copy; company settings as the record or None.
        """
        collection = Collection(collection)
        data = self._data[collection]
        if collection in _SINGLETONS:
            return data
        return list(data)

    def is_loading(self, collection: Collection | str) -> bool:
        return bool(self._in_flight[Collection(collection)])

    def is_loaded(self, collection: Collection | str) -> bool:
        """True once a fetch of ``collection`` has succeeded since construction or reset."""
        return Collection(collection) in self._loaded

    def snapshot_status(self) -> dict[str, dict[str, Any]]:
        status: dict[str, dict[str, Any]] = {}
        for collection in Collection:
            data = self._data[collection]
            if collection in _SINGLETONS:
                size = 0 if data is None else 1
            else:
                size = len(data)
            status[collection.value] = {
                "loading": self.is_loading(collection),
                "loaded": self.is_loaded(collection),
                "size": size,
                "subscribers": len(self._listeners[collection]),
            }
        return status

    # ── Loading ─────────────────────────────────────────────────────

    async def load_data(self, collection: Collection | str, force: bool = False) -> Any:
        """Fetch ``collection`` from the store and replace its snapshot.

        Without ``force``, a call made while a fetch is running returns the
        stale snapshot immediately. On failure the snapshot is left as it
        was, subscribers are not notified and the error is re-raised.
        """
        collection = Collection(collection)
        in_flight = self._in_flight[collection]
        if in_flight and not force:
            logger.debug("%s fetch already running, serving cached snapshot", collection.value)
            return self.get_data(collection)

        task = asyncio.ensure_future(self._fetch(collection))
        in_flight.add(task)
        try:
            return await task
        finally:
            in_flight.discard(task)

    async def wait_for_load(self, collection: Collection | str) -> Any:
        """Wait for every fetch of ``collection`` running right now, then return the snapshot.

        Fetch errors are not raised here; the caller that started the fetch
        receives them. Returns immediately when nothing is running.
        """
        collection = Collection(collection)
        pending = set(self._in_flight[collection])
        if pending:
            await asyncio.wait(pending)
        return self.get_data(collection)

    async def _fetch(self, collection: Collection) -> Any:
        try:
            result = await self._fetchers[collection]()
        except Exception as exc:
            logger.error("Failed to load %s: %s", collection.value, exc)
            raise

        if collection in _SINGLETONS:
            self._data[collection] = result
        else:
            self._data[collection] = list(result or [])
        self._loaded.add(collection)
        logger.debug("Loaded %s (%s)", collection.value, self._describe_size(collection))

        self._notify(collection)
        return self.get_data(collection)

    async def invalidate_and_reload(self, collection: Collection | str) -> Any:
        """Always fetch, regardless of any fetch already running."""
        return await self.load_data(collection, force=True)

    async def invalidate_multiple(self, collections: Iterable[Collection | str]) -> list[Any]:
        """Reload several collections concurrently.

        Fails with the first error raised; collections that already reloaded
        keep their new snapshot.
        """
        results = await asyncio.gather(
            *(self.invalidate_and_reload(c) for c in collections)
        )
        return list(results)

    async def invalidate_all(self) -> list[Any]:
        return await self.invalidate_multiple(list(Collection))

    # ── Local mutation ──────────────────────────────────────────────

    def update_local_data(
        self,
        collection: Collection | str,
        operation: CacheOperation | str,
        item: Any,
        item_id: str | None = None,
    ) -> None:
        """Apply a change to the snapshot without contacting the store, then notify.

        ``add`` prepends ``item``. ``update`` replaces the element whose id is
        ``item_id`` in place and ``delete`` drops it; both do nothing when the
        id is absent. For company settings ``item`` replaces the record
        whatever the operation. Subscribers are notified in every case.
        """
        collection = Collection(collection)
        operation = CacheOperation(operation)

        if collection in _SINGLETONS:
            self._data[collection] = item
        else:
            items: list[Any] = self._data[collection]
            if operation == CacheOperation.ADD:
                self._data[collection] = [item, *items]
            elif operation == CacheOperation.UPDATE and item_id is not None:
                for index, existing in enumerate(items):
                    if _identity(existing) == item_id:
                        items[index] = item
                        break
            elif operation == CacheOperation.DELETE and item_id is not None:
                self._data[collection] = [x for x in items if _identity(x) != item_id]

        self._notify(collection)

    def reset(self) -> None:
        """Drop every snapshot back to its initial empty state and notify.

        Subscriptions survive. A fetch still running when this is called
        will repopulate its collection when it completes.
        """
        for collection in Collection:
            self._data[collection] = self._empty(collection)
        self._loaded.clear()
        for collection in Collection:
            self._notify(collection)

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _empty(collection: Collection) -> Any:
        return None if collection in _SINGLETONS else []

    def _describe_size(self, collection: Collection) -> str:
        data = self._data[collection]
        if collection in _SINGLETONS:
            return "configured" if data is not None else "empty"
        return f"{len(data)} items"
