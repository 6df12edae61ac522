from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Dispatch = Callable[[Callable[[], None]], Any]


def _run_inline(job: Callable[[], None]) -> None:
    job()


class Subscription(Generic[T]):
    """A live query: re-runs `query` and pushes the snapshot to `callback`."""

    def __init__(
        self,
        notifier: "TableNotifier",
        tables: frozenset[str],
        query: Callable[[], T],
        callback: Callable[[T], None],
    ):
        self._notifier = notifier
        self.tables = tables
        self._query = query
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def refresh(self) -> None:
        if not self._active:
            return
        try:
            snapshot = self._query()
            if self._active:
                self._callback(snapshot)
        except Exception:
            # The write that triggered this refresh has already committed.
            logger.exception("subscription refresh failed (tables=%s)", sorted(self.tables))

    def cancel(self) -> None:
        self._active = False
        self._notifier._remove(self)


class TableNotifier:
    """Publish/subscribe hub keyed by table name.

    Repositories call `notify()` after committing a write; every subscription
    watching one of the touched tables gets a fresh snapshot. The first
    snapshot is delivered on subscribe.
    """

    def __init__(self, dispatch: Optional[Dispatch] = None):
        self._dispatch = dispatch or _run_inline
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        tables: Iterable[str],
        query: Callable[[], T],
        callback: Callable[[T], None],
    ) -> Subscription[T]:
        sub: Subscription[T] = Subscription(self, frozenset(tables), query, callback)
        with self._lock:
            self._subscriptions.append(sub)
        self._dispatch(sub.refresh)
        return sub

    def notify(self, *tables: str) -> None:
        touched = set(tables)
        with self._lock:
            targets = [s for s in self._subscriptions if s.tables & touched]
        for sub in targets:
            self._dispatch(sub.refresh)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)
