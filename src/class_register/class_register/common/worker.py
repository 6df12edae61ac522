from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackgroundWorker:
    """Single background thread for storage I/O.

    Callers on the rendering/request side submit work and either wait on the
    returned future or attach a callback; they never run queries themselves.
    """

    def __init__(self, *, name: str = "db-worker"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        future = self._executor.submit(fn, *args, **kwargs)
        future.add_done_callback(_log_failure)
        return future

    def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Submit and block until the result is ready; re-raises job errors."""
        return self.submit(fn, *args, **kwargs).result()

    def flush(self) -> None:
        """Block until every job submitted so far has finished."""
        self.run(lambda: None)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _log_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("background job failed: %s", exc, exc_info=exc)
