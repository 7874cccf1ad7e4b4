"""Coalescing of concurrent refresh exchanges."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Generic, TypeVar

T = TypeVar("T")

log = logging.getLogger(__name__)


class RefreshCoordinator(Generic[T]):
    """Run at most one refresh exchange at a time.

    The first caller of :meth:`run` performs the exchange; callers arriving
    while it is in flight wait on the same :class:`~concurrent.futures.Future`
    and receive its result or its exception. Once the exchange settles the
    next caller starts a new one.

    ``reuse`` is consulted under the same lock that decides who leads, so a
    caller that lost the race to an exchange which has already settled picks
    up that exchange's outcome instead of starting another one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inflight: Future[T] | None = None

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._inflight is not None

    def run(
        self,
        exchange: Callable[[], T],
        *,
        reuse: Callable[[], T | None] | None = None,
    ) -> T:
        """Return the result of the current exchange, starting one if needed.

        :param exchange: Performs the refresh; only the leader calls it.
        :param reuse: Returns an already usable result, or ``None``. Checked
            only when no exchange is in flight.
        """
        with self._lock:
            future = self._inflight
            if future is None and reuse is not None:
                ready = reuse()
                if ready is not None:
                    log.debug("client.refresh.reused")
                    return ready
            leader = future is None
            if future is None:
                future = Future()
                self._inflight = future

        if not leader:
            log.debug("client.refresh.joined")
            return future.result()

        try:
            result = exchange()
        except Exception as exc:
            self._settle()
            future.set_exception(exc)
            raise
        self._settle()
        future.set_result(result)
        return result

    def _settle(self) -> None:
        with self._lock:
            self._inflight = None
