"""Thread-safe sink collecting the results of concurrently running tasks."""

from __future__ import annotations

import threading
from typing import List

from pagegrab.scraper.models import ScrapeResult


class AggregatorClosedError(RuntimeError):
    """Raised when the aggregator is used outside its intake/read phases."""


class ResultAggregator:
    """Owns the batch's result list.

    The aggregator has two phases.  While open, tasks call :meth:`add` from
    any thread.  After every producer has finished the orchestrator calls
    :meth:`close` once and then reads the final list with :meth:`results`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: List[ScrapeResult] = []
        self._closed = False

    def add(self, result: ScrapeResult) -> None:
        """Insert *result*.  Safe to call from several threads at once."""
        with self._lock:
            if self._closed:
                raise AggregatorClosedError(f"cannot add {result.url}: aggregator is closed")
            self._results.append(result)

    def close(self) -> None:
        """End the intake phase.  Must be called exactly once."""
        with self._lock:
            if self._closed:
                raise AggregatorClosedError("aggregator already closed")
            self._closed = True

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def results(self) -> List[ScrapeResult]:
        """Return a copy of the collected results (only after :meth:`close`)."""
        with self._lock:
            if not self._closed:
                raise AggregatorClosedError("results are not final until the aggregator is closed")
            return list(self._results)
