"""Batch orchestration: dispatch one task per URL, then drain.

``run_batch`` goes through two phases:

    Dispatch → submit one :func:`scrape_page` per URL to a thread pool
    Drain    → wait for every future, close the aggregator, read the results

No task failure aborts the batch.  The returned list is in completion
order, not input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable, List, Optional

from pagegrab.config import settings
from pagegrab.pipeline.aggregator import ResultAggregator
from pagegrab.pipeline.task import scrape_page
from pagegrab.scraper.models import ScrapeResult

logger = logging.getLogger(__name__)


def split_urls(raw: str) -> List[str]:
    """Split a comma-separated URL string, stripping each segment.

    Segments that are empty after stripping (e.g. a trailing comma) are
    dropped silently.
    """
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


def _pool_size(url_count: int, max_workers: Optional[int]) -> int:
    limit = settings.scrape_max_workers if max_workers is None else max_workers
    if limit <= 0:
        return url_count
    return min(limit, url_count)


def run_batch(
    urls: Iterable[str],
    *,
    max_workers: Optional[int] = None,
) -> List[ScrapeResult]:
    """Scrape every URL in *urls* concurrently and return the successes.

    Args:
        urls: Addresses to scrape.  Each is stripped; empty ones are skipped.
        max_workers: Upper bound on concurrently running tasks.  ``None``
            uses ``settings.scrape_max_workers``; ``0`` or less means one
            worker per URL.

    Returns:
        One :class:`ScrapeResult` per URL that was fetched and parsed.
    """
    targets = [u.strip() for u in urls if u.strip()]
    aggregator = ResultAggregator()

    if not targets:
        aggregator.close()
        return aggregator.results()

    workers = _pool_size(len(targets), max_workers)
    logger.info("Scraping %d URL(s) with %d worker(s)", len(targets), workers)

    # Dispatch
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scrape") as pool:
        future_to_url: dict[Future, str] = {
            pool.submit(scrape_page, url, aggregator.add): url for url in targets
        }

        # Drain
        done, _ = wait(future_to_url)

    for future in done:
        exc = future.exception()
        if exc is not None:
            logger.error("Task for %s failed unexpectedly: %s", future_to_url[future], exc)

    aggregator.close()
    results = aggregator.results()
    logger.info("Scraped %d of %d URL(s)", len(results), len(targets))
    return results
