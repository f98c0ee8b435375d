"""One unit of work: fetch and extract a single URL."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pagegrab.scraper.extractor import extract_result
from pagegrab.scraper.fetcher import fetch_url
from pagegrab.scraper.models import FetchError, ParseError, ScrapeResult

logger = logging.getLogger(__name__)

ResultSink = Callable[[ScrapeResult], None]


def scrape_page(url: str, sink: Optional[ResultSink] = None) -> Optional[ScrapeResult]:
    """Fetch *url*, extract its fields and hand the result to *sink*.

    Per-URL failures never propagate: a URL whose fetch is exhausted or
    whose content cannot be parsed is logged and skipped.

    Args:
        url: Address to scrape.  Surrounding whitespace is stripped.
        sink: Called exactly once with the result on success.

    Returns:
        The :class:`ScrapeResult`, or ``None`` if the URL was skipped.
    """
    url = url.strip()
    if not url:
        return None

    try:
        raw = fetch_url(url)
    except FetchError as exc:
        logger.warning("Skipping %s: %s", url, exc)
        return None

    try:
        result = extract_result(url, raw.html)
    except ParseError as exc:
        logger.warning("Failed to parse %s, skipping: %s", url, exc)
        return None

    if sink is not None:
        sink(result)
    logger.debug("Scraped %s (%d header(s))", url, len(result.headers))
    return result
