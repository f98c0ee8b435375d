"""HTTP fetcher with a fixed-delay, bounded retry policy."""

from __future__ import annotations

import logging
import time

import httpx

from pagegrab.config import settings
from pagegrab.scraper.models import FetchError, RawPage

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def _attempt(client: httpx.Client, url: str) -> RawPage | str:
    """Run a single GET against *url*.

    Returns the :class:`RawPage` on HTTP 200, otherwise a short description
    of why the attempt failed.  The response of a failed attempt is closed
    before returning.
    """
    try:
        response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return str(exc) or type(exc).__name__

    if response.status_code != httpx.codes.OK:
        response.close()
        return f"HTTP {response.status_code}"

    return RawPage(url=url, html=response.text, status_code=response.status_code)


def fetch_url(url: str, *, client: httpx.Client | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Each attempt is bounded by ``settings.request_timeout``.  A transport
    error or any status other than 200 counts as a failed attempt; up to
    ``settings.fetch_max_attempts`` attempts are made, separated by a fixed
    ``settings.fetch_retry_delay`` sleep.

    Args:
        url: The page to fetch.
        client: Optional pre-configured ``httpx.Client``.  When omitted a
            client is created for this call and closed afterwards.

    Raises:
        FetchError: If every attempt failed.  Carries the last cause.
    """
    max_attempts = max(1, settings.fetch_max_attempts)
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            headers=_default_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        )

    cause = "no attempt made"
    try:
        for attempt in range(1, max_attempts + 1):
            outcome = _attempt(client, url)
            if isinstance(outcome, RawPage):
                outcome.attempts = attempt
                if attempt > 1:
                    logger.info("Fetched %s on attempt %d", url, attempt)
                return outcome

            cause = outcome
            logger.warning("Attempt %d failed for %s: %s", attempt, url, cause)
            if attempt < max_attempts:
                time.sleep(settings.fetch_retry_delay)
    finally:
        if owns_client:
            client.close()

    raise FetchError(url, cause, max_attempts)
