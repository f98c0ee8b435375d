"""Concurrent scrape pipeline.

Public API::

    from pagegrab.pipeline import run_batch, split_urls
    results = run_batch(split_urls("https://a.example, https://b.example"))
"""

from pagegrab.pipeline.aggregator import AggregatorClosedError, ResultAggregator
from pagegrab.pipeline.orchestrator import run_batch, split_urls
from pagegrab.pipeline.task import scrape_page

__all__ = [
    "run_batch",
    "split_urls",
    "scrape_page",
    "ResultAggregator",
    "AggregatorClosedError",
]
