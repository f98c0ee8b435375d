"""Scraper package — web fetch & field extraction."""

from pagegrab.scraper.extractor import extract_fields, extract_result
from pagegrab.scraper.fetcher import fetch_url
from pagegrab.scraper.models import (
    FetchError,
    OutputWriteError,
    PageFields,
    ParseError,
    RawPage,
    ScrapeResult,
)

__all__ = [
    "fetch_url",
    "extract_fields",
    "extract_result",
    "RawPage",
    "PageFields",
    "ScrapeResult",
    "FetchError",
    "ParseError",
    "OutputWriteError",
]
