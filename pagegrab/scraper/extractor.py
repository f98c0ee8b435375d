"""Field extraction: turns fetched markup into a :class:`ScrapeResult`."""

from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from pagegrab.scraper.models import PageFields, ParseError, ScrapeResult


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse(html: Union[str, bytes]) -> BeautifulSoup:
    if not isinstance(html, (str, bytes)):
        raise ParseError(f"expected markup as str or bytes, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"markup rejected by parser: {exc}") from exc


def _extract_title(soup: BeautifulSoup) -> str:
    """Return the stripped text of the ``<title>`` tag, or empty string."""
    tag = soup.find("title")
    if tag is None:
        return ""
    return tag.get_text().strip()


def _extract_description(soup: BeautifulSoup) -> str:
    """Return the ``content`` of ``<meta name="description">``, or empty string.

    The ``name`` value must match exactly; ``Description`` is not accepted.
    """
    tag = soup.find("meta", attrs={"name": "description"})
    if tag is None:
        return ""
    content = tag.get("content")
    return content if isinstance(content, str) else ""


def _extract_headers(soup: BeautifulSoup) -> List[str]:
    """Return the stripped text of every ``<h1>`` in document order.

    Headings with no text are left out.
    """
    headers: List[str] = []
    for tag in soup.find_all("h1"):
        text = tag.get_text().strip()
        if text:
            headers.append(text)
    return headers


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_fields(html: Union[str, bytes]) -> PageFields:
    """Extract the title, meta description and top-level headers of *html*.

    Missing fields come back as empty values; only markup the parser cannot
    handle is an error.

    Raises:
        ParseError: If *html* cannot be parsed as markup.
    """
    soup = _parse(html)
    return PageFields(
        title=_extract_title(soup),
        description=_extract_description(soup),
        headers=tuple(_extract_headers(soup)),
    )


def extract_result(url: str, html: Union[str, bytes]) -> ScrapeResult:
    """Build the :class:`ScrapeResult` for *url* from its fetched markup."""
    fields = extract_fields(html)
    return ScrapeResult(
        url=url,
        title=fields.title,
        description=fields.description,
        headers=fields.headers,
    )
