"""Data models and error types for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple


@dataclass
class RawPage:
    """The successful HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int
    attempts: int = 1


@dataclass(frozen=True)
class PageFields:
    """The three fields pulled out of a page's markup."""

    title: str = ""
    description: str = ""
    headers: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScrapeResult:
    """One successfully scraped URL.

    Instances are created once by the task that scraped the page and are
    never mutated afterwards.
    """

    url: str
    title: str = ""
    description: str = ""
    headers: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation of this result."""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "headers": list(self.headers),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScrapeResult:
        return cls(
            url=data["url"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            headers=tuple(data.get("headers") or ()),
        )


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FetchError(Exception):
    """Raised when every fetch attempt for a URL has failed."""

    def __init__(self, url: str, cause: str, attempts: int) -> None:
        self.url = url
        self.cause = cause
        self.attempts = attempts
        super().__init__(f"failed to fetch {url} after {attempts} attempt(s): {cause}")


class ParseError(Exception):
    """Raised when fetched content cannot be interpreted as markup."""


class OutputWriteError(Exception):
    """Raised when the results file cannot be created or written."""

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot write {path}: {cause}")
