"""Centralised settings for PageGrab.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    fetch_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_MAX_ATTEMPTS", "3"))
    )
    fetch_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_RETRY_DELAY", "2.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "SCRAPER_USER_AGENT", "Mozilla/5.0 (compatible; PageGrab/1.0)"
        )
    )

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------
    # 0 means one worker per URL.
    scrape_max_workers: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPE_MAX_WORKERS", "0"))
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_filename: str = field(
        default_factory=lambda: os.environ.get("OUTPUT_FILENAME", "scraped_results.json")
    )


# Module-level singleton — import this everywhere:
#   from pagegrab.config import settings
settings = Settings()
