"""PageGrab CLI — entry-point for scraping a batch of URLs.

Usage:
    python cli/main.py --help
    python cli/main.py scrape --urls "https://a.example, https://b.example"

When ``--urls`` is omitted the command prompts for the URL list and the
output filename interactively.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pagegrab.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from pagegrab.config import settings
from pagegrab.output import write_results
from pagegrab.pipeline import run_batch, split_urls
from pagegrab.scraper.models import OutputWriteError

app = typer.Typer(
    name="pagegrab",
    help="Fetch web pages concurrently and save their title, description and headers.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for every sub-command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("scrape")
def scrape(
    urls: Optional[str] = typer.Option(
        None, "--urls", help="Comma-separated URLs to scrape. Prompted for when omitted."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help=f"Output JSON file (default: {settings.output_filename})."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", help="Maximum concurrent fetches (0 = one per URL)."
    ),
) -> None:
    """Scrape every URL and write the results to a JSON file."""
    interactive = urls is None
    if interactive:
        urls = typer.prompt(
            "Enter URLs to scrape (comma-separated)", default="", show_default=False
        )

    urls = (urls or "").strip()
    if not urls:
        typer.echo("❌ No URLs provided, exiting.")
        raise typer.Exit(code=1)

    targets = split_urls(urls)

    if output is None and interactive:
        output = typer.prompt("Enter output filename", default=settings.output_filename)
    output = (output or "").strip() or settings.output_filename

    typer.echo(f"[scrape] Fetching {len(targets)} URL(s) …")
    results = run_batch(targets, max_workers=workers)

    try:
        path = write_results(results, output)
    except OutputWriteError as exc:
        typer.echo(f"❌ Failed to write results to file: {exc}")
        raise typer.Exit(code=1)

    typer.echo(f"[scrape] {len(results)} of {len(targets)} page(s) scraped.")
    typer.echo(f"✅ Scraping completed. Results written to {path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
