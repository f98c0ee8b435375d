"""JSON persistence for a finished batch."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Union

from pagegrab.scraper.models import OutputWriteError, ScrapeResult


def write_results(results: Iterable[ScrapeResult], path: Union[str, Path]) -> Path:
    """Write *results* to *path* as a pretty-printed JSON array.

    Raises:
        OutputWriteError: If the file cannot be created or written.
    """
    target = Path(path)
    payload = [r.to_dict() for r in results]
    try:
        with target.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
    except OSError as exc:
        raise OutputWriteError(str(target), exc.strerror or str(exc)) from exc
    return target


def read_results(path: Union[str, Path]) -> List[ScrapeResult]:
    """Load a results file written by :func:`write_results`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [ScrapeResult.from_dict(item) for item in data]
