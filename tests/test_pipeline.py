"""Tests for the concurrent pipeline: scrape task, aggregator, orchestrator.

``respx`` mocks are active across the worker threads because they patch the
httpx transport globally; ``time.sleep`` is patched inside the fetcher so
retries do not slow the suite down.
"""

from __future__ import annotations

import threading
import time
from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx

from pagegrab.pipeline.aggregator import AggregatorClosedError, ResultAggregator
from pagegrab.pipeline.orchestrator import run_batch, split_urls
from pagegrab.pipeline.task import scrape_page
from pagegrab.scraper.models import ParseError, ScrapeResult


def _page(title: str, header: str) -> str:
    return (
        f"<html><head><title>{title}</title>"
        f'<meta name="description" content="About {title}"></head>'
        f"<body><h1>{header}</h1></body></html>"
    )


@pytest.fixture
def no_sleep():
    with patch("pagegrab.scraper.fetcher.time.sleep") as mock_sleep:
        yield mock_sleep


# ---------------------------------------------------------------------------
# scrape_page
# ---------------------------------------------------------------------------

class TestScrapePage:
    def test_success_emits_result_once(self, no_sleep) -> None:
        sink = MagicMock()
        with respx.mock:
            respx.get("https://one.example/").mock(
                return_value=httpx.Response(200, text=_page("One", "Heading"))
            )
            result = scrape_page("  https://one.example/  ", sink)

        assert result == ScrapeResult(
            url="https://one.example/",
            title="One",
            description="About One",
            headers=("Heading",),
        )
        sink.assert_called_once_with(result)

    def test_exhausted_fetch_is_skipped(self, no_sleep, caplog) -> None:
        sink = MagicMock()
        with respx.mock:
            route = respx.get("https://down.example/").mock(
                return_value=httpx.Response(500)
            )
            result = scrape_page("https://down.example/", sink)

        assert result is None
        assert route.call_count == 3
        assert no_sleep.call_count == 2
        sink.assert_not_called()
        assert any("Skipping https://down.example/" in r.getMessage() for r in caplog.records)

    def test_recovery_on_second_attempt_produces_result(self, no_sleep) -> None:
        sink = MagicMock()
        with respx.mock:
            respx.get("https://flaky.example/").mock(
                side_effect=[httpx.Response(502), httpx.Response(200, text=_page("F", "H"))]
            )
            result = scrape_page("https://flaky.example/", sink)

        assert result is not None
        sink.assert_called_once()

    def test_parse_error_is_skipped(self, no_sleep) -> None:
        sink = MagicMock()
        with respx.mock:
            respx.get("https://weird.example/").mock(
                return_value=httpx.Response(200, text="<html></html>")
            )
            with patch(
                "pagegrab.pipeline.task.extract_result",
                side_effect=ParseError("unparseable"),
            ):
                result = scrape_page("https://weird.example/", sink)

        assert result is None
        sink.assert_not_called()

    def test_malformed_url_is_skipped(self, no_sleep, caplog) -> None:
        sink = MagicMock()
        result = scrape_page("http://[::1/", sink)

        assert result is None
        sink.assert_not_called()
        assert any("Skipping http://[::1/" in r.getMessage() for r in caplog.records)

    def test_blank_url_is_skipped_without_fetching(self) -> None:
        with patch("pagegrab.pipeline.task.fetch_url") as mock_fetch:
            assert scrape_page("   ") is None
        mock_fetch.assert_not_called()


# ---------------------------------------------------------------------------
# ResultAggregator
# ---------------------------------------------------------------------------

class TestResultAggregator:
    def test_collects_concurrent_inserts(self) -> None:
        aggregator = ResultAggregator()
        barrier = threading.Barrier(8)

        def produce(i: int) -> None:
            barrier.wait()
            for j in range(50):
                aggregator.add(ScrapeResult(url=f"https://{i}.example/{j}"))

        threads = [threading.Thread(target=produce, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        aggregator.close()
        results = aggregator.results()
        assert len(results) == 400
        assert len({r.url for r in results}) == 400

    def test_results_before_close_raises(self) -> None:
        aggregator = ResultAggregator()
        aggregator.add(ScrapeResult(url="https://a.example/"))
        with pytest.raises(AggregatorClosedError):
            aggregator.results()

    def test_add_after_close_raises(self) -> None:
        aggregator = ResultAggregator()
        aggregator.close()
        with pytest.raises(AggregatorClosedError):
            aggregator.add(ScrapeResult(url="https://late.example/"))

    def test_close_twice_raises(self) -> None:
        aggregator = ResultAggregator()
        aggregator.close()
        assert aggregator.closed
        with pytest.raises(AggregatorClosedError):
            aggregator.close()

    def test_results_returns_a_copy(self) -> None:
        aggregator = ResultAggregator()
        aggregator.add(ScrapeResult(url="https://a.example/"))
        aggregator.close()
        aggregator.results().clear()
        assert len(aggregator.results()) == 1


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class TestSplitUrls:
    def test_strips_segments(self) -> None:
        assert split_urls("https://a.example/ ,  https://b.example/") == [
            "https://a.example/",
            "https://b.example/",
        ]

    def test_drops_empty_segments(self) -> None:
        assert split_urls("https://a.example/,, ,") == ["https://a.example/"]

    def test_empty_input(self) -> None:
        assert split_urls("   ") == []


class TestRunBatch:
    def _mock_sites(self) -> None:
        respx.get("https://ok1.example/").mock(
            return_value=httpx.Response(200, text=_page("Ok1", "First"))
        )
        respx.get("https://ok2.example/").mock(
            return_value=httpx.Response(200, text=_page("Ok2", "Second"))
        )
        respx.get("https://bad.example/").mock(return_value=httpx.Response(404))

    def test_partial_failure_keeps_successes(self, no_sleep) -> None:
        with respx.mock:
            self._mock_sites()
            results = run_batch(
                ["https://ok1.example/", " https://bad.example/", "https://ok2.example/ "]
            )

        assert len(results) == 2
        assert {r.url for r in results} == {"https://ok1.example/", "https://ok2.example/"}

    def test_repeated_runs_yield_equal_sets(self, no_sleep) -> None:
        urls = ["https://ok1.example/", "https://ok2.example/", "https://bad.example/"]
        with respx.mock:
            self._mock_sites()
            first = run_batch(urls)
            second = run_batch(list(reversed(urls)))

        assert set(first) == set(second)

    def test_blank_urls_are_not_dispatched(self) -> None:
        with patch("pagegrab.pipeline.orchestrator.scrape_page") as mock_task:
            results = run_batch(["", "   "])

        assert results == []
        mock_task.assert_not_called()

    def test_unexpected_task_error_does_not_abort_batch(self) -> None:
        def fake_task(url, sink):
            if "boom" in url:
                raise RuntimeError("unexpected")
            result = ScrapeResult(url=url)
            sink(result)
            return result

        with patch("pagegrab.pipeline.orchestrator.scrape_page", side_effect=fake_task):
            results = run_batch(["https://boom.example/", "https://fine.example/"])

        assert [r.url for r in results] == ["https://fine.example/"]

    def test_bounded_pool_limits_concurrency(self) -> None:
        lock = threading.Lock()
        running = 0
        peak = 0

        def fake_task(url, sink):
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            time.sleep(0.02)
            with lock:
                running -= 1
            sink(ScrapeResult(url=url))

        urls = [f"https://{i}.example/" for i in range(8)]
        with patch("pagegrab.pipeline.orchestrator.scrape_page", side_effect=fake_task):
            results = run_batch(urls, max_workers=2)

        assert len(results) == 8
        assert peak <= 2

    def test_default_pool_runs_one_worker_per_url(self, monkeypatch) -> None:
        monkeypatch.setattr("pagegrab.pipeline.orchestrator.settings.scrape_max_workers", 0)
        started = threading.Barrier(4, timeout=5)

        def fake_task(url, sink):
            # Only passes if all four tasks run at the same time.
            started.wait()
            sink(ScrapeResult(url=url))

        urls = [f"https://{i}.example/" for i in range(4)]
        with patch("pagegrab.pipeline.orchestrator.scrape_page", side_effect=fake_task):
            results = run_batch(urls)

        assert len(results) == 4
