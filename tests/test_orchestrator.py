"""End-to-end pipeline tests with a scripted navigator."""
import json

import pandas as pd
import pytest

from review_scraper.app import BootstrapGate, Orchestrator, RunState
from review_scraper.browser import PaginationDiscoverer
from review_scraper.errors import CorruptSessionError, ExportError, ExtractionError
from review_scraper.exporter import ReviewExporter
from review_scraper.parser import ReviewExtractor
from review_scraper.session import SessionStore
from tests.conftest import TARGET_URL, FakeNavigator, counter_page, review_page


def page_url(offset: int) -> str:
    return f"https://www.tripadvisor.com/Hotel_Review-g1-d2-Reviews-or{offset}-Seaside_Inn.html"


@pytest.fixture
def paths(tmp_path):
    return {
        "cookies": tmp_path / "cookies.json",
        "checkpoint": tmp_path / "reviewUrl.json",
        "output": tmp_path / "review.csv",
    }


@pytest.fixture
def orchestrator(paths):
    return Orchestrator(
        session_store=SessionStore(paths["cookies"]),
        discoverer=PaginationDiscoverer(checkpoint_path=paths["checkpoint"], settle_ms=0),
        extractor=ReviewExtractor(settle_ms=0),
        exporter=ReviewExporter(output_path=paths["output"]),
    )


def site_pages() -> dict[str, str]:
    """23 English reviews: the target page plus four offset pages."""
    pages = {TARGET_URL: counter_page("English (23)") + review_page(("T0", "C0"))}
    for offset in (5, 10, 15, 20):
        pages[page_url(offset)] = review_page((f"T{offset}", f"C{offset}"))
    return pages


class TestBootstrapGate:
    """Tests for first-run versus returning-run branching."""

    def test_state_is_evaluated_once(self, paths, sample_cookies):
        store = SessionStore(paths["cookies"])
        gate = BootstrapGate(store)
        assert gate.state is RunState.FIRST_RUN
        store.save(sample_cookies)
        assert gate.state is RunState.FIRST_RUN

    def test_bootstrap_saves_cookies_and_closes(self, paths, sample_cookies):
        store = SessionStore(paths["cookies"])
        navigator = FakeNavigator(cookies=sample_cookies)
        state = BootstrapGate(store).enter(navigator, TARGET_URL)

        assert state is RunState.FIRST_RUN
        assert navigator.visited == [TARGET_URL]
        assert navigator.closed == 1
        assert store.load() == sample_cookies

    def test_returning_applies_cookies_without_navigation(self, paths, sample_cookies):
        store = SessionStore(paths["cookies"])
        store.save(sample_cookies)
        navigator = FakeNavigator()
        state = BootstrapGate(store).enter(navigator, TARGET_URL)

        assert state is RunState.RETURNING
        assert navigator.applied == sample_cookies
        assert navigator.visited == []


class TestOrchestrator:
    """Tests for full runs."""

    def test_first_run_only_saves_session(self, orchestrator, paths, sample_cookies):
        navigator = FakeNavigator(pages=site_pages(), cookies=sample_cookies)
        result = orchestrator.run(TARGET_URL, navigator)

        assert result.state is RunState.FIRST_RUN
        assert result.report is None
        assert paths["cookies"].exists()
        assert not paths["checkpoint"].exists()
        assert not paths["output"].exists()

    def test_second_run_scrapes_all_pages(self, paths, sample_cookies):
        def build():
            return Orchestrator(
                session_store=SessionStore(paths["cookies"]),
                discoverer=PaginationDiscoverer(checkpoint_path=paths["checkpoint"], settle_ms=0),
                extractor=ReviewExtractor(settle_ms=0),
                exporter=ReviewExporter(output_path=paths["output"]),
            )

        build().run(TARGET_URL, FakeNavigator(pages=site_pages(), cookies=sample_cookies))

        navigator = FakeNavigator(pages=site_pages())
        result = build().run(TARGET_URL, navigator)

        assert result.state is RunState.RETURNING
        assert navigator.applied == sample_cookies
        # discovery visit, then the five review pages in offset order
        assert navigator.visited == [
            TARGET_URL,
            TARGET_URL,
            page_url(5),
            page_url(10),
            page_url(15),
            page_url(20),
        ]
        assert result.plan.page_count == 4
        assert not result.partial

        frame = pd.read_csv(paths["output"], keep_default_na=False)
        assert frame["title"].tolist() == ["T0", "T5", "T10", "T15", "T20"]
        assert frame["content"].tolist() == ["C0", "C5", "C10", "C15", "C20"]

        checkpoint = json.loads(paths["checkpoint"].read_text(encoding="utf-8"))
        assert checkpoint["pageCount"] == 4
        assert checkpoint["count"] == 20

    def test_failed_page_keeps_partial_output(self, orchestrator, paths, sample_cookies):
        SessionStore(paths["cookies"]).save(sample_cookies)
        navigator = FakeNavigator(pages=site_pages(), failing=[page_url(10)])
        result = orchestrator.run(TARGET_URL, navigator)

        assert result.partial
        assert [f.url for f in result.report.failures] == [page_url(10)]
        frame = pd.read_csv(paths["output"], keep_default_na=False)
        assert frame["title"].tolist() == ["T0", "T5", "T15", "T20"]
        assert navigator.closed >= 1

    def test_missing_counter_is_fatal(self, orchestrator, paths, sample_cookies):
        SessionStore(paths["cookies"]).save(sample_cookies)
        navigator = FakeNavigator(pages={TARGET_URL: review_page(("A", "x"))})

        with pytest.raises(ExtractionError):
            orchestrator.run(TARGET_URL, navigator)
        assert navigator.closed == 1
        assert not paths["output"].exists()

    def test_corrupt_session_is_fatal(self, orchestrator, paths):
        paths["cookies"].write_text("not json", encoding="utf-8")
        navigator = FakeNavigator(pages=site_pages())

        with pytest.raises(CorruptSessionError):
            orchestrator.run(TARGET_URL, navigator)
        assert navigator.visited == []

    def test_checkpoint_survives_failed_export(self, paths, sample_cookies):
        SessionStore(paths["cookies"]).save(sample_cookies)
        orchestrator = Orchestrator(
            session_store=SessionStore(paths["cookies"]),
            discoverer=PaginationDiscoverer(checkpoint_path=paths["checkpoint"], settle_ms=0),
            extractor=ReviewExtractor(settle_ms=0),
            exporter=ReviewExporter(output_path=paths["output"], output_format="xml"),
        )

        with pytest.raises(ExportError):
            orchestrator.run(TARGET_URL, FakeNavigator(pages=site_pages()))

        checkpoint = json.loads(paths["checkpoint"].read_text(encoding="utf-8"))
        assert checkpoint["pageCount"] == 4
        assert checkpoint["urls"] == [page_url(5), page_url(10), page_url(15), page_url(20)]
        assert not paths["output"].exists()
