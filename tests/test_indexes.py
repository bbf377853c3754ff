"""Tests for the articles hub and category index pages."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from rich.console import Console

from site_pipeline import runner
from site_pipeline.config import AppConfig
from site_pipeline.core.repository import FileSystemRepository, InMemoryRepository
from site_pipeline.core.types import ListingEntry, PageRef
from site_pipeline.extract.extractor import extract_listing_entry


def _article(h1: str, description: str = "") -> str:
    meta = f'\n  <meta name="description" content="{description}">' if description else ""
    return (
        f"<html>\n<head>\n  <title>Page | Creatinepedia</title>{meta}\n</head>\n"
        f"<body>\n  <article>\n    <h1>{h1}</h1>\n  </article>\n</body>\n</html>\n"
    )


def _config(*dirs: str) -> AppConfig:
    cfg = AppConfig()
    cfg.content.source_dirs = list(dirs)
    return cfg


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _logger() -> logging.Logger:
    return logging.getLogger("test_indexes")


def test_listing_entry_prefers_h1_text() -> None:
    html = _article("Creatine <em>&amp;</em> Sleep", "Kidneys &amp; sleep quality.")
    assert extract_listing_entry(html, "sleep") == ListingEntry(
        slug="sleep", title="Creatine & Sleep", description="Kidneys & sleep quality."
    )


def test_listing_entry_falls_back_to_title_then_untitled() -> None:
    with_title = "<html><head><title>Loading Guide | Creatinepedia</title></head><body></body></html>"
    assert extract_listing_entry(with_title, "loading").title == "Loading Guide"
    assert extract_listing_entry("<html><body></body></html>", "bare") == ListingEntry(slug="bare", title="Untitled")


def test_hub_and_category_pages_are_written() -> None:
    alpha = _article("alpha topic", "First description.")
    beta = _article("Beta Topic")
    repo = InMemoryRepository(
        {
            "science": {"b.html": beta, "a.html": alpha, "index.html": "old index"},
            "safety": {},
        }
    )
    stats = runner.run_indexes(repo, _config("science", "safety", "dosing"), _logger(), _console())

    assert stats.errors == []
    assert stats.missing_dirs == ["dosing"]
    assert stats.written == 2
    assert repo.writes == [PageRef(category="", slug="articles"), PageRef(category="science", slug="index")]
    # Article pages are only read
    assert repo.pages["science"]["a.html"] == alpha
    assert repo.pages["science"]["b.html"] == beta

    hub = repo.pages[""]["articles.html"]
    assert '<link rel="canonical" href="https://creatinepedia.com/articles">' in hub
    assert "Science &amp; Mechanisms" in hub
    assert "2 articles" in hub
    assert "0 articles" in hub
    assert 'href="/science/a"' in hub
    assert "2 research-grade articles" in hub

    index = repo.pages["science"]["index.html"]
    assert '<link rel="canonical" href="https://creatinepedia.com/science">' in index
    assert "<title>Science &amp; Mechanisms | Creatinepedia</title>" in index
    assert index.index("<h3>alpha topic</h3>") < index.index("<h3>Beta Topic</h3>")
    assert "<p>First description.</p>" in index
    # Empty categories are listed on the hub but get no index page
    assert "index.html" not in repo.pages["safety"]


def test_hub_features_limited_articles_per_category() -> None:
    repo = InMemoryRepository({"dosing": {f"p{i}.html": _article(f"Protocol {i}") for i in range(4)}})
    cfg = _config("dosing")
    cfg.site.hub_featured_per_category = 2

    runner.run_indexes(repo, cfg, _logger(), _console())

    hub = repo.pages[""]["articles.html"]
    assert hub.count('class="article-card"') == 2
    assert repo.pages["dosing"]["index.html"].count('class="article-card"') == 4


def test_listing_text_is_escaped_once() -> None:
    repo = InMemoryRepository({"quality": {"x.html": _article("Purity &lt;99%&gt; &amp; Testing")}})
    runner.run_indexes(repo, _config("quality"), _logger(), _console())

    index = repo.pages["quality"]["index.html"]
    assert "<h3>Purity &lt;99%&gt; &amp; Testing</h3>" in index
    assert "&amp;amp;" not in index


def test_unreadable_article_is_reported() -> None:
    class FailingRepository(InMemoryRepository):
        def read(self, page):
            if page.slug == "broken":
                raise OSError("disk error")
            return super().read(page)

    repo = FailingRepository({"sports": {"broken.html": "", "rowing.html": _article("Rowing")}})
    stats = runner.run_indexes(repo, _config("sports"), _logger(), _console())

    assert stats.errors == ["sports/broken.html: disk error"]
    assert "<h3>Rowing</h3>" in repo.pages["sports"]["index.html"]


def test_rerun_on_disk_gives_same_pages(tmp_path: Path) -> None:
    (tmp_path / "comparisons").mkdir()
    (tmp_path / "comparisons" / "whey.html").write_text(_article("Creatine vs Whey"), encoding="utf-8")
    repo = FileSystemRepository(tmp_path)
    cfg = _config("comparisons")

    runner.run_indexes(repo, cfg, _logger(), _console())
    hub = (tmp_path / "articles.html").read_text(encoding="utf-8")
    index = (tmp_path / "comparisons" / "index.html").read_text(encoding="utf-8")
    runner.run_indexes(repo, cfg, _logger(), _console())

    assert (tmp_path / "articles.html").read_text(encoding="utf-8") == hub
    assert (tmp_path / "comparisons" / "index.html").read_text(encoding="utf-8") == index
    assert "1 articles" in index
