"""Tests for batch orchestration over a content repository."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from rich.console import Console

from site_pipeline import runner
from site_pipeline.config import AppConfig
from site_pipeline.core.repository import FileSystemRepository, InMemoryRepository
from site_pipeline.core.types import PageRef


def _page(sections: int) -> str:
    body = "".join(
        f"\n      <h2>Topic {i}</h2>\n      <p>Paragraph {i} carries enough words to be an answer.</p>"
        for i in range(sections)
    )
    return f"<html>\n<head>\n  <title>T</title>\n</head>\n<body>\n    <article>{body}\n    </article>\n</body>\n</html>\n"


def _config(*dirs: str) -> AppConfig:
    cfg = AppConfig()
    cfg.content.source_dirs = list(dirs)
    return cfg


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _logger() -> logging.Logger:
    return logging.getLogger("test_runner")


def test_inject_faqs_counts_each_outcome() -> None:
    repo = InMemoryRepository(
        {
            "science": {
                "good.html": _page(4),
                "short.html": _page(2),
                "bare.html": "<html><body><p>No container here at all.</p></body></html>",
                "index.html": _page(5),
            },
        }
    )
    stats = runner.run_inject_faqs(repo, _config("science"), _logger(), _quiet_console())

    assert stats.written == 1
    assert stats.skipped_too_few == 1
    assert stats.skipped_no_container == 1
    assert stats.errors == []
    assert repo.writes == [PageRef(category="science", slug="good")]
    assert '<section class="faq-section">' in repo.pages["science"]["good.html"]
    assert repo.pages["science"]["short.html"] == _page(2)
    # Category index pages are never touched
    assert repo.pages["science"]["index.html"] == _page(5)


def test_missing_directory_is_skipped() -> None:
    repo = InMemoryRepository({"dosing": {"a.html": _page(3)}})
    stats = runner.run_inject_faqs(repo, _config("science", "dosing"), _logger(), _quiet_console())

    assert stats.missing_dirs == ["science"]
    assert [d.name for d in stats.directories] == ["dosing"]
    assert stats.written == 1


def test_page_errors_are_collected_and_batch_continues() -> None:
    class FailingRepository(InMemoryRepository):
        def read(self, page):
            if page.slug == "broken":
                raise OSError("disk error")
            return super().read(page)

    repo = FailingRepository({"safety": {"broken.html": _page(3), "fine.html": _page(3)}})
    stats = runner.run_inject_faqs(repo, _config("safety"), _logger(), _quiet_console())

    assert stats.errors == ["safety/broken.html: disk error"]
    assert stats.written == 1
    assert stats.directories[0].skipped == 1


def test_second_run_rewrites_identical_content() -> None:
    repo = InMemoryRepository({"sports": {"a.html": _page(5)}})
    cfg = _config("sports")
    runner.run_inject_faqs(repo, cfg, _logger(), _quiet_console())
    first = repo.pages["sports"]["a.html"]
    runner.run_inject_faqs(repo, cfg, _logger(), _quiet_console())
    assert repo.pages["sports"]["a.html"] == first
    assert first.count('<div class="faq-item">') == 5


def test_retemplate_rebuilds_pages_and_reports_missing_container() -> None:
    repo = InMemoryRepository(
        {
            "quality": {
                "forms.html": _page(3),
                "empty.html": "<html><head><title>Empty</title></head><body></body></html>",
            }
        }
    )
    stats = runner.run_retemplate(repo, _config("quality"), _logger(), _quiet_console())

    assert stats.written == 1
    assert stats.errors == ["quality/empty.html: no <article> tag found"]
    rebuilt = repo.pages["quality"]["forms.html"]
    assert '<link rel="canonical" href="https://creatinepedia.com/quality/forms">' in rebuilt
    assert "<h2>Topic 0</h2>" in rebuilt


def test_retemplate_keeps_empty_container() -> None:
    repo = InMemoryRepository(
        {"quality": {"stub.html": "<html><head><title>Stub</title></head><body><article></article></body></html>"}}
    )
    stats = runner.run_retemplate(repo, _config("quality"), _logger(), _quiet_console())

    assert stats.errors == []
    assert stats.written == 1
    assert "<title>Stub</title>" in repo.pages["quality"]["stub.html"]
    assert "<article>\n      </article>" in repo.pages["quality"]["stub.html"]


def test_file_system_repository_round_trip(tmp_path: Path) -> None:
    (tmp_path / "dosing").mkdir()
    page_path = tmp_path / "dosing" / "loading.html"
    page_path.write_text(_page(3), encoding="utf-8")
    (tmp_path / "dosing" / "index.html").write_text("index", encoding="utf-8")
    (tmp_path / "dosing" / "notes.txt").write_text("notes", encoding="utf-8")

    repo = FileSystemRepository(tmp_path)
    stats = runner.run_inject_faqs(repo, _config("dosing", "safety"), _logger(), _quiet_console())

    assert stats.written == 1
    assert stats.missing_dirs == ["safety"]
    assert '<section class="faq-section">' in page_path.read_text(encoding="utf-8")
    assert sorted(p.name for p in (tmp_path / "dosing").iterdir()) == ["index.html", "loading.html", "notes.txt"]


def test_run_sitemap_writes_files(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<html></html>", encoding="utf-8")
    (tmp_path / "safety").mkdir()
    (tmp_path / "safety" / "kidneys.html").write_text("<html></html>", encoding="utf-8")

    path = runner.run_sitemap(tmp_path, AppConfig(), _logger(), _quiet_console())

    assert path == tmp_path / "sitemap.xml"
    text = path.read_text(encoding="utf-8")
    assert "<loc>https://creatinepedia.com/safety/kidneys</loc>" in text
    assert (tmp_path / "sitemap-index.xml").exists()
