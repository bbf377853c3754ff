"""
Batch orchestration for the site pipeline passes.

Each pass walks the configured category directories in order and handles
every article page independently:
- FAQ pass: strip, extract, classify, synthesize, rewrite in place
- Retemplate pass: lift fragments out of each page and rebuild it in the shell
- Index pass: list every article on the hub page and on its category index page
- Sitemap pass: write sitemap.xml and sitemap-index.xml for the whole tree

Per-page failures are collected and reported at the end; a missing
category directory is skipped with a notice. Neither stops the batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .analyzers.synthesizer import inject_faq
from .config import AppConfig
from .core.repository import ContentRepository
from .core.types import CategoryListing, ListingEntry, PageRef
from .extract.extractor import extract_listing_entry, extract_page_parts, find_container
from .logging_utils import log_event
from .output.renderer import render_article_page, render_articles_hub, render_category_index
from .output.sitemap import priority_counts, write_sitemap


@dataclass
class DirectoryStats:
    """Counts for one category directory.

    Attributes:
        name: Category directory name
        pages: Article pages found
        written: Pages rewritten
    """
    name: str
    pages: int = 0
    written: int = 0

    @property
    def skipped(self) -> int:
        return self.pages - self.written


@dataclass
class BatchStats:
    """Statistics collected over one pass.

    Attributes:
        written: Pages rewritten
        skipped_no_container: Pages without a content container
        skipped_too_few: Pages with fewer sections than the FAQ threshold
        missing_dirs: Category directories that do not exist
        directories: Per-directory counts, in processing order
        errors: "<dir>/<file>: <message>" for every page that failed
    """
    written: int = 0
    skipped_no_container: int = 0
    skipped_too_few: int = 0
    missing_dirs: list[str] = field(default_factory=list)
    directories: list[DirectoryStats] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.skipped_no_container + self.skipped_too_few


def _process_pages(
    repo: ContentRepository,
    cfg: AppConfig,
    handler: Callable[[PageRef, str, BatchStats], str | None],
    stats: BatchStats,
    logger: logging.Logger,
    console: Console,
    show_progress: bool,
) -> None:
    """Walk every category directory and apply handler to each page.

    The handler returns the new page text to write, or None to leave the
    page untouched. Exceptions from reading, handling or writing a page
    are recorded in stats.errors and the walk continues.
    """
    progress = (
        Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        )
        if show_progress
        else None
    )

    if progress is not None:
        progress.start()
    try:
        for category in cfg.content.source_dirs:
            if not repo.has_category(category):
                console.print(f"  Skipping {category}/ (not found)")
                stats.missing_dirs.append(category)
                log_event(logger, "Directory missing", logging.WARNING, event="dir_missing", category=category)
                continue

            pages = repo.list_pages(category)
            dir_stats = DirectoryStats(name=category, pages=len(pages))
            task = progress.add_task(f"{category}/", total=len(pages)) if progress else None

            for page in pages:
                try:
                    new_html = handler(page, repo.read(page), stats)
                    if new_html is not None:
                        repo.write(page, new_html)
                        dir_stats.written += 1
                        stats.written += 1
                except Exception as exc:  # noqa: BLE001
                    stats.errors.append(f"{page.key}: {exc}")
                    log_event(
                        logger,
                        "Page failed",
                        logging.ERROR,
                        event="page_error",
                        page=page.key,
                        error=str(exc),
                    )
                if progress is not None and task is not None:
                    progress.advance(task, 1)

            if progress is not None and task is not None:
                progress.remove_task(task)
            stats.directories.append(dir_stats)
    finally:
        if progress is not None:
            progress.stop()


def run_inject_faqs(
    repo: ContentRepository,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    console: Console | None = None,
    show_progress: bool = False,
) -> BatchStats:
    """Inject FAQ blocks into every article page.

    Pages without a content container, or with too few qualifying
    sections, are counted as skipped and never written.

    Args:
        repo: Page storage
        cfg: Application configuration
        logger: Logger for structured events (defaults to "site_pipeline")
        console: Rich console for the terminal summary
        show_progress: Whether to display progress bars

    Returns:
        BatchStats for the pass
    """
    logger = logger or logging.getLogger("site_pipeline")
    console = console or Console()
    stats = BatchStats()

    def _handle(page: PageRef, html: str, batch: BatchStats) -> str | None:
        result = inject_faq(html, cfg.faq, cfg.markup)
        if result.injected:
            log_event(
                logger,
                f"Injected {len(result.pairs)} FAQs into {page.key}",
                logging.DEBUG,
                event="faq_injected",
                page=page.key,
                pairs=len(result.pairs),
            )
            return result.html
        if result.status == "no_container":
            batch.skipped_no_container += 1
        else:
            batch.skipped_too_few += 1
        log_event(
            logger,
            f"Skipped {page.key}",
            logging.DEBUG,
            event="page_skipped",
            page=page.key,
            reason=result.status,
            sections=len(result.sections),
        )
        return None

    console.print("Injecting FAQ sections into articles...\n")
    _process_pages(repo, cfg, _handle, stats, logger, console, show_progress)
    for dir_stats in stats.directories:
        console.print(f"  {dir_stats.name}/: {dir_stats.written} injected, {dir_stats.skipped} skipped")
    _render_errors(stats, console)
    console.print(
        f"\n[bold]Injected FAQs into {stats.written} articles[/bold] "
        f"({stats.skipped_too_few} skipped: too few sections, "
        f"{stats.skipped_no_container} skipped: no content container)"
    )
    log_event(
        logger,
        "FAQ pass complete",
        event="batch_complete",
        written=stats.written,
        skipped_too_few=stats.skipped_too_few,
        skipped_no_container=stats.skipped_no_container,
        errors=len(stats.errors),
    )
    return stats


def run_retemplate(
    repo: ContentRepository,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    console: Console | None = None,
    show_progress: bool = False,
) -> BatchStats:
    """Rebuild every article page inside the site shell.

    A page without a content container is reported as an error and left
    untouched.
    """
    logger = logger or logging.getLogger("site_pipeline")
    console = console or Console()
    stats = BatchStats()

    def _handle(page: PageRef, html: str, batch: BatchStats) -> str | None:
        if find_container(html, cfg.markup) is None:
            batch.skipped_no_container += 1
            batch.errors.append(f"{page.key}: no <{cfg.markup.container_tag}> tag found")
            log_event(
                logger,
                f"No content container in {page.key}",
                logging.WARNING,
                event="page_skipped",
                page=page.key,
                reason="no_container",
            )
            return None
        parts = extract_page_parts(html, cfg.markup, cfg.site.default_title)
        return render_article_page(parts, page, cfg.site)

    console.print("Retemplating cluster articles...\n")
    _process_pages(repo, cfg, _handle, stats, logger, console, show_progress)
    for dir_stats in stats.directories:
        console.print(f"  {dir_stats.name}/: {dir_stats.written} files")
    _render_errors(stats, console)
    console.print(f"\n[bold]Retemplated {stats.written} articles[/bold]")
    log_event(
        logger,
        "Retemplate pass complete",
        event="batch_complete",
        written=stats.written,
        errors=len(stats.errors),
    )
    return stats


def run_indexes(
    repo: ContentRepository,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    console: Console | None = None,
    show_progress: bool = False,
) -> BatchStats:
    """Write the articles hub page and one index page per category.

    Every existing category directory appears on the hub, even when empty.
    A category index page is only written when the category has articles.
    Article pages are read but never rewritten.

    Returns:
        BatchStats whose written counts the hub and index pages
    """
    logger = logger or logging.getLogger("site_pipeline")
    console = console or Console()
    stats = BatchStats()
    found: dict[str, list[ListingEntry]] = {}

    def _handle(page: PageRef, html: str, batch: BatchStats) -> str | None:
        found.setdefault(page.category, []).append(extract_listing_entry(html, page.slug))
        return None

    console.print("Generating index pages...\n")
    _process_pages(repo, cfg, _handle, stats, logger, console, show_progress)

    site = cfg.site
    categories = [
        CategoryListing(
            slug=dir_stats.name,
            name=site.categories.get(dir_stats.name, dir_stats.name),
            description=site.category_descriptions.get(dir_stats.name, ""),
            color=site.category_colors.get(dir_stats.name, "sky"),
            entries=sorted(found.get(dir_stats.name, []), key=lambda entry: entry.title.casefold()),
        )
        for dir_stats in stats.directories
    ]

    outputs = [(PageRef(category="", slug=site.hub_slug), render_articles_hub(categories, site))]
    outputs += [
        (PageRef(category=category.slug, slug="index"), render_category_index(category, site))
        for category in categories
        if category.entries
    ]
    for page, html in outputs:
        try:
            repo.write(page, html)
        except Exception as exc:  # noqa: BLE001
            stats.errors.append(f"{page.key}: {exc}")
            log_event(logger, "Page failed", logging.ERROR, event="page_error", page=page.key, error=str(exc))
            continue
        stats.written += 1
        console.print(f"  {page.key} (hub page)" if not page.category else f"  {page.key}")
        log_event(logger, f"Wrote {page.key}", logging.DEBUG, event="index_written", page=page.key)

    _render_errors(stats, console)
    console.print(f"\n[bold]Generated {stats.written} index pages[/bold]")
    log_event(
        logger,
        "Index pass complete",
        event="batch_complete",
        written=stats.written,
        categories=len(categories),
        errors=len(stats.errors),
    )
    return stats


def run_sitemap(
    root: Path,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    console: Console | None = None,
) -> Path:
    """Write the sitemap and sitemap index for the content tree.

    Returns:
        Path to the written sitemap.xml
    """
    logger = logger or logging.getLogger("site_pipeline")
    console = console or Console()

    console.print("Scanning for HTML files...")
    sitemap_path, entries = write_sitemap(root, cfg.site.base_url, cfg.sitemap)
    console.print(f"Generated: {sitemap_path}")
    console.print(f"Generated: {root / cfg.sitemap.index_file}")

    console.print("\n[bold]Sitemap summary[/bold]")
    for label, count in priority_counts(entries).items():
        console.print(f"  {label}: {count} pages")
    console.print(f"\nTotal: {len(entries)} URLs")
    log_event(
        logger,
        "Sitemap written",
        event="sitemap_written",
        path=str(sitemap_path),
        urls=len(entries),
    )
    return sitemap_path


def _render_errors(stats: BatchStats, console: Console) -> None:
    """Print collected per-page errors, if any."""
    if not stats.errors:
        return
    console.print(f"\n[bold red]Errors ({len(stats.errors)}):[/bold red]")
    for error in stats.errors:
        console.print(f"  {error}", markup=False)
