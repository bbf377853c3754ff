"""
Sitemap generation for the built site.

Scans the content root for HTML pages, maps each to its clean URL and
priority, and writes sitemap.xml plus a sitemap index.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from ..config import SitemapConfig
from .renderer import render_sitemap, render_sitemap_index


@dataclass
class SitemapEntry:
    path: Path
    loc: str
    lastmod: str
    priority: float
    changefreq: str


def collect_html_files(root: Path, exclude_dirs: list[str]) -> list[Path]:
    """Return every .html file under root, skipping excluded directory names."""
    excluded = set(exclude_dirs)
    found = []
    for path in sorted(root.rglob("*.html")):
        relative_parts = path.relative_to(root).parts[:-1]
        if any(part in excluded for part in relative_parts):
            continue
        found.append(path)
    return found


def priority_for(relative_path: str, priorities: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Look up priority/changefreq for a page.

    An exact file-name key wins, then the first directory key that prefixes
    the path, then the "default" entry.

    Examples:
        >>> priority_for("dosing/loading-phase.html", cfg.priorities)["priority"]
        0.8
    """
    name = relative_path.rsplit("/", 1)[-1]
    if name in priorities:
        return priorities[name]
    for key, value in priorities.items():
        if key == "default":
            continue
        if relative_path.startswith(key + "/") or f"/{key}/" in relative_path:
            return value
    return priorities.get("default", {"priority": 0.5, "changefreq": "monthly"})


def url_for(relative_path: str, base_url: str) -> str:
    """Map a page path to its clean URL.

    Examples:
        >>> url_for("index.html", "https://example.com")
        'https://example.com/'
        >>> url_for("safety/kidneys.html", "https://example.com")
        'https://example.com/safety/kidneys'
        >>> url_for("safety/index.html", "https://example.com")
        'https://example.com/safety/'
    """
    path = relative_path[: -len(".html")] if relative_path.endswith(".html") else relative_path
    if path == "index":
        path = ""
    elif path.endswith("/index"):
        path = path[: -len("index")]
    return f"{base_url.rstrip('/')}/{path}"


def build_entries(root: Path, base_url: str, cfg: SitemapConfig) -> list[SitemapEntry]:
    """Collect sitemap entries sorted by priority (highest first), then path."""
    entries = []
    for path in collect_html_files(root, cfg.exclude_dirs):
        relative = path.relative_to(root).as_posix()
        settings = priority_for(relative, cfg.priorities)
        mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        entries.append(
            SitemapEntry(
                path=path,
                loc=url_for(relative, base_url),
                lastmod=mtime.strftime("%Y-%m-%d"),
                priority=float(settings["priority"]),
                changefreq=str(settings["changefreq"]),
            )
        )
    entries.sort(key=lambda entry: (-entry.priority, entry.path.as_posix()))
    return entries


def write_sitemap(
    root: Path,
    base_url: str,
    cfg: SitemapConfig,
    today: date | None = None,
) -> tuple[Path, list[SitemapEntry]]:
    """Write sitemap.xml and the sitemap index under root.

    Returns:
        Path of the sitemap file and the entries written to it
    """
    entries = build_entries(root, base_url, cfg)
    sitemap_path = root / cfg.output_file
    sitemap_path.write_text(
        render_sitemap(
            [
                {
                    "loc": entry.loc,
                    "lastmod": entry.lastmod,
                    "changefreq": entry.changefreq,
                    "priority": entry.priority,
                }
                for entry in entries
            ]
        ),
        encoding="utf-8",
    )

    today = today or datetime.now(timezone.utc).date()
    index_path = root / cfg.index_file
    index_path.write_text(
        render_sitemap_index(f"{base_url.rstrip('/')}/{cfg.output_file}", today.isoformat()),
        encoding="utf-8",
    )
    return sitemap_path, entries


def priority_counts(entries: list[SitemapEntry]) -> dict[str, int]:
    """Count entries per priority label, e.g. {"Priority 0.8": 12}."""
    counts = Counter(f"Priority {entry.priority:.1f}" for entry in entries)
    return dict(sorted(counts.items()))
