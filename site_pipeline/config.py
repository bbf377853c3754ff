"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ContentConfig: Content tree location and which directories hold articles
- MarkupConfig: Well-known markers the extractor and rewriter look for
- FaqConfig: FAQ synthesis thresholds
- SiteConfig: Site identity, categories and pillar pages for the page shell
- SitemapConfig: Sitemap output files and the priority table
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class ContentConfig:
    """Configuration for locating article pages.

    Attributes:
        root_dir: Content root holding one directory per category
        source_dirs: Category directories processed by each pass, in order
        page_suffix: File suffix of article pages
        exclude_files: File names that are never treated as articles
    """

    root_dir: str = "."
    source_dirs: list[str] = field(
        default_factory=lambda: ["science", "dosing", "sports", "safety", "comparisons", "quality"]
    )
    page_suffix: str = ".html"
    exclude_files: list[str] = field(default_factory=lambda: ["index.html"])


@dataclass
class MarkupConfig:
    """Markers that delimit the structural regions of a page.

    Attributes:
        container_tag: Tag wrapping the primary content container
        heading_tag: Secondary heading tag that segments the content
        paragraph_tag: Paragraph-level tag holding answer text
        references_marker: Opening text of a references/citation block
        cta_marker: Opening text of a promotional call-to-action block
        faq_section_class: CSS class of the injected visible FAQ block
        head_close: Closing marker of the page metadata section
    """

    container_tag: str = "article"
    heading_tag: str = "h2"
    paragraph_tag: str = "p"
    references_marker: str = '<section class="references'
    cta_marker: str = '<div class="cta-box'
    faq_section_class: str = "faq-section"
    head_close: str = "</head>"


@dataclass
class FaqConfig:
    """Configuration for FAQ synthesis.

    Attributes:
        min_sections: Pages with fewer extracted sections are skipped
        max_pairs: Maximum number of question/answer pairs per page
        min_answer_chars: Answers must be strictly longer than this
        title: Heading of the visible FAQ block
    """

    min_sections: int = 3
    max_pairs: int = 5
    min_answer_chars: int = 30
    title: str = "Frequently Asked Questions"


@dataclass
class SiteConfig:
    """Site identity used by the retemplate pass.

    Attributes:
        base_url: Canonical site origin without trailing slash
        site_name: Name shown in Open Graph metadata
        default_title: Title used when a page has no <title>
        title_max_chars: Truncation limit for the page title
        description_max_chars: Truncation limit for the meta description
        categories: Category slug to display name
        category_descriptions: Category slug to the summary shown on index pages
        category_colors: Category slug to accent color name for index pages
        pillar_pages: Category slug to {"slug", "label"} of its pillar guide
        hub_slug: File name (without suffix) of the all-categories hub page
        hub_featured_per_category: Articles per category featured on the hub
    """

    base_url: str = "https://creatinepedia.com"
    site_name: str = "Creatinepedia"
    default_title: str = "Creatinepedia"
    title_max_chars: int = 65
    description_max_chars: int = 160
    categories: dict[str, str] = field(
        default_factory=lambda: {
            "science": "Science & Mechanisms",
            "dosing": "Dosing Protocols",
            "sports": "Sport Applications",
            "safety": "Safety & Concerns",
            "comparisons": "Supplement Comparisons",
            "quality": "Product Quality",
        }
    )
    category_descriptions: dict[str, str] = field(
        default_factory=lambda: {
            "science": "How creatine works at the molecular level. ATP resynthesis, phosphocreatine, "
            "cell volumization, and more.",
            "dosing": "Evidence-based loading, maintenance, and timing protocols from peer-reviewed research.",
            "sports": "Sport-by-sport creatine application guides based on energy system demands.",
            "safety": "Clinical evidence on kidneys, liver, hair, dehydration, and long-term safety.",
            "comparisons": "Head-to-head evidence: creatine vs protein, BCAAs, beta-alanine, and more.",
            "quality": "Third-party testing, purity standards, and which forms actually work.",
        }
    )
    category_colors: dict[str, str] = field(
        default_factory=lambda: {
            "science": "sky",
            "dosing": "teal",
            "sports": "amber",
            "safety": "rose",
            "comparisons": "violet",
            "quality": "emerald",
        }
    )
    hub_slug: str = "articles"
    hub_featured_per_category: int = 3
    pillar_pages: dict[str, dict[str, str]] = field(
        default_factory=lambda: {
            "science": {"slug": "creatine-mechanisms-summary", "label": "Complete Science Guide"},
            "dosing": {"slug": "creatine-dosing-protocols-summary", "label": "Complete Dosing Guide"},
            "sports": {"slug": "creatine-for-sport-summary", "label": "Every Sport Guide"},
            "safety": {"slug": "creatine-safety-complete-guide", "label": "Complete Safety Guide"},
            "comparisons": {"slug": "creatine-supplement-hierarchy", "label": "Supplement Hierarchy Guide"},
            "quality": {"slug": "creatine-buying-guide", "label": "Complete Buying Guide"},
        }
    )


@dataclass
class SitemapConfig:
    """Configuration for sitemap generation.

    Attributes:
        output_file: Sitemap file name, written under the content root
        index_file: Sitemap index file name, written under the content root
        exclude_dirs: Directory names never scanned for pages
        priorities: File name or directory prefix to {"priority", "changefreq"};
            the "default" entry applies when nothing else matches
    """

    output_file: str = "sitemap.xml"
    index_file: str = "sitemap-index.xml"
    exclude_dirs: list[str] = field(
        default_factory=lambda: ["node_modules", "components", "templates", "dist", "scripts", ".git"]
    )
    priorities: dict[str, dict[str, Any]] = field(
        default_factory=lambda: {
            "index.html": {"priority": 1.0, "changefreq": "weekly"},
            "articles.html": {"priority": 0.9, "changefreq": "weekly"},
            "science": {"priority": 0.8, "changefreq": "monthly"},
            "dosing": {"priority": 0.8, "changefreq": "monthly"},
            "sports": {"priority": 0.7, "changefreq": "monthly"},
            "safety": {"priority": 0.8, "changefreq": "monthly"},
            "comparisons": {"priority": 0.7, "changefreq": "monthly"},
            "quality": {"priority": 0.7, "changefreq": "monthly"},
            "default": {"priority": 0.5, "changefreq": "monthly"},
        }
    )


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, written under the content root
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "site-pipeline.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    markup: MarkupConfig = field(default_factory=MarkupConfig)
    faq: FaqConfig = field(default_factory=FaqConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    sitemap: SitemapConfig = field(default_factory=SitemapConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    "content": ContentConfig,
    "markup": MarkupConfig,
    "faq": FaqConfig,
    "site": SiteConfig,
    "sitemap": SitemapConfig,
    "logging": LoggingConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig.

    Each section is updated key by key; unknown sections and unknown
    keys inside a section are ignored.
    """
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict):
            known = {k: v for k, v in value.items() if k in data[key]}
            data[key].update(known)
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {name: dict(vars(getattr(cfg, name))) for name in _SECTIONS}


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})
