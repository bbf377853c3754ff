"""
Markup rendering for injected blocks, rebuilt pages, index pages and the sitemap.

HTML is produced from Jinja2 templates in the package's templates/
directory with autoescaping on, so plain text extracted from pages is
escaped exactly once on the way back out. The FAQPage structured-data
block is serialized with the json module.
"""

from __future__ import annotations

from functools import lru_cache
import html
import json
from pathlib import Path
import re
import textwrap
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import SiteConfig
from ..core.types import CategoryListing, ListingEntry, PageParts, PageRef, QAPair


SCHEMA_OPEN = '<script type="application/ld+json">'
SCHEMA_CLOSE = "</script>"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_faq_section(pairs: list[QAPair], title: str, css_class: str = "faq-section") -> str:
    """Render the visible FAQ block.

    Returns:
        Markup starting at "<section" and ending at "</section>", with no
        surrounding whitespace; callers indent it to fit the page
    """
    template = _environment().get_template("faq_section.html")
    return template.render(pairs=pairs, title=title, css_class=css_class).strip()


def build_faq_schema(pairs: list[QAPair]) -> dict[str, Any]:
    """Build the schema.org FAQPage object for a list of pairs, in order."""
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": pair.question,
                "acceptedAnswer": {"@type": "Answer", "text": pair.answer},
            }
            for pair in pairs
        ],
    }


def dump_schema(data: dict[str, Any]) -> str:
    # "</" cannot appear raw inside a script element; "<\/" is the same JSON string
    return json.dumps(data, indent=2, ensure_ascii=False).replace("</", "<\\/")


def render_schema_script(body: str, indent: str = "  ") -> str:
    """Wrap a JSON-LD body in a script element.

    The same layout is used for injected blocks and for blocks carried
    through the page shell, so either pass leaves the other's output alone.
    """
    return f"{indent}{SCHEMA_OPEN}\n{indent}{body}\n{indent}{SCHEMA_CLOSE}"


def render_faq_schema(pairs: list[QAPair], indent: str = "  ") -> str:
    return render_schema_script(dump_schema(build_faq_schema(pairs)), indent)


def indent_block(markup: str, indent: str) -> str:
    return textwrap.indent(markup, indent)


_TRAILING_PARTIAL_WORD_RE = re.compile(r"\s+\S*$")


def truncate_text(text: str, max_chars: int) -> str:
    """Shorten text to at most max_chars, cutting at a word boundary.

    Examples:
        >>> truncate_text("Creatine loading explained for beginners", 20)
        'Creatine loading...'
    """
    if not text or len(text) <= max_chars:
        return text
    truncated = _TRAILING_PARTIAL_WORD_RE.sub("", text[: max_chars - 3])
    return truncated + "..."


def plain_attr_text(value: str) -> str:
    """Decode entities so the template's autoescape encodes each character once."""
    return html.unescape(value).strip()


def render_article_page(parts: PageParts, page: PageRef, site: SiteConfig) -> str:
    """Rebuild an article inside the site shell.

    Args:
        parts: Fragments extracted from the existing page
        page: Identity of the page, used for canonical URL and breadcrumbs
        site: Site identity, categories and pillar pages

    Returns:
        Complete HTML document
    """
    template = _environment().get_template("article.html")
    category_name = site.categories.get(page.category, page.category)
    canonical_url = f"{site.base_url}/{page.category}/{page.slug}"
    return template.render(
        title=truncate_text(plain_attr_text(parts.title), site.title_max_chars),
        description=truncate_text(plain_attr_text(parts.description), site.description_max_chars),
        schema_scripts=[render_schema_script(block) for block in parts.schema_blocks],
        content=parts.content.rstrip(),
        category=page.category,
        category_name=category_name,
        canonical_url=canonical_url,
        pillar=site.pillar_pages.get(page.category),
        site_name=site.site_name,
    )


def featured_entries(
    categories: list[CategoryListing], per_category: int
) -> list[tuple[CategoryListing, ListingEntry]]:
    """Pick the first per_category entries of each category, in category order."""
    return [(category, entry) for category in categories for entry in category.entries[:per_category]]


def render_articles_hub(categories: list[CategoryListing], site: SiteConfig) -> str:
    """Render the hub page listing every category and a few articles from each."""
    template = _environment().get_template("articles_hub.html")
    total = sum(category.count for category in categories)
    return template.render(
        title="Articles",
        description=truncate_text(
            f"{total} research-grade articles on creatine supplementation. "
            "Every claim cited from peer-reviewed sources.",
            site.description_max_chars,
        ),
        canonical_url=f"{site.base_url}/{site.hub_slug}",
        categories=categories,
        featured=featured_entries(categories, site.hub_featured_per_category),
        total=total,
        hub_slug=site.hub_slug,
        site_name=site.site_name,
    )


def render_category_index(category: CategoryListing, site: SiteConfig) -> str:
    """Render the listing page of one category directory."""
    template = _environment().get_template("category_index.html")
    return template.render(
        title=category.name,
        description=truncate_text(
            f"{category.count} articles about {category.description.lower()}", site.description_max_chars
        ),
        canonical_url=f"{site.base_url}/{category.slug}",
        category=category,
        hub_slug=site.hub_slug,
        site_name=site.site_name,
    )


def render_sitemap(entries: list[dict[str, Any]]) -> str:
    """Render sitemap.xml from entries carrying loc, lastmod, changefreq, priority."""
    template = _environment().get_template("sitemap.xml")
    return template.render(entries=entries).strip() + "\n"


def render_sitemap_index(sitemap_url: str, lastmod: str) -> str:
    template = _environment().get_template("sitemap-index.xml")
    return template.render(sitemap_url=sitemap_url, lastmod=lastmod).strip() + "\n"
