"""
Output rendering.

This package renders injected blocks, rebuilt article pages and the
sitemap, along with the hub and category index pages.
"""

from .renderer import (
    build_faq_schema,
    render_article_page,
    render_articles_hub,
    render_category_index,
    render_faq_schema,
    render_faq_section,
)
from .sitemap import write_sitemap

__all__ = [
    "build_faq_schema",
    "render_article_page",
    "render_articles_hub",
    "render_category_index",
    "render_faq_schema",
    "render_faq_section",
    "write_sitemap",
]
