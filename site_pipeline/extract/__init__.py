"""
Fragment extraction.

This package locates the content container, secondary-heading sections
and page metadata in article markup.
"""

from .extractor import extract_listing_entry, extract_page_parts, extract_sections, find_container, strip_tags

__all__ = [
    "extract_sections",
    "extract_page_parts",
    "extract_listing_entry",
    "find_container",
    "strip_tags",
]
