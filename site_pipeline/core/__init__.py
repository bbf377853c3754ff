"""
Core domain models and content storage.

This package contains the data types shared by every pass and the
content repository abstraction that hides page storage from them.
"""

from .types import CategoryListing, InjectionResult, ListingEntry, PageParts, PageRef, QAPair, Section
from .repository import ContentRepository, FileSystemRepository, InMemoryRepository

__all__ = [
    "PageRef",
    "Section",
    "QAPair",
    "PageParts",
    "InjectionResult",
    "ListingEntry",
    "CategoryListing",
    "ContentRepository",
    "FileSystemRepository",
    "InMemoryRepository",
]
