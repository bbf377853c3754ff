"""
Core data types for the site pipeline.

This module defines the values passed between pipeline stages:
- PageRef: Identity of one article page (category directory + slug)
- Section: A (heading, answer) pair pulled from a page's content container
- QAPair: A question/answer pair built from exactly one Section
- PageParts: The fragments the retemplate pass lifts out of a page
- InjectionResult: Outcome of running the FAQ pass over a single page
- ListingEntry / CategoryListing: What the index pass shows for each article and category
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PageRef:
    """Identifies one article page inside the content tree.

    Attributes:
        category: Source directory name (e.g., "science", "dosing"), or ""
            for a page at the content root
        slug: File name without the page suffix
        suffix: Page file suffix, ".html" by default
    """
    category: str
    slug: str
    suffix: str = ".html"

    @property
    def filename(self) -> str:
        return f"{self.slug}{self.suffix}"

    @property
    def key(self) -> str:
        """Relative path used in logs and error messages ("dosing/loading.html")."""
        if not self.category:
            return self.filename
        return f"{self.category}/{self.filename}"


@dataclass(frozen=True)
class Section:
    """A secondary heading and the first substantive paragraph under it.

    Both fields hold plain text with all markup removed.
    """
    heading: str
    body: str


@dataclass(frozen=True)
class QAPair:
    question: str
    answer: str


@dataclass
class PageParts:
    """Fragments extracted from a page before it is rebuilt in the site shell.

    Attributes:
        title: Contents of the <title> element
        description: Contents of the meta description, or "" if absent
        schema_blocks: Bodies of every JSON-LD script block, in document order
        content: Inner markup of the content container, or "" if absent
    """
    title: str
    description: str = ""
    schema_blocks: list[str] = field(default_factory=list)
    content: str = ""


@dataclass
class InjectionResult:
    """Outcome of the FAQ pass over a single page.

    The html field always holds the text to persist; it equals the input
    unless status is "injected".

    Attributes:
        html: Resulting page markup
        status: "injected", "no_container", or "too_few_sections"
        sections: Sections extracted from the page (empty if no container)
        pairs: QAPairs rendered into the page (empty unless injected)
    """
    html: str
    status: str
    sections: list[Section] = field(default_factory=list)
    pairs: list[QAPair] = field(default_factory=list)

    @property
    def injected(self) -> bool:
        return self.status == "injected"


@dataclass(frozen=True)
class ListingEntry:
    """One article as shown on an index page; text fields are plain text."""
    slug: str
    title: str
    description: str = ""


@dataclass
class CategoryListing:
    """A category directory and the articles found in it.

    Attributes:
        slug: Category directory name
        name: Display name
        description: One-sentence summary shown on the hub and index pages
        color: Accent color name used for the category badge
        entries: Articles sorted by title
    """
    slug: str
    name: str
    description: str = ""
    color: str = "sky"
    entries: list[ListingEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)
