"""
Content repository abstraction.

Passes never touch the filesystem directly; they go through a
ContentRepository so that page storage can be swapped for an in-memory
fixture in tests. Concrete implementations:
- FileSystemRepository: pages stored as files under <root>/<category>/
- InMemoryRepository: pages held in a nested dict
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import os
from pathlib import Path
from typing import Iterable

from .types import PageRef


class ContentRepository(ABC):
    """Abstract page store organised as category directories of pages."""

    @abstractmethod
    def has_category(self, category: str) -> bool:
        """Return True if the category directory exists."""
        raise NotImplementedError

    @abstractmethod
    def list_pages(self, category: str) -> list[PageRef]:
        """List the article pages in a category, sorted by file name.

        Category index pages and other excluded files are not returned.
        """
        raise NotImplementedError

    @abstractmethod
    def read(self, page: PageRef) -> str:
        raise NotImplementedError

    @abstractmethod
    def write(self, page: PageRef, content: str) -> None:
        """Replace the full content of a page.

        A page whose category is "" lives at the content root.
        """
        raise NotImplementedError


class FileSystemRepository(ContentRepository):
    """Pages stored as UTF-8 files under <root>/<category>/<slug><suffix>.

    Args:
        root: Content root directory
        suffix: Page file suffix
        exclude_files: File names never listed as article pages
    """

    def __init__(
        self,
        root: Path,
        suffix: str = ".html",
        exclude_files: Iterable[str] = ("index.html",),
    ) -> None:
        self.root = Path(root)
        self.suffix = suffix
        self.exclude_files = set(exclude_files)

    def path_for(self, page: PageRef) -> Path:
        return self.root / page.category / page.filename

    def has_category(self, category: str) -> bool:
        return (self.root / category).is_dir()

    def list_pages(self, category: str) -> list[PageRef]:
        folder = self.root / category
        pages = []
        for path in sorted(folder.iterdir()):
            if not path.is_file() or not path.name.endswith(self.suffix):
                continue
            if path.name in self.exclude_files:
                continue
            slug = path.name[: -len(self.suffix)]
            pages.append(PageRef(category=category, slug=slug, suffix=self.suffix))
        return pages

    def read(self, page: PageRef) -> str:
        return self.path_for(page).read_text(encoding="utf-8")

    def write(self, page: PageRef, content: str) -> None:
        # Write to a sibling temp file first so a page is never left half-written
        path = self.path_for(page)
        tmp_path = path.with_name(f".{path.name}.tmp")
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, path)


class InMemoryRepository(ContentRepository):
    """Pages held in memory as {category: {file_name: content}}.

    Used by tests and by callers that already have page text in hand.
    """

    def __init__(
        self,
        pages: dict[str, dict[str, str]] | None = None,
        suffix: str = ".html",
        exclude_files: Iterable[str] = ("index.html",),
    ) -> None:
        self.pages: dict[str, dict[str, str]] = {
            category: dict(files) for category, files in (pages or {}).items()
        }
        self.suffix = suffix
        self.exclude_files = set(exclude_files)
        self.writes: list[PageRef] = []

    def has_category(self, category: str) -> bool:
        return category in self.pages

    def list_pages(self, category: str) -> list[PageRef]:
        refs = []
        for name in sorted(self.pages[category]):
            if not name.endswith(self.suffix) or name in self.exclude_files:
                continue
            refs.append(PageRef(category=category, slug=name[: -len(self.suffix)], suffix=self.suffix))
        return refs

    def read(self, page: PageRef) -> str:
        return self.pages[page.category][page.filename]

    def write(self, page: PageRef, content: str) -> None:
        self.pages.setdefault(page.category, {})[page.filename] = content
        self.writes.append(page)
