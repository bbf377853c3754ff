"""
Fragment extraction from conventionally structured article markup.

Pages are self-authored and well-formed by convention, so structure is
located with regular expressions rather than a parse tree:
1. The primary content container (<article> ... </article>)
2. Secondary headings (<h2>) inside it, each with the markup that
   follows up to the nearest boundary
3. The first paragraph under each heading as the candidate answer

BeautifulSoup is only used to turn small markup fragments into plain text.
"""

from __future__ import annotations

from functools import lru_cache
import re

from bs4 import BeautifulSoup

from ..config import MarkupConfig
from ..core.types import ListingEntry, PageParts, Section


REFERENCE_HEADING_RE = re.compile(r"references|bibliography|sources|citations", re.IGNORECASE)
FAQ_HEADING_RE = re.compile(r"frequently asked|faq", re.IGNORECASE)

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_DESCRIPTION_RE = re.compile(r'<meta\s+name="description"\s+content="(.*?)"', re.IGNORECASE | re.DOTALL)
SCHEMA_BLOCK_RE = re.compile(
    r'<script\s+type="application/ld\+json">\s*(.*?)\s*</script>', re.IGNORECASE | re.DOTALL
)
_WHITESPACE_RE = re.compile(r"\s+")
_H1_RE = re.compile(r"<h1\b[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_TITLE_SUFFIX_RE = re.compile(r"\s*\|.*$", re.DOTALL)


def strip_tags(markup: str) -> str:
    """Convert a markup fragment to plain text.

    Tags are removed, entities decoded and runs of whitespace collapsed
    to a single space.

    Examples:
        >>> strip_tags("Creatine <em>Loading</em>\\n  Phase")
        'Creatine Loading Phase'
    """
    text = BeautifulSoup(markup, "html.parser").get_text()
    return _WHITESPACE_RE.sub(" ", text).strip()


@lru_cache(maxsize=None)
def _container_pattern(tag: str) -> re.Pattern[str]:
    t = re.escape(tag)
    return re.compile(rf"<{t}\b[^>]*>(.*?)</{t}>", re.IGNORECASE | re.DOTALL)


@lru_cache(maxsize=None)
def _section_pattern(
    heading_tag: str,
    container_tag: str,
    references_marker: str,
    cta_marker: str,
    faq_section_class: str,
) -> re.Pattern[str]:
    h = re.escape(heading_tag)
    # One alternation so the nearest boundary in document order always wins
    boundaries = "|".join(
        [
            rf"<{h}\b",
            re.escape(f"</{container_tag}>"),
            re.escape(references_marker),
            re.escape(cta_marker),
            re.escape(f'<section class="{faq_section_class}'),
        ]
    )
    return re.compile(
        rf"<{h}\b[^>]*>(.*?)</{h}>(.*?)(?={boundaries}|\Z)",
        re.IGNORECASE | re.DOTALL,
    )


@lru_cache(maxsize=None)
def _paragraph_pattern(tag: str) -> re.Pattern[str]:
    t = re.escape(tag)
    return re.compile(rf"<{t}\b[^>]*>(.*?)</{t}>", re.IGNORECASE | re.DOTALL)


def find_container(html: str, markup: MarkupConfig) -> re.Match[str] | None:
    """Locate the first content container in a page.

    Returns:
        The regex match, whose group 1 spans the container body and whose
        end(1) is the offset of the closing marker, or None if absent
    """
    return _container_pattern(markup.container_tag).search(html)


def extract_sections(
    html: str,
    markup: MarkupConfig | None = None,
    min_answer_chars: int = 30,
) -> list[Section] | None:
    """Extract (heading, answer) sections from a page's content container.

    Headings naming a references/citations block or an FAQ block are
    dropped. Only the first paragraph under each heading is considered,
    and it must be strictly longer than min_answer_chars once stripped.

    Args:
        html: Full page markup
        markup: Structural markers, defaults to MarkupConfig()
        min_answer_chars: Minimum answer length (exclusive)

    Returns:
        Sections in document order, or None if the page has no content container
    """
    markup = markup or MarkupConfig()
    container = find_container(html, markup)
    if container is None:
        return None
    # Boundary lookahead needs the closing marker, so scan the container with it
    content = container.group(1) + f"</{markup.container_tag}>"

    section_re = _section_pattern(
        markup.heading_tag,
        markup.container_tag,
        markup.references_marker,
        markup.cta_marker,
        markup.faq_section_class,
    )
    paragraph_re = _paragraph_pattern(markup.paragraph_tag)

    sections: list[Section] = []
    for match in section_re.finditer(content):
        heading = strip_tags(match.group(1))
        if REFERENCE_HEADING_RE.search(heading):
            continue
        if FAQ_HEADING_RE.search(heading):
            continue

        paragraph = paragraph_re.search(match.group(2))
        if not paragraph:
            continue
        answer = strip_tags(paragraph.group(1))
        if len(answer) > min_answer_chars:
            sections.append(Section(heading=heading, body=answer))

    return sections


def extract_page_parts(html: str, markup: MarkupConfig | None = None, default_title: str = "") -> PageParts:
    """Lift the title, description, JSON-LD blocks and container body out of a page.

    Missing pieces come back empty (or default_title for the title); callers
    decide whether an empty container is an error.
    """
    markup = markup or MarkupConfig()
    title_match = _TITLE_RE.search(html)
    description_match = _DESCRIPTION_RE.search(html)
    container = find_container(html, markup)

    return PageParts(
        title=title_match.group(1).strip() if title_match else default_title,
        description=description_match.group(1).strip() if description_match else "",
        schema_blocks=[block.strip() for block in SCHEMA_BLOCK_RE.findall(html)],
        content=container.group(1) if container else "",
    )


def extract_listing_entry(html: str, slug: str) -> ListingEntry:
    """Describe an article for the index pages.

    The title is the page's <h1> text, falling back to the <title> without
    any " | Site Name" suffix, then to "Untitled". Both title and description
    come back as plain text.
    """
    title = ""
    heading = _H1_RE.search(html)
    if heading:
        title = strip_tags(heading.group(1))
    if not title:
        title_match = _TITLE_RE.search(html)
        if title_match:
            title = strip_tags(_TITLE_SUFFIX_RE.sub("", title_match.group(1)))
    description_match = _DESCRIPTION_RE.search(html)
    return ListingEntry(
        slug=slug,
        title=title or "Untitled",
        description=strip_tags(description_match.group(1)) if description_match else "",
    )
