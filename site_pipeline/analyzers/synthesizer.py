"""
FAQ synthesis and idempotent page rewriting.

The FAQ pass over one page runs in a fixed order:
1. Strip any FAQ block and FAQPage JSON-LD block left by an earlier run
2. Extract sections from the stripped page
3. Skip the page if fewer than min_sections were found
4. Classify the first max_pairs headings into questions
5. Insert the visible block before the container's closing marker and the
   structured-data block before the metadata section's closing marker

Because step 1 removes exactly what step 5 inserts (including the
whitespace in front of it), running the pass repeatedly on a page gives
the same bytes as running it once.
"""

from __future__ import annotations

from functools import lru_cache
import re

from ..config import FaqConfig, MarkupConfig
from ..core.types import InjectionResult, QAPair, Section
from ..extract.extractor import extract_sections, find_container
from ..output.renderer import indent_block, render_faq_schema, render_faq_section
from .classifier import classify_heading


_FAQ_SCHEMA_TYPE_RE = re.compile(r'"@type"\s*:\s*"FAQPage"')
_SCHEMA_SCRIPT_RE = re.compile(
    r'\s*<script\s+type="application/ld\+json">(.*?)</script>', re.IGNORECASE | re.DOTALL
)


@lru_cache(maxsize=None)
def _faq_section_pattern(css_class: str) -> re.Pattern[str]:
    return re.compile(
        rf'\s*<section class="{re.escape(css_class)}">.*?</section>', re.IGNORECASE | re.DOTALL
    )


def strip_existing_faq(html: str, markup: MarkupConfig | None = None) -> str:
    """Remove previously injected FAQ blocks from a page.

    The visible block is matched by its section class and the structured-data
    block by its FAQPage type; other JSON-LD blocks are kept as they are.
    Whitespace leading into a removed block is removed with it.
    """
    markup = markup or MarkupConfig()
    cleaned = _faq_section_pattern(markup.faq_section_class).sub("", html)

    def _drop_faq_schema(match: re.Match[str]) -> str:
        if _FAQ_SCHEMA_TYPE_RE.search(match.group(1)):
            return ""
        return match.group(0)

    return _SCHEMA_SCRIPT_RE.sub(_drop_faq_schema, cleaned)


def insert_before(html: str, index: int, block: str) -> str:
    """Insert a block in front of the whitespace that precedes index.

    The block must start with a newline and end without whitespace so that
    strip_existing_faq() can remove it together with that newline.
    """
    prefix = html[:index]
    trimmed = prefix.rstrip()
    gap = prefix[len(trimmed):]
    return trimmed + block + gap + html[index:]


def _line_indent(html: str, index: int) -> str:
    line_start = html.rfind("\n", 0, index) + 1
    leading = html[line_start:index]
    return leading if not leading.strip() else ""


def build_qa_pairs(sections: list[Section], max_pairs: int = 5) -> list[QAPair]:
    """Pair the first max_pairs sections with their question form, in source order."""
    return [
        QAPair(question=classify_heading(section.heading), answer=section.body)
        for section in sections[:max_pairs]
    ]


def synthesize(
    html: str,
    sections: list[Section],
    faq: FaqConfig | None = None,
    markup: MarkupConfig | None = None,
) -> InjectionResult:
    """Rewrite a page with FAQ blocks built from already-extracted sections.

    FAQ output left by an earlier run is removed before the new blocks go
    in, so feeding the result back through extract and synthesize gives
    the same page. The page is returned unchanged with status
    "too_few_sections" when fewer than faq.min_sections sections are given,
    and with "no_container" when the page lacks a content container.

    Args:
        html: Page markup, with or without earlier FAQ output
        sections: Sections extracted from that markup
        faq: Thresholds and block title
        markup: Structural markers

    Returns:
        InjectionResult whose html holds the rewritten page
    """
    faq = faq or FaqConfig()
    markup = markup or MarkupConfig()

    if len(sections) < faq.min_sections:
        return InjectionResult(html=html, status="too_few_sections", sections=sections)

    stripped = strip_existing_faq(html, markup)
    container = find_container(stripped, markup)
    if container is None:
        return InjectionResult(html=html, status="no_container", sections=sections)

    pairs = build_qa_pairs(sections, faq.max_pairs)

    close_index = container.end(1)
    section_markup = render_faq_section(pairs, faq.title, markup.faq_section_class)
    indent = _line_indent(stripped, close_index)
    rewritten = insert_before(stripped, close_index, "\n" + indent_block(section_markup, indent))

    head_index = rewritten.find(markup.head_close)
    if head_index != -1:
        rewritten = insert_before(rewritten, head_index, "\n" + render_faq_schema(pairs))

    return InjectionResult(html=rewritten, status="injected", sections=sections, pairs=pairs)


def inject_faq(
    html: str,
    faq: FaqConfig | None = None,
    markup: MarkupConfig | None = None,
) -> InjectionResult:
    """Run the full FAQ pass over one page.

    Skipped pages come back with the original, unstripped markup so that
    callers never write a page they did not inject into.

    Examples:
        >>> result = inject_faq(page_html)
        >>> if result.injected:
        ...     repository.write(page, result.html)
    """
    faq = faq or FaqConfig()
    markup = markup or MarkupConfig()

    # Extract from the stripped page so an earlier FAQ block never feeds itself
    sections = extract_sections(strip_existing_faq(html, markup), markup, faq.min_answer_chars)
    if sections is None:
        return InjectionResult(html=html, status="no_container")
    return synthesize(html, sections, faq, markup)
