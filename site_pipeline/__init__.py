"""
Site Pipeline - text-transform passes for a static article site.

This package rewrites hand-authored article pages in place: it injects
FAQ sections and FAQPage structured data derived from each article's own
headings, rebuilds pages inside the site shell, and writes the sitemap.

Main entry point is the CLI via the `site-pipeline` command.

Example:
    $ site-pipeline inject-faqs --root site/
"""

__all__ = ["__version__", "classify_heading", "extract_sections", "inject_faq", "synthesize"]
__version__ = "0.1.0"

from .analyzers.classifier import classify_heading
from .analyzers.synthesizer import inject_faq, synthesize
from .extract.extractor import extract_sections
