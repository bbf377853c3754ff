"""
Heading classification and FAQ synthesis.

This package turns extracted sections into question/answer pairs and
rewrites pages with the rendered FAQ blocks.
"""

from .classifier import CLASSIFICATION_RULES, ClassificationRule, classify_heading, clean_heading
from .synthesizer import build_qa_pairs, inject_faq, strip_existing_faq, synthesize

__all__ = [
    "ClassificationRule",
    "CLASSIFICATION_RULES",
    "classify_heading",
    "clean_heading",
    "build_qa_pairs",
    "inject_faq",
    "strip_existing_faq",
    "synthesize",
]
