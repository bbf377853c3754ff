"""
Heading-to-question classification.

Turns a free-text section heading into a natural-language question using
an ordered list of pattern rules. The first rule whose predicate matches
wins, and the last rule always matches, so classify_heading() is total.

Rule order (see CLASSIFICATION_RULES):
1. already_question  - heading ends with "?", returned unchanged
2. interrogative     - starts with how/what/why/..., "?" appended
3. comparison        - "How does {h} compare?"
4. mechanism         - "How does {h} work?"
5. plural_concept    - "What are the {h}?"
6. relationship      - "What is the relationship between {h}?"
7. dosing            - "What is the recommended {h}?"
8. safety            - "Is {h} safe?"
9. default           - "What is the {h}?"

Rules 3-9 see the cleaned heading: leading article and any subtitle after
a colon or dash removed. Substitutions use its lower-cased form.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable


_LEADING_ARTICLE_RE = re.compile(r"^(?:the|an?)\s+", re.IGNORECASE)
_SUBTITLE_RE = re.compile(r"\s*[:–—]\s*.*$", re.DOTALL)

INTERROGATIVE_RE = re.compile(
    r"^(?:how|what|why|when|where|which|does|is|can|should|do)\s", re.IGNORECASE
)
COMPARISON_RE = re.compile(r"\bvs\b\.?|\bversus\b|\bcompared\b", re.IGNORECASE)
# Stems take inflectional endings only: "deplet" covers depletion, "work" covers
# working, but "workout" and "effectiveness" are not mechanism words
MECHANISM_RE = re.compile(
    r"\b(?:effect|impact|influence|affect|interact|deplet|resynthes|recover|adapt|respond|contribut|work)"
    r"(?:s|d|e|es|ed|ing|ion|ions|is|ize|izes|ized|y|ies|ation|ations)?\b",
    re.IGNORECASE,
)
# "Side effects" names a plural concept, not an effect verb
SIDE_EFFECTS_RE = re.compile(r"\bside effects?\b", re.IGNORECASE)
PLURAL_CONCEPT_RE = re.compile(
    r"\b(?:benefits|advantages|risks|dangers|side effects|concerns|differences|types|forms|"
    r"factors|contributions|strategies|recommendations|guidelines|considerations)\b",
    re.IGNORECASE,
)
CONJUNCTION_RE = re.compile(r"\band\b", re.IGNORECASE)
# Headings naming the dose itself; these never read as a plural concept or a relationship
DOSE_TOPIC_RE = re.compile(r"dosing|dose|protocol", re.IGNORECASE)
DOSING_RE = re.compile(r"dosing|dose|protocol|timing|loading|cycle|schedul", re.IGNORECASE)
SAFETY_RE = re.compile(r"safe|kidney|liver|hair|blood|heart|health", re.IGNORECASE)


@dataclass(frozen=True)
class ClassificationRule:
    """One step of the heading classifier.

    Attributes:
        name: Identifier used in logs and tests
        predicate: Receives the cleaned heading, returns True if the rule applies
        transform: Receives (original heading, cleaned heading), returns the question
    """
    name: str
    predicate: Callable[[str], bool]
    transform: Callable[[str, str], str]


def clean_heading(heading: str) -> str:
    """Strip a leading article and a trailing subtitle from a heading.

    Examples:
        >>> clean_heading("The Loading Phase: What the Research Says")
        'Loading Phase'
    """
    stripped = heading.strip()
    cleaned = _SUBTITLE_RE.sub("", _LEADING_ARTICLE_RE.sub("", stripped)).strip()
    # A heading that is all subtitle keeps its text rather than vanishing
    return cleaned or stripped


def _is_mechanism(cleaned: str) -> bool:
    return bool(MECHANISM_RE.search(SIDE_EFFECTS_RE.sub(" ", cleaned)))


def _is_plural_concept(cleaned: str) -> bool:
    return bool(PLURAL_CONCEPT_RE.search(cleaned)) and not DOSE_TOPIC_RE.search(cleaned)


def _is_relationship(cleaned: str) -> bool:
    return bool(CONJUNCTION_RE.search(cleaned)) and not DOSE_TOPIC_RE.search(cleaned)


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "interrogative",
        lambda c: bool(INTERROGATIVE_RE.match(c)),
        lambda original, c: f"{original}?",
    ),
    ClassificationRule(
        "comparison",
        lambda c: bool(COMPARISON_RE.search(c)),
        lambda original, c: f"How does {c.lower()} compare?",
    ),
    ClassificationRule(
        "mechanism",
        _is_mechanism,
        lambda original, c: f"How does {c.lower()} work?",
    ),
    ClassificationRule(
        "plural_concept",
        _is_plural_concept,
        lambda original, c: f"What are the {c.lower()}?",
    ),
    ClassificationRule(
        "relationship",
        _is_relationship,
        lambda original, c: f"What is the relationship between {c.lower()}?",
    ),
    ClassificationRule(
        "dosing",
        lambda c: bool(DOSING_RE.search(c)),
        lambda original, c: f"What is the recommended {c.lower()}?",
    ),
    ClassificationRule(
        "safety",
        lambda c: bool(SAFETY_RE.search(c)),
        lambda original, c: f"Is {c.lower()} safe?",
    ),
    ClassificationRule(
        "default",
        lambda c: True,
        lambda original, c: f"What is the {c.lower()}?",
    ),
)


def _first_matching_rule(cleaned: str) -> ClassificationRule:
    # The default rule always matches, so next() never runs dry
    return next(rule for rule in CLASSIFICATION_RULES if rule.predicate(cleaned))


def match_rule(heading: str) -> str:
    """Return the name of the rule that classifies a heading."""
    original = heading.strip()
    if original.endswith("?"):
        return "already_question"
    return _first_matching_rule(clean_heading(original)).name


def classify_heading(heading: str) -> str:
    """Convert a section heading into a question.

    Deterministic and total: every heading yields a string ending in "?".

    Args:
        heading: Plain-text heading

    Returns:
        The question form of the heading

    Examples:
        >>> classify_heading("Benefits of Creatine Loading")
        'What are the benefits of creatine loading?'
        >>> classify_heading("Creatine vs Beta-Alanine")
        'How does creatine vs beta-alanine compare?'
    """
    original = heading.strip()
    if original.endswith("?"):
        return original
    cleaned = clean_heading(original)
    return _first_matching_rule(cleaned).transform(original, cleaned)
