"""
Rule-based change classification.

Rules are evaluated in order and the first match wins; vocabulary is the
fallback. Each rule is a plain predicate so it can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .models import ChangeType
from .utils import count_words

GRAMMAR_KEYWORDS = (
    "a", "an", "the",
    "is", "are", "was", "were",
    "in", "on", "at", "to", "for", "with",
    "have", "has", "had",
)

HIGHLIGHT_COLORS: Dict[ChangeType, str] = {
    ChangeType.VOCABULARY: "yellow",
    ChangeType.GRAMMAR: "lightblue",
    ChangeType.STRUCTURE: "lightgreen",
}
DEFAULT_HIGHLIGHT_COLOR = "yellow"


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Callable[[str, str], bool]
    label: ChangeType


def is_insertion_or_deletion(orig: str, pol: str) -> bool:
    return orig == "" or pol == ""


def is_structural_change(orig: str, pol: str, ratio: float = 0.30) -> bool:
    orig_words = count_words(orig)
    pol_words = count_words(pol)
    if orig_words == 0:
        return pol_words > 0
    return abs(orig_words - pol_words) / orig_words > ratio


def _has_keyword(text: str, keyword: str) -> bool:
    return (
        f" {keyword} " in text
        or text.startswith(f"{keyword} ")
        or text.endswith(f" {keyword}")
    )


def is_grammar_fix(orig: str, pol: str) -> bool:
    orig_lower = orig.lower()
    pol_lower = pol.lower()
    return any(
        _has_keyword(orig_lower, kw) or _has_keyword(pol_lower, kw)
        for kw in GRAMMAR_KEYWORDS
    )


def default_rules(structure_ratio: float = 0.30) -> List[ClassificationRule]:
    return [
        ClassificationRule("insertion_or_deletion", is_insertion_or_deletion, ChangeType.STRUCTURE),
        ClassificationRule(
            "word_count_shift",
            lambda o, p: is_structural_change(o, p, structure_ratio),
            ChangeType.STRUCTURE,
        ),
        ClassificationRule("grammar_keyword", is_grammar_fix, ChangeType.GRAMMAR),
    ]


class ChangeClassifier:
    def __init__(
        self,
        rules: Optional[Sequence[ClassificationRule]] = None,
        *,
        structure_ratio: float = 0.30,
        fallback: ChangeType = ChangeType.VOCABULARY,
    ):
        self.rules = list(rules) if rules is not None else default_rules(structure_ratio)
        self.fallback = fallback

    def classify(self, original_text: str, polished_text: str) -> ChangeType:
        for rule in self.rules:
            if rule.predicate(original_text, polished_text):
                return rule.label
        return self.fallback

    @staticmethod
    def suggest_highlight_color(change_type: ChangeType) -> str:
        return HIGHLIGHT_COLORS.get(change_type, DEFAULT_HIGHLIGHT_COLOR)
