"""
Deterministic explanation, alternatives, confidence and impact for a change.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import Alternative, ChangeType

_VOCABULARY_ALTERNATIVES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "method": (
        ("approach", "A more general academic term for a research path."),
        ("technique", "Stresses the technical side; suits engineering papers."),
    ),
    "problem": (
        ("issue", "More formal wording."),
        ("challenge", "Emphasizes difficulty."),
    ),
    "solve": (
        ("address", "More academic wording."),
        ("tackle", "More active wording."),
    ),
    "show": (
        ("demonstrate", "More formal academic wording."),
        ("illustrate", "Emphasizes a clear presentation."),
    ),
    "use": (
        ("utilize", "More formal academic usage."),
        ("employ", "Emphasizes deliberate use."),
    ),
    "get": (
        ("obtain", "More formal wording."),
        ("acquire", "Emphasizes the process of getting something."),
    ),
    "make": (
        ("construct", "Emphasizes building something."),
        ("develop", "Emphasizes a development process."),
    ),
    "help": (
        ("facilitate", "More academic wording."),
        ("assist", "More formal wording."),
    ),
}

_FALLBACK_ALTERNATIVE = ("approach", "A general academic expression.")

_CONFIDENCE: Dict[ChangeType, float] = {
    ChangeType.VOCABULARY: 0.90,
    ChangeType.GRAMMAR: 0.85,
    ChangeType.STRUCTURE: 0.75,
}
DEFAULT_CONFIDENCE = 0.80

_IMPACT: Dict[ChangeType, str] = {
    ChangeType.VOCABULARY: "academic_tone",
    ChangeType.GRAMMAR: "grammar_correctness",
    ChangeType.STRUCTURE: "readability",
}
DEFAULT_IMPACT = "general"


class ReasonGenerator:
    def generate(self, change_type: ChangeType, original: str, polished: str) -> str:
        if change_type == ChangeType.VOCABULARY:
            if original and polished:
                return (
                    f"Uses more academic vocabulary: in academic writing '{polished}' is more "
                    f"formal and precise than '{original}' and describes the research more accurately."
                )
            return "Refines word choice for more accurate and professional academic expression."
        if change_type == ChangeType.GRAMMAR:
            return "Grammar fix: corrects the phrasing so the sentence follows academic writing conventions."
        if change_type == ChangeType.STRUCTURE:
            return "Restructures the sentence to improve readability and logical flow."
        return "Improves the wording and overall quality of the text."

    def generate_alternatives(self, change_type: ChangeType, original: str) -> List[Alternative]:
        if change_type != ChangeType.VOCABULARY:
            return []
        pairs = _VOCABULARY_ALTERNATIVES.get(original, (_FALLBACK_ALTERNATIVE,))
        return [Alternative(text=text, reason=reason) for text, reason in pairs]

    def calculate_confidence(self, change_type: ChangeType, original: str = "", polished: str = "") -> float:
        value = _CONFIDENCE.get(change_type, DEFAULT_CONFIDENCE)
        return min(1.0, max(0.0, value))

    def get_impact(self, change_type: ChangeType) -> str:
        return _IMPACT.get(change_type, DEFAULT_IMPACT)
