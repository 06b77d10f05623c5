import pytest

from polishdiff.classifier import (
    ChangeClassifier,
    ClassificationRule,
    default_rules,
    is_grammar_fix,
    is_structural_change,
)
from polishdiff.models import ChangeType


@pytest.fixture
def classifier() -> ChangeClassifier:
    return ChangeClassifier()


@pytest.mark.parametrize(
    "original, polished, expected",
    [
        ("method", "methodology", ChangeType.VOCABULARY),
        ("new method", "novel approach", ChangeType.VOCABULARY),
        ("use", "utilize", ChangeType.VOCABULARY),
        ("a apple", "an apple", ChangeType.GRAMMAR),
        ("he are", "he is", ChangeType.GRAMMAR),
        ("he have", "he has", ChangeType.GRAMMAR),
        ("hello", "hello world this is a test", ChangeType.STRUCTURE),
        ("the quick brown fox", "a swift, brown fox that moves quickly through the forest", ChangeType.STRUCTURE),
        ("something", "", ChangeType.STRUCTURE),
        ("", "something new", ChangeType.STRUCTURE),
    ],
)
def test_classify(classifier, original, polished, expected):
    assert classifier.classify(original, polished) == expected


@pytest.mark.parametrize(
    "original, polished, expected",
    [
        ("a apple", "an apple", True),
        ("he are", "he is", True),
        ("in Monday", "on Monday", True),
        ("We Are HERE", "we stay", True),
        ("method", "approach", False),
        ("the", "a", False),
        ("theory", "another", False),
    ],
)
def test_is_grammar_fix(original, polished, expected):
    assert is_grammar_fix(original, polished) is expected


@pytest.mark.parametrize(
    "original, polished, expected",
    [
        ("Hello World", "Hello World This is a test", True),
        ("Hello World This is a test", "Hello World", True),
        ("Hello World Test", "Hello World Check", False),
        ("Hello World", "Hi Earth", False),
        ("   ", "word", True),
        ("   ", "", False),
    ],
)
def test_is_structural_change(original, polished, expected):
    assert is_structural_change(original, polished) is expected


def test_structural_threshold_is_strictly_greater():
    # 10 words -> 13 words is exactly 30%
    original = " ".join(["w"] * 10)
    polished = " ".join(["w"] * 13)
    assert is_structural_change(original, polished) is False
    assert is_structural_change(original, polished + " w") is True


def test_structure_rule_wins_over_grammar(classifier):
    assert classifier.classify("the cat", "the cat sat on the mat") == ChangeType.STRUCTURE


def test_fallback_is_vocabulary(classifier):
    assert classifier.classify("method", "approach") == ChangeType.VOCABULARY


def test_custom_rule_table():
    rules = [ClassificationRule("always_grammar", lambda o, p: True, ChangeType.GRAMMAR)]
    assert ChangeClassifier(rules).classify("", "") == ChangeType.GRAMMAR


def test_structure_ratio_is_configurable():
    strict = ChangeClassifier(structure_ratio=0.1)
    assert strict.classify("one two three four five", "one two three four five six") == ChangeType.STRUCTURE
    assert ChangeClassifier().classify("one two three four five", "one two three four five six") == ChangeType.VOCABULARY


def test_default_rule_order():
    assert [r.name for r in default_rules()] == ["insertion_or_deletion", "word_count_shift", "grammar_keyword"]


@pytest.mark.parametrize(
    "change_type, color",
    [
        (ChangeType.VOCABULARY, "yellow"),
        (ChangeType.GRAMMAR, "lightblue"),
        (ChangeType.STRUCTURE, "lightgreen"),
        ("unknown", "yellow"),
    ],
)
def test_suggest_highlight_color(change_type, color):
    assert ChangeClassifier.suggest_highlight_color(change_type) == color
