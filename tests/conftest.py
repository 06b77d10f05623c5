"""Shared fixtures for building comparison results by hand."""

from typing import List, Tuple

import pytest

from polishdiff.engine import ComparisonEngine
from polishdiff.models import ActionStatus, Change, ChangeType, ComparisonResult, Position


def make_change(
    index: int,
    original_text: str,
    polished_text: str,
    status: ActionStatus = ActionStatus.PENDING,
    change_type: ChangeType = ChangeType.VOCABULARY,
) -> Change:
    return Change(
        id=f"change_{index}",
        type=change_type,
        position=Position(start=0, end=max(1, len(polished_text)), line=1),
        polished_text=polished_text,
        original_text=original_text,
        reason="test",
        alternatives=[],
        confidence=0.9,
        impact="academic_tone",
        highlight_color="yellow",
        status=status,
    )


@pytest.fixture
def result_factory():
    """Build a ComparisonResult from (original_text, polished_text, status) triples."""

    def _build(original: str, polished: str, changes: List[Tuple[str, str, ActionStatus]]) -> ComparisonResult:
        annotations = [make_change(i, o, p, s) for i, (o, p, s) in enumerate(changes, start=1)]
        return ComparisonResult(
            trace_id="test-trace",
            original_content=original,
            polished_content=polished,
            final_content=original,
            annotations=annotations,
        )

    return _build


@pytest.fixture
def engine() -> ComparisonEngine:
    return ComparisonEngine()


@pytest.fixture
def paper_texts() -> Tuple[str, str]:
    return (
        "In this paper, we propose a new method to solve the problem.",
        "In this paper, we propose a novel methodology to address the issue.",
    )
