"""
Comparison engine: diff -> positions -> classification -> annotated result,
plus accept/reject state and reconstruction of the final text.

The engine holds configuration only. Every call works on the values passed
in, so one engine can serve concurrent callers as long as each
ComparisonResult is mutated by one caller at a time.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from .classifier import ChangeClassifier
from .diffing import DiffEngine
from .errors import ChangeNotFoundError, InvalidActionError
from .models import (
    Action,
    ActionStatus,
    BatchAction,
    BatchActionResponse,
    Change,
    ChangeActionResponse,
    ChangeType,
    ComparisonResult,
    DeletionPolicy,
    Located,
    Metadata,
    Position,
    PositionedChange,
    Statistics,
    UnlocatedChange,
)
from .positions import PositionCalculator
from .reasons import ReasonGenerator
from .utils import count_words, new_trace_id


def reconstruct(result: ComparisonResult) -> str:
    """
    Final text for the current change statuses.

    - nothing accepted -> original
    - everything accepted -> polished
    - otherwise replace, in the original, the first occurrence of each
      accepted change's original_text with its polished_text, rightmost first.
    """
    annotations = result.annotations
    if not any(c.status == ActionStatus.ACCEPTED for c in annotations):
        return result.original_content
    if all(c.status == ActionStatus.ACCEPTED for c in annotations):
        return result.polished_content

    text = result.original_content

    accepted: List[Tuple[int, Change]] = []
    for change in annotations:
        if change.status != ActionStatus.ACCEPTED:
            continue
        idx = text.find(change.original_text)
        if idx != -1:
            accepted.append((idx, change))

    # Stable sort: ties keep annotation order.
    accepted.sort(key=lambda item: item[0], reverse=True)

    for _, change in accepted:
        idx = text.find(change.original_text)
        if idx == -1:
            continue
        text = text[:idx] + change.polished_text + text[idx + len(change.original_text):]

    return text


def _coerce_action(action: Union[Action, str]) -> Action:
    try:
        return Action(action)
    except ValueError:
        raise InvalidActionError(
            f"Unsupported action '{action}'. Expected one of: accept, reject."
        ) from None


def _find_change(result: ComparisonResult, change_id: str) -> Change:
    for change in result.annotations:
        if change.id == change_id:
            return change
    raise ChangeNotFoundError(change_id)


class ComparisonEngine:
    def __init__(
        self,
        *,
        diff_engine: Optional[DiffEngine] = None,
        position_calculator: Optional[PositionCalculator] = None,
        classifier: Optional[ChangeClassifier] = None,
        reason_generator: Optional[ReasonGenerator] = None,
        deletion_policy: DeletionPolicy = DeletionPolicy.OMIT,
    ):
        self.diff_engine = diff_engine or DiffEngine()
        self.position_calculator = position_calculator or PositionCalculator()
        self.classifier = classifier or ChangeClassifier()
        self.reason_generator = reason_generator or ReasonGenerator()
        self.deletion_policy = DeletionPolicy(deletion_policy)

    # ==================== GENERATION ====================
    def generate_comparison(
        self,
        original: str,
        polished: str,
        trace_id: Optional[str] = None,
    ) -> ComparisonResult:
        pairs = self.diff_engine.diff_changes(original, polished)
        placements = self.position_calculator.locate(polished, pairs)

        positioned = [p.change for p in placements if isinstance(p, Located)]
        annotations = self.build_annotations(positioned)

        unlocated: List[UnlocatedChange] = []
        if self.deletion_policy == DeletionPolicy.REPORT:
            unlocated = [
                UnlocatedChange(
                    original_text=p.change.original_text,
                    polished_text=p.change.polished_text,
                    reason=p.reason,
                )
                for p in placements
                if not isinstance(p, Located)
            ]

        metadata, statistics = self.calculate_stats(original, polished, annotations)

        result = ComparisonResult(
            trace_id=trace_id or new_trace_id(),
            original_content=original,
            polished_content=polished,
            final_content=original,
            annotations=annotations,
            metadata=metadata,
            statistics=statistics,
            unlocated_changes=unlocated,
        )
        result.final_content = reconstruct(result)
        return result

    def build_annotations(self, positioned: List[PositionedChange]) -> List[Change]:
        annotations: List[Change] = []
        for i, pos in enumerate(positioned, start=1):
            change_type = self.classifier.classify(pos.original_text, pos.polished_text)
            annotations.append(
                Change(
                    id=f"change_{i}",
                    type=change_type,
                    position=Position(start=pos.start, end=pos.end, line=pos.line),
                    polished_text=pos.polished_text,
                    original_text=pos.original_text,
                    reason=self.reason_generator.generate(change_type, pos.original_text, pos.polished_text),
                    alternatives=self.reason_generator.generate_alternatives(change_type, pos.original_text),
                    confidence=self.reason_generator.calculate_confidence(
                        change_type, pos.original_text, pos.polished_text
                    ),
                    impact=self.reason_generator.get_impact(change_type),
                    highlight_color=self.classifier.suggest_highlight_color(change_type),
                    status=ActionStatus.PENDING,
                )
            )
        return annotations

    @staticmethod
    def calculate_stats(original: str, polished: str, annotations: List[Change]) -> Tuple[Metadata, Statistics]:
        statistics = Statistics(
            vocabulary=sum(1 for c in annotations if c.type == ChangeType.VOCABULARY),
            grammar=sum(1 for c in annotations if c.type == ChangeType.GRAMMAR),
            structure=sum(1 for c in annotations if c.type == ChangeType.STRUCTURE),
        )

        improvement = 0.0
        if annotations:
            improvement = min(100.0, statistics.vocabulary / len(annotations) * 100)

        metadata = Metadata(
            original_word_count=count_words(original),
            polished_word_count=count_words(polished),
            total_changes=len(annotations),
            academic_score_improvement=improvement,
        )
        return metadata, statistics

    # ==================== ACTIONS ====================
    def apply_action(
        self,
        result: ComparisonResult,
        change_id: str,
        action: Union[Action, str],
    ) -> ChangeActionResponse:
        act = _coerce_action(action)
        change = _find_change(result, change_id)

        change.status = ActionStatus.ACCEPTED if act == Action.ACCEPT else ActionStatus.REJECTED
        result.final_content = reconstruct(result)

        return ChangeActionResponse(
            success=True,
            updated_content=result.final_content,
            applied_changes=[change_id],
            pending_changes=result.ids_with_status(ActionStatus.PENDING),
        )

    def _flip_pending(self, result: ComparisonResult, to: ActionStatus) -> int:
        applied = 0
        for change in result.annotations:
            if change.status == ActionStatus.PENDING:
                change.status = to
                applied += 1
        return applied

    def batch_accept_all(self, result: ComparisonResult) -> Tuple[str, int]:
        """
        Accept every pending change; returns (polished_text, number of changes flipped).

        Changes rejected earlier keep their status, but the final text becomes
        the polished text.
        """
        applied = self._flip_pending(result, ActionStatus.ACCEPTED)
        result.final_content = result.polished_content
        return result.final_content, applied

    def batch_reject_all(self, result: ComparisonResult) -> Tuple[str, int]:
        """Reject every pending change; returns (final_text, number of changes flipped)."""
        applied = self._flip_pending(result, ActionStatus.REJECTED)
        result.final_content = reconstruct(result)
        return result.final_content, applied

    def batch_action(self, result: ComparisonResult, action: Union[BatchAction, str]) -> BatchActionResponse:
        try:
            act = BatchAction(action)
        except ValueError:
            raise InvalidActionError(
                f"Unsupported batch action '{action}'. Expected one of: accept_all, reject_all."
            ) from None

        if act == BatchAction.ACCEPT_ALL:
            final_text, applied = self.batch_accept_all(result)
        else:
            final_text, applied = self.batch_reject_all(result)
        return BatchActionResponse(success=True, updated_content=final_text, applied_count=applied)

    @staticmethod
    def reconstruct(result: ComparisonResult) -> str:
        return reconstruct(result)
