"""
Trace-level operations over the engine and a store:
generate-or-load, single accept/reject, batch accept/reject.

Authorization (matching the acting user to the trace owner) is the caller's
job and happens before these methods are called.
"""

from __future__ import annotations

from typing import Optional, Union

from .engine import ComparisonEngine
from .models import (
    Action,
    BatchAction,
    BatchActionResponse,
    ChangeActionResponse,
    ComparisonResult,
)
from .store import JsonComparisonStore


class ComparisonService:
    def __init__(
        self,
        store: JsonComparisonStore,
        engine: Optional[ComparisonEngine] = None,
        *,
        verbose: bool = False,
    ):
        self.store = store
        self.engine = engine or ComparisonEngine()
        self.verbose = verbose

    def _save(self, result: ComparisonResult) -> None:
        try:
            self.store.save(result)
        except OSError as e:
            # The computed result is still valid; only persistence failed.
            print(f"[WARN] Failed to save comparison {result.trace_id}: {e}")

    def get_comparison(
        self,
        trace_id: str,
        original: Optional[str] = None,
        polished: Optional[str] = None,
    ) -> ComparisonResult:
        """Return the stored comparison, generating and saving it on first request."""
        existing = self.store.get(trace_id)
        if existing is not None:
            if self.verbose:
                print(f"[INFO] Loaded stored comparison {trace_id}")
            return existing

        if original is None or polished is None:
            # Nothing stored and nothing to generate from.
            return self.store.load(trace_id)

        result = self.engine.generate_comparison(original, polished, trace_id=trace_id)
        if self.verbose:
            print(
                f"[INFO] Generated comparison {trace_id}: "
                f"{result.metadata.total_changes} changes "
                f"(vocabulary={result.statistics.vocabulary}, "
                f"grammar={result.statistics.grammar}, "
                f"structure={result.statistics.structure})"
            )
        self._save(result)
        return result

    def apply_action(self, trace_id: str, change_id: str, action: Union[Action, str]) -> ChangeActionResponse:
        result = self.store.load(trace_id)
        response = self.engine.apply_action(result, change_id, action)
        if self.verbose:
            print(f"[INFO] {trace_id}: {Action(action).value} {change_id}")
        self._save(result)
        return response

    def batch_action(self, trace_id: str, action: Union[BatchAction, str]) -> BatchActionResponse:
        result = self.store.load(trace_id)
        response = self.engine.batch_action(result, action)
        if self.verbose:
            print(f"[INFO] {trace_id}: {BatchAction(action).value} changed {response.applied_count} changes")
        self._save(result)
        return response

    def batch_accept_all(self, trace_id: str) -> BatchActionResponse:
        return self.batch_action(trace_id, BatchAction.ACCEPT_ALL)

    def batch_reject_all(self, trace_id: str) -> BatchActionResponse:
        return self.batch_action(trace_id, BatchAction.REJECT_ALL)
