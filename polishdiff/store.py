"""
JSON-file persistence for comparison results, one file per trace.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import InvalidTraceIdError, TraceNotFoundError
from .models import ActionStatus, ComparisonResult

_SAFE_TRACE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class StoredComparison(BaseModel):
    """On-disk record: the result plus the decision lists kept next to it."""
    result: ComparisonResult
    changes_count: int = 0
    accepted_changes: List[str] = Field(default_factory=list)
    rejected_changes: List[str] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, result: ComparisonResult) -> "StoredComparison":
        return cls(
            result=result,
            changes_count=result.metadata.total_changes,
            accepted_changes=result.ids_with_status(ActionStatus.ACCEPTED),
            rejected_changes=result.ids_with_status(ActionStatus.REJECTED),
        )


class JsonComparisonStore:
    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, trace_id: str) -> Path:
        if not _SAFE_TRACE_ID.match(trace_id):
            raise InvalidTraceIdError(trace_id)
        return self.directory / f"{trace_id}.json"

    def exists(self, trace_id: str) -> bool:
        return self._path(trace_id).is_file()

    def save(self, result: ComparisonResult) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(result.trace_id)
        record = StoredComparison.from_result(result)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)
        return path

    def load_record(self, trace_id: str) -> StoredComparison:
        path = self._path(trace_id)
        if not path.is_file():
            raise TraceNotFoundError(trace_id)
        return StoredComparison.model_validate_json(path.read_text(encoding="utf-8"))

    def load(self, trace_id: str) -> ComparisonResult:
        return self.load_record(trace_id).result

    def get(self, trace_id: str) -> Optional[ComparisonResult]:
        try:
            return self.load(trace_id)
        except TraceNotFoundError:
            return None

    def list_trace_ids(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))
