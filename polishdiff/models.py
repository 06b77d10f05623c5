"""
Data models: diff values, annotated changes and the comparison result.

Internal pipeline values (diff ops, change pairs, located changes) are plain
dataclasses. Everything that is persisted or handed to callers is a Pydantic
model so it round-trips through JSON unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Literal, Union

from pydantic import BaseModel, Field


class ChangeType(str, enum.Enum):
    VOCABULARY = "vocabulary"
    GRAMMAR = "grammar"
    STRUCTURE = "structure"


class ActionStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Action(str, enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class BatchAction(str, enum.Enum):
    ACCEPT_ALL = "accept_all"
    REJECT_ALL = "reject_all"


class DeletionPolicy(str, enum.Enum):
    """What happens to change pairs that have no location in the polished text."""
    OMIT = "omit"
    REPORT = "report"


class OpKind(str, enum.Enum):
    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class DiffOp:
    kind: OpKind
    text: str


@dataclass(frozen=True)
class ChangePair:
    """A delete, insert or replace extracted from the op stream."""
    original_text: str
    polished_text: str


@dataclass(frozen=True)
class PositionedChange:
    """A change pair located in the polished text (code point offsets, [start, end))."""
    start: int
    end: int
    line: int
    original_text: str
    polished_text: str


@dataclass(frozen=True)
class Located:
    change: PositionedChange


@dataclass(frozen=True)
class Unlocated:
    change: ChangePair
    reason: Literal["deletion", "not_found"]


Placement = Union[Located, Unlocated]


class Position(BaseModel):
    start: int = Field(..., ge=0, description="Code point offset into polished_content (inclusive).")
    end: int = Field(..., ge=0, description="Code point offset into polished_content (exclusive).")
    line: int = Field(..., ge=1, description="1-based line number of start.")


class Alternative(BaseModel):
    text: str
    reason: str


class Change(BaseModel):
    """One annotated change, positioned in the polished text."""
    id: str
    type: ChangeType
    position: Position
    polished_text: str
    original_text: str
    reason: str
    alternatives: List[Alternative] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    impact: str
    highlight_color: str
    status: ActionStatus = ActionStatus.PENDING


class UnlocatedChange(BaseModel):
    original_text: str
    polished_text: str
    reason: Literal["deletion", "not_found"]


class Metadata(BaseModel):
    original_word_count: int = 0
    polished_word_count: int = 0
    total_changes: int = 0
    academic_score_improvement: float = 0.0


class Statistics(BaseModel):
    vocabulary: int = 0
    grammar: int = 0
    structure: int = 0


class ComparisonResult(BaseModel):
    trace_id: str
    original_content: str
    polished_content: str
    final_content: str
    annotations: List[Change] = Field(default_factory=list)
    metadata: Metadata = Field(default_factory=Metadata)
    statistics: Statistics = Field(default_factory=Statistics)
    unlocated_changes: List[UnlocatedChange] = Field(default_factory=list)

    def ids_with_status(self, status: ActionStatus) -> List[str]:
        return [c.id for c in self.annotations if c.status == status]


class ChangeActionResponse(BaseModel):
    success: bool = True
    updated_content: str
    applied_changes: List[str] = Field(default_factory=list)
    pending_changes: List[str] = Field(default_factory=list)


class BatchActionResponse(BaseModel):
    success: bool = True
    updated_content: str
    applied_count: int = 0
