"""
Errors reported to callers.

Degraded matches (a change that cannot be located or replaced) are not
errors: they are dropped where they occur.
"""

from __future__ import annotations


class ComparisonError(Exception):
    """Base class for every error raised by polishdiff."""


class TraceNotFoundError(ComparisonError, KeyError):
    def __init__(self, trace_id: str):
        super().__init__(f"No comparison stored for trace '{trace_id}'.")
        self.trace_id = trace_id

    def __str__(self) -> str:
        return self.args[0]


class ChangeNotFoundError(ComparisonError, KeyError):
    def __init__(self, change_id: str):
        super().__init__(f"Change '{change_id}' does not exist.")
        self.change_id = change_id

    def __str__(self) -> str:
        return self.args[0]


class InvalidActionError(ComparisonError, ValueError):
    pass


class InvalidTraceIdError(ComparisonError, ValueError):
    def __init__(self, trace_id: str):
        super().__init__(f"Invalid trace id: {trace_id!r}")
        self.trace_id = trace_id
