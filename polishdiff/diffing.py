"""
Character diff between an original text and its polished counterpart.

Key idea:
- Run diff-match-patch (Myers O(ND)) over the two strings.
- Always apply semantic cleanup so edits land on word-sized chunks
  instead of splitting words at shared letters.
- Reduce the op stream into change pairs (delete / insert / replace).
"""

from __future__ import annotations

from typing import List

from diff_match_patch import diff_match_patch

from .models import ChangePair, DiffOp, OpKind

_OP_KINDS = {
    diff_match_patch.DIFF_EQUAL: OpKind.EQUAL,
    diff_match_patch.DIFF_DELETE: OpKind.DELETE,
    diff_match_patch.DIFF_INSERT: OpKind.INSERT,
}


class DiffEngine:
    """Thin adapter over diff-match-patch producing DiffOp / ChangePair lists."""

    def __init__(self, *, timeout_sec: float = 1.0, edit_cost: int = 4):
        self.timeout_sec = timeout_sec
        self.edit_cost = edit_cost

    def _new_dmp(self) -> diff_match_patch:
        # One instance per call: diff_match_patch keeps its settings as attributes.
        dmp = diff_match_patch()
        dmp.Diff_Timeout = self.timeout_sec
        dmp.Diff_EditCost = self.edit_cost
        return dmp

    def generate_diff(self, original: str, polished: str) -> List[DiffOp]:
        dmp = self._new_dmp()
        diffs = dmp.diff_main(original, polished, False)
        dmp.diff_cleanupSemantic(diffs)
        return [DiffOp(kind=_OP_KINDS[op], text=text) for op, text in diffs if text]

    @staticmethod
    def get_changes(ops: List[DiffOp]) -> List[ChangePair]:
        """
        Reduce ops left to right:
        - delete immediately followed by insert -> replacement
        - lone delete -> (text, "")
        - lone insert -> ("", text)
        - equal ops contribute nothing
        """
        changes: List[ChangePair] = []
        i = 0
        while i < len(ops):
            op = ops[i]
            if op.kind == OpKind.DELETE:
                nxt = ops[i + 1] if i + 1 < len(ops) else None
                if nxt is not None and nxt.kind == OpKind.INSERT:
                    changes.append(ChangePair(original_text=op.text, polished_text=nxt.text))
                    i += 2
                    continue
                changes.append(ChangePair(original_text=op.text, polished_text=""))
            elif op.kind == OpKind.INSERT:
                changes.append(ChangePair(original_text="", polished_text=op.text))
            i += 1
        return changes

    def diff_changes(self, original: str, polished: str) -> List[ChangePair]:
        return self.get_changes(self.generate_diff(original, polished))
