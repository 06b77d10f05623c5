"""
Locate change pairs inside the polished text.

All offsets are Python string indices, i.e. Unicode code points, so CJK
and emoji content map one character to one position.
"""

from __future__ import annotations

from typing import List

from .models import ChangePair, Located, Placement, PositionedChange, Unlocated


def line_number(text: str, position: int) -> int:
    """1-based line of `position`, counting '\\n' strictly before it."""
    return text.count("\n", 0, position) + 1


class PositionCalculator:
    """
    Walks change pairs in diff order with a monotonic cursor.

    Each search starts where the previous match ended, so a repeated
    substring always resolves to the first occurrence not yet consumed.
    """

    def locate(self, polished_text: str, changes: List[ChangePair]) -> List[Placement]:
        placements: List[Placement] = []
        search_from = 0

        for change in changes:
            if not change.polished_text:
                placements.append(Unlocated(change=change, reason="deletion"))
                continue

            start = polished_text.find(change.polished_text, search_from)
            if start < 0:
                placements.append(Unlocated(change=change, reason="not_found"))
                continue

            end = start + len(change.polished_text)
            placements.append(
                Located(
                    change=PositionedChange(
                        start=start,
                        end=end,
                        line=line_number(polished_text, start),
                        original_text=change.original_text,
                        polished_text=change.polished_text,
                    )
                )
            )
            search_from = end

        return placements

    def calculate_positions(self, polished_text: str, changes: List[ChangePair]) -> List[PositionedChange]:
        return [p.change for p in self.locate(polished_text, changes) if isinstance(p, Located)]
