"""Renderer seam: pivot-line models and label placement for a chart host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from level_overlay.models.level import LineStyle
from level_overlay.models.snapshot import PivotLine

if TYPE_CHECKING:
    from level_overlay.models.pivot import PivotSet
    from level_overlay.models.snapshot import OverlaySnapshot

LABEL_RIGHT_MARGIN = 40  # px between chart right edge and ladder label


class Renderer(Protocol):
    def render(self, snapshot: OverlaySnapshot) -> None: ...


def build_pivot_lines(
    pivots: PivotSet,
    pivot_color: str,
    resistance_color: str,
    support_color: str,
) -> list[PivotLine]:
    """P, R1, R2, S1, S2 as dashed width-1 lines."""
    return [
        PivotLine(name=name, price=price, color=color, width=1, style=LineStyle.DASH)
        for name, price, color in (
            ("P", pivots.pivot, pivot_color),
            ("R1", pivots.r1, resistance_color),
            ("R2", pivots.r2, resistance_color),
            ("S1", pivots.s1, support_color),
            ("S2", pivots.s2, support_color),
        )
    ]


def label_x(right: int, label_offset: int) -> int:
    """X pixel for a ladder label, inset from the window's right edge."""
    return right - LABEL_RIGHT_MARGIN - label_offset
