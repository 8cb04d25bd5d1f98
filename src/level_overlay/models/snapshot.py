"""OverlaySnapshot (full renderer input) Pydantic model."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field

from level_overlay import INDICATOR_NAME
from level_overlay.models.level import Level, LineStyle
from level_overlay.models.pivot import PivotSet


class PivotLine(BaseModel):
    name: str
    price: float
    color: str
    width: int = 1
    style: LineStyle = LineStyle.DASH

    @computed_field
    @property
    def text(self) -> str:
        return f"{self.name} ({self.price:.2f})"


class OverlaySnapshot(BaseModel):
    indicator: str = INDICATOR_NAME
    levels: list[Level] = []
    pivots: PivotSet = PivotSet()
    pivot_lines: list[PivotLine] = []
    show_pivot_lines: bool
    pivot_color: str
    resistance_color: str
    support_color: str
    label_offset: int
    state: str
    reference_price: float = 0.0
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
