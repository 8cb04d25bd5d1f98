"""Anchor, AnchorSet and Level Pydantic models."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, PositiveInt

NO_LABEL = "-"  # label suffix that suppresses ladder labels


class LineStyle(enum.Enum):
    SOLID = "solid"
    DOT = "dot"
    DASH = "dash"


class Anchor(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    value: float


class AnchorSet(BaseModel):
    """A named group of anchors sharing color, label suffix, width and style."""

    model_config = ConfigDict(frozen=True)

    name: str
    anchors: tuple[Anchor, ...]
    color: str
    label: str = ""
    width: PositiveInt = 1
    style: LineStyle = LineStyle.SOLID

    def label_for(self, anchor: Anchor) -> str:
        if self.label == NO_LABEL:
            return ""
        return anchor.text + self.label


class Level(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float
    color: str
    label: str = ""
    width: PositiveInt = 1
    style: LineStyle = LineStyle.SOLID
