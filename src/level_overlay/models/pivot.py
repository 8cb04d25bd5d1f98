"""PivotSet (P, R1, R2, S1, S2) Pydantic model."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class PivotSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    pivot: float = 0.0
    r1: float = 0.0
    r2: float = 0.0
    s1: float = 0.0
    s2: float = 0.0
    last_calculation_date: date = date.min
