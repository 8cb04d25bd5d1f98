"""Settings (pydantic-settings, loaded from env vars)."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from level_overlay.models.level import AnchorSet, LineStyle
from level_overlay.overlay.ladder import parse_anchors


class Settings(BaseSettings):
    # --- Ladder anchors ("-"-separated numbers) ---
    CORE_LEVELS: str = "20-80"
    SECONDARY_LEVELS: str = "33.5-46-66-93-3.5"

    # --- Price window ---
    PRICE_LOWER_OFFSET: int = 100
    PRICE_UPPER_OFFSET: int = 100
    LABEL_OFFSET: int = 10  # px, renderer only

    # --- Core ladder ---
    CORE_COLOR: str = "fuchsia"
    CORE_LABEL: str = "[Main]"  # "-" = no label
    CORE_WIDTH: int = Field(default=2, gt=0)
    CORE_STYLE: LineStyle = LineStyle.SOLID

    # --- Secondary ladder ---
    SECONDARY_COLOR: str = "aqua"
    SECONDARY_LABEL: str = "[Extra]"
    SECONDARY_WIDTH: int = Field(default=1, gt=0)
    SECONDARY_STYLE: LineStyle = LineStyle.DOT

    # --- Pivot lines ---
    SHOW_PIVOT_LINES: bool = True
    PIVOT_COLOR: str = "yellow"
    RESISTANCE_COLOR: str = "green"
    SUPPORT_COLOR: str = "red"

    # --- Host history ---
    SYMBOL: str = "BTC-USDT"
    CHART_TIMEFRAME: str = "1H"
    DAILY_TIMEFRAME: str = "1D"
    DAILY_LOOKBACK_DAYS: int = Field(default=2, ge=2)
    BAR_HISTORY_LIMIT: int = Field(default=200, gt=0)

    model_config = {"env_prefix": "", "case_sensitive": True}

    @field_validator("CORE_LEVELS", "SECONDARY_LEVELS")
    @classmethod
    def _check_anchor_list(cls, value: str) -> str:
        parse_anchors(value)
        return value

    def anchor_sets(self) -> list[AnchorSet]:
        """Core set first, then secondary."""
        return [
            AnchorSet(
                name="core",
                anchors=parse_anchors(self.CORE_LEVELS),
                color=self.CORE_COLOR,
                label=self.CORE_LABEL,
                width=self.CORE_WIDTH,
                style=self.CORE_STYLE,
            ),
            AnchorSet(
                name="secondary",
                anchors=parse_anchors(self.SECONDARY_LEVELS),
                color=self.SECONDARY_COLOR,
                label=self.SECONDARY_LABEL,
                width=self.SECONDARY_WIDTH,
                style=self.SECONDARY_STYLE,
            ),
        ]
