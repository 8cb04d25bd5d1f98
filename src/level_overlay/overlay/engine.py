"""Update orchestrator: ladder refresh every update, pivots on UTC day change."""

from __future__ import annotations

import enum
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

import structlog

from level_overlay import INDICATOR_DESCRIPTION, INDICATOR_NAME
from level_overlay.models.pivot import PivotSet
from level_overlay.models.snapshot import OverlaySnapshot
from level_overlay.overlay.bar_store import BarStore
from level_overlay.overlay.ladder import generate_levels
from level_overlay.overlay.pivots import is_new_day, maybe_recompute_pivots, utc_date
from level_overlay.overlay.render import build_pivot_lines

if TYPE_CHECKING:
    from collections.abc import Callable

    from level_overlay.config import Settings
    from level_overlay.models.level import Level
    from level_overlay.overlay.render import Renderer

logger = structlog.get_logger()


class OverlayState(enum.Enum):
    AWAITING_FIRST_DAY = "awaiting_first_day"
    READY = "ready"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LevelOverlay:
    """
    Owns the level list and PivotSet for one chart instance.

    Host calls on_update() synchronously for every price/bar event:
    1. regenerate the ladder around the latest close
    2. if the UTC date moved past last_calculation_date, recompute pivots
       from the previous daily bar (AWAITING_FIRST_DAY -> READY on success)
    3. publish an OverlaySnapshot to the renderer
    """

    def __init__(
        self,
        settings: Settings,
        bar_store: BarStore | None = None,
        renderer: Renderer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        # Build the store if not injected
        if bar_store is None:
            bar_store = BarStore(max_bars=settings.BAR_HISTORY_LIMIT)
        self.bar_store = bar_store
        self.renderer = renderer
        self.clock = clock or _utc_now
        self.anchor_sets = settings.anchor_sets()
        self.reset()
        logger.info(
            "overlay_initialized",
            name=INDICATOR_NAME,
            description=INDICATOR_DESCRIPTION,
            symbol=settings.SYMBOL,
        )

    def reset(self) -> None:
        """Forget computed levels and pivots (host init / input change)."""
        self.state = OverlayState.AWAITING_FIRST_DAY
        self.levels: list[Level] = []
        self.pivots = PivotSet()
        self.last_calculation_date = date.min
        self.snapshot: OverlaySnapshot | None = None

    def _set_state(self, new_state: OverlayState) -> None:
        """Update state with logging."""
        old = self.state
        self.state = new_state
        logger.info("state_transition", old=old.value, new=new_state.value)

    def on_update(self) -> OverlaySnapshot:
        """Run one update cycle. Never raises; on failure the previous snapshot is returned."""
        try:
            snapshot = self._update()
        except Exception:
            logger.exception("overlay_update_error", symbol=self.settings.SYMBOL)
            if self.snapshot is None:
                self.snapshot = self._build_snapshot(reference_price=0.0)
            return self.snapshot

        self.snapshot = snapshot
        if self.renderer is not None:
            try:
                self.renderer.render(snapshot)
            except Exception:
                logger.exception("render_error", symbol=self.settings.SYMBOL)
        return snapshot

    def _update(self) -> OverlaySnapshot:
        settings = self.settings
        reference_price = self.bar_store.get_reference_price(
            settings.SYMBOL, settings.CHART_TIMEFRAME
        )
        levels = generate_levels(
            reference_price,
            settings.PRICE_LOWER_OFFSET,
            settings.PRICE_UPPER_OFFSET,
            self.anchor_sets,
        )

        try:
            self._update_pivots()
        except Exception:
            logger.exception("pivot_update_error", symbol=settings.SYMBOL)

        self.levels = levels
        return self._build_snapshot(reference_price)

    def _update_pivots(self) -> None:
        """Recompute pivots on UTC day change; keeps the previous PivotSet otherwise."""
        settings = self.settings
        current_date = utc_date(self.clock())
        if not is_new_day(current_date, self.last_calculation_date):
            return
        daily = self.bar_store.get_daily_history(
            settings.SYMBOL, settings.DAILY_LOOKBACK_DAYS, settings.DAILY_TIMEFRAME
        )
        result = maybe_recompute_pivots(daily, current_date, self.last_calculation_date)
        if result is not None:
            self.pivots, self.last_calculation_date = result
            if self.state is OverlayState.AWAITING_FIRST_DAY:
                self._set_state(OverlayState.READY)

    def _build_snapshot(self, reference_price: float) -> OverlaySnapshot:
        settings = self.settings
        pivot_lines = []
        if settings.SHOW_PIVOT_LINES:
            pivot_lines = build_pivot_lines(
                self.pivots,
                settings.PIVOT_COLOR,
                settings.RESISTANCE_COLOR,
                settings.SUPPORT_COLOR,
            )
        return OverlaySnapshot(
            levels=self.levels,
            pivots=self.pivots,
            pivot_lines=pivot_lines,
            show_pivot_lines=settings.SHOW_PIVOT_LINES,
            pivot_color=settings.PIVOT_COLOR,
            resistance_color=settings.RESISTANCE_COLOR,
            support_color=settings.SUPPORT_COLOR,
            label_offset=settings.LABEL_OFFSET,
            state=self.state.value,
            reference_price=reference_price,
        )
