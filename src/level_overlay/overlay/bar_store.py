"""In-memory bar history (deque) serving reference price and daily history."""

from __future__ import annotations

from collections import defaultdict, deque
from typing import TYPE_CHECKING

import pandas as pd
import structlog

if TYPE_CHECKING:
    from level_overlay.models.bar import Bar

logger = structlog.get_logger()

OHLCV_COLUMNS = ["open", "high", "low", "close", "volume"]


class BarStore:
    """
    In-memory bar storage using deque (FIFO, max_bars per symbol+timeframe).

    Structure: bars[symbol][timeframe] = deque([Bar, ...]), ascending by time.
    The last bar of a series is the one still forming.
    """

    def __init__(self, max_bars: int = 200) -> None:
        self.max_bars = max_bars
        self.bars: dict[str, dict[str, deque[Bar]]] = defaultdict(
            lambda: defaultdict(lambda: deque(maxlen=max_bars))
        )

    def add(self, bar: Bar) -> None:
        """Append a bar, or replace the last one when it has the same open time."""
        dq = self.bars[bar.symbol][bar.timeframe]
        if dq and dq[-1].time == bar.time:
            dq[-1] = bar
        else:
            dq.append(bar)
        logger.debug(
            "bar_added",
            symbol=bar.symbol,
            timeframe=bar.timeframe,
            time=str(bar.time),
        )

    def backfill(self, bars: list[Bar]) -> None:
        """Bulk load historical bars."""
        for bar in bars:
            self.add(bar)
        logger.info("bars_backfilled", count=len(bars))

    def get(self, symbol: str, timeframe: str, limit: int = 100) -> list[Bar]:
        """Get last N bars."""
        dq = self.bars[symbol][timeframe]
        if not dq:
            return []
        return list(dq)[-limit:]

    def get_latest(self, symbol: str, timeframe: str) -> Bar | None:
        dq = self.bars[symbol][timeframe]
        if not dq:
            return None
        return dq[-1]

    def get_as_dataframe(self, symbol: str, timeframe: str, limit: int = 100) -> pd.DataFrame:
        """
        Convert bars to a pandas DataFrame:
        columns: ['open', 'high', 'low', 'close', 'volume']
        index: DatetimeIndex
        """
        bars = self.get(symbol, timeframe, limit)
        if not bars:
            return pd.DataFrame(columns=OHLCV_COLUMNS)
        data = [
            {
                "open": float(b.open),
                "high": float(b.high),
                "low": float(b.low),
                "close": float(b.close),
                "volume": float(b.volume),
            }
            for b in bars
        ]
        return pd.DataFrame(data, index=pd.DatetimeIndex([b.time for b in bars]))

    def get_daily_history(self, symbol: str, lookback_days: int, timeframe: str = "1D") -> pd.DataFrame:
        """Last lookback_days daily bars; the final row is today's forming bar."""
        return self.get_as_dataframe(symbol, timeframe, limit=lookback_days)

    def get_reference_price(self, symbol: str, timeframe: str) -> float:
        """Close of the most recent bar, 0.0 when the series is empty."""
        latest = self.get_latest(symbol, timeframe)
        if latest is None:
            return 0.0
        return float(latest.close)
