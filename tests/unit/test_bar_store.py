"""Unit tests for BarStore (in-memory deque history)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pandas as pd

from level_overlay.models.bar import Bar
from level_overlay.overlay.bar_store import BarStore

T0 = datetime(2024, 3, 5, 10, tzinfo=timezone.utc)


def _make_bar(
    ts: datetime = T0,
    symbol: str = "BTC-USDT",
    timeframe: str = "1H",
    high: float = 105.0,
    low: float = 95.0,
    close: float = 102.0,
) -> Bar:
    return Bar(
        time=ts,
        symbol=symbol,
        timeframe=timeframe,
        open=Decimal("100.0"),
        high=Decimal(str(high)),
        low=Decimal(str(low)),
        close=Decimal(str(close)),
        volume=Decimal("1000.0"),
    )


# --- add() ---


class TestAdd:
    def test_add_appends(self, bar_store: BarStore) -> None:
        bar = _make_bar()
        bar_store.add(bar)
        assert list(bar_store.bars["BTC-USDT"]["1H"]) == [bar]

    def test_same_time_replaces_forming_bar(self, bar_store: BarStore) -> None:
        bar_store.add(_make_bar(close=100.0))
        bar_store.add(_make_bar(close=101.5))
        assert len(bar_store.bars["BTC-USDT"]["1H"]) == 1
        assert bar_store.get_latest("BTC-USDT", "1H").close == Decimal("101.5")

    def test_respects_max_bars(self, bar_store: BarStore) -> None:
        for i in range(7):
            bar_store.add(_make_bar(ts=T0 + timedelta(hours=i)))
        # max_bars=5
        assert len(bar_store.bars["BTC-USDT"]["1H"]) == 5

    def test_series_kept_apart(self, bar_store: BarStore) -> None:
        bar_store.add(_make_bar(timeframe="1H"))
        bar_store.add(_make_bar(timeframe="1D"))
        bar_store.add(_make_bar(symbol="ETH-USDT"))
        assert len(bar_store.bars["BTC-USDT"]["1H"]) == 1
        assert len(bar_store.bars["BTC-USDT"]["1D"]) == 1
        assert len(bar_store.bars["ETH-USDT"]["1H"]) == 1

    def test_backfill(self, bar_store: BarStore) -> None:
        bars = [_make_bar(ts=T0 + timedelta(hours=i), close=float(100 + i)) for i in range(3)]
        bar_store.backfill(bars)
        assert bar_store.get("BTC-USDT", "1H") == bars


# --- get() / get_latest() ---


class TestGet:
    def test_get_returns_last_n(self, bar_store: BarStore) -> None:
        for i in range(4):
            bar_store.add(_make_bar(ts=T0 + timedelta(hours=i), close=float(100 + i)))
        result = bar_store.get("BTC-USDT", "1H", limit=2)
        assert [float(b.close) for b in result] == [102.0, 103.0]

    def test_get_empty(self, bar_store: BarStore) -> None:
        assert bar_store.get("BTC-USDT", "1H") == []

    def test_get_latest_empty(self, bar_store: BarStore) -> None:
        assert bar_store.get_latest("BTC-USDT", "1H") is None


# --- reference price ---


class TestReferencePrice:
    def test_latest_close(self, bar_store: BarStore) -> None:
        bar_store.add(_make_bar(ts=T0, close=1200.0))
        bar_store.add(_make_bar(ts=T0 + timedelta(hours=1), close=1234.5))
        assert bar_store.get_reference_price("BTC-USDT", "1H") == 1234.5

    def test_no_bars_is_zero(self, bar_store: BarStore) -> None:
        assert bar_store.get_reference_price("BTC-USDT", "1H") == 0.0


# --- DataFrame views ---


class TestDataFrame:
    def test_columns_and_index(self, bar_store: BarStore) -> None:
        bar_store.add(_make_bar())
        df = bar_store.get_as_dataframe("BTC-USDT", "1H")
        assert list(df.columns) == ["open", "high", "low", "close", "volume"]
        assert isinstance(df.index, pd.DatetimeIndex)
        assert df["close"].iloc[-1] == 102.0

    def test_empty_frame(self, bar_store: BarStore) -> None:
        df = bar_store.get_as_dataframe("BTC-USDT", "1H")
        assert df.empty
        assert "close" in df.columns

    def test_daily_history_limited_to_lookback(self, bar_store: BarStore) -> None:
        for day in range(3):
            bar_store.add(
                _make_bar(ts=T0 + timedelta(days=day), timeframe="1D", high=110.0 + day)
            )
        df = bar_store.get_daily_history("BTC-USDT", 2, "1D")
        assert len(df) == 2
        assert list(df["high"]) == [111.0, 112.0]
