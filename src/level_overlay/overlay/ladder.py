"""Level ladder: anchor offsets repeated across 100-unit price bands."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from level_overlay.models.level import Anchor, Level

if TYPE_CHECKING:
    from collections.abc import Iterable

    from level_overlay.models.level import AnchorSet

logger = structlog.get_logger()

BAND_SIZE = 100
ANCHOR_SEPARATOR = "-"


def parse_anchors(text: str) -> tuple[Anchor, ...]:
    """
    Parse a "-"-separated anchor list such as "33.5-46-66-93-3.5".

    Every token must be a finite number. A malformed token (including the
    empty token in "20--80") raises ValueError rather than being dropped.
    Surrounding whitespace is stripped, and Anchor.text (used for ladder
    labels) holds the stripped token, so " 20" is labelled "20[Main]".
    """
    anchors: list[Anchor] = []
    for raw in text.split(ANCHOR_SEPARATOR):
        token = raw.strip()
        try:
            value = float(token)
        except ValueError:
            raise ValueError(f"invalid anchor {token!r} in {text!r}") from None
        if not math.isfinite(value):
            raise ValueError(f"anchor {token!r} in {text!r} is not finite")
        anchors.append(Anchor(text=token, value=value))
    return tuple(anchors)


def price_window(reference_price: float, lower_offset: int, upper_offset: int) -> tuple[int, int]:
    """
    Return (start_price, end_price).

    start = round(reference / 100) * 100 - lower_offset, end = start + upper_offset.
    round() is half-to-even, so 1250 rounds down to 1200.
    """
    start_price = round(reference_price / BAND_SIZE) * BAND_SIZE - lower_offset
    return start_price, start_price + upper_offset


def band_prices(start_price: int, end_price: int) -> range:
    """Band prices from start to end inclusive, step 100. Empty when end < start."""
    return range(start_price, end_price + 1, BAND_SIZE)


def generate_levels(
    reference_price: float,
    lower_offset: int,
    upper_offset: int,
    anchor_sets: Iterable[AnchorSet],
) -> list[Level]:
    """
    Build every ladder level visible in the price window.

    Order is anchor-set-major, then anchor, then band price ascending.
    Duplicate anchors yield duplicate levels.
    """
    start_price, end_price = price_window(reference_price, lower_offset, upper_offset)
    bands = band_prices(start_price, end_price)

    levels: list[Level] = []
    for anchor_set in anchor_sets:
        for anchor in anchor_set.anchors:
            label = anchor_set.label_for(anchor)
            for band_price in bands:
                levels.append(
                    Level(
                        price=anchor.value + band_price,
                        color=anchor_set.color,
                        label=label,
                        width=anchor_set.width,
                        style=anchor_set.style,
                    )
                )

    logger.debug(
        "levels_generated",
        count=len(levels),
        reference_price=reference_price,
        start_price=start_price,
        end_price=end_price,
    )
    return levels
