"""80/20 level ladder + daily pivot points overlay."""

INDICATOR_NAME = "8020Indicator"
INDICATOR_DESCRIPTION = "80/20 Indicator with Pivot Points"
