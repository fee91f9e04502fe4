"""Display formatting for numbers and currency amounts"""

import math
from typing import Optional


def format_number(value: Optional[float]) -> str:
    """Format with at most 2 decimals; whole numbers drop the decimals"""
    if value is None or math.isnan(value):
        return ""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}"


def format_usd(value: Optional[float]) -> str:
    """Format as US dollars, e.g. 3000 -> "$3,000.00", -12.5 -> "-$12.50" """
    if value is None or math.isnan(value):
        return ""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
