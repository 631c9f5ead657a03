"""Number formatting helpers used when displaying prices, volumes and totals."""

from __future__ import annotations

import math
from decimal import Decimal

HUMAN_THRESHOLDS = (
    "Thousand",
    "Million",
    "Billion",
    "Trillion",
    "Quadrillion",
    "Quintillion",
    "Sextillion",
    "Septillion",
    "Octillion",
    "Nonillion",
    "Decillion",
)


def _plain_decimal(value: float) -> str:
    """Shortest exact decimal form of a non-negative float, without exponent."""
    text = format(Decimal(repr(value)).normalize(), "f")
    return text


def commaf(value: float) -> str:
    """Format a float with comma thousands separators and all significant decimals."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Inf" if value < 0 else "+Inf"
    sign = ""
    if value < 0:
        sign = "-"
        value = -value
    whole, dot, fraction = _plain_decimal(value).partition(".")
    negative_zero = whole.startswith("-")
    digits = whole.lstrip("-")
    grouped = f"{int(digits):,}"
    if negative_zero:
        grouped = "-" + grouped
    return sign + grouped + (dot + fraction if dot else "")


def _round_half_up(value: float, places: int) -> float:
    sign = -1.0 if value < 0 else 1.0
    value = abs(value)
    precision = math.pow(10, places)
    digit = value * precision
    fraction = digit - math.trunc(digit)
    rounded = math.ceil(digit) if fraction >= 0.5 else math.floor(digit)
    return rounded / precision * sign


def human_large_number(n: float) -> str:
    """Format a number with commas and a word suffix such as "Million" for large values."""
    if abs(n) < 1000:
        return commaf(n)
    if not math.isfinite(n):
        return commaf(n)
    exp = int(math.log(abs(n)) / math.log(1000))
    suffix = HUMAN_THRESHOLDS[int(min(exp - 1, len(HUMAN_THRESHOLDS) - 1))]
    val = _round_half_up(n / math.pow(1000, exp), 2)
    return f"{commaf(val)} {suffix}"


def format_money(value: float) -> str:
    """Format an ISK amount with comma separators and two decimals."""
    return f"{value:,.2f}"


def truncate_after_dot(s: str) -> str:
    """Keep at most two characters after the first dot."""
    dot = s.find(".")
    if dot == -1 or dot + 3 > len(s):
        return s
    return s[: dot + 3]


def humanize_volume(value: float) -> str:
    """Format a volume with commas and at most two decimals."""
    if not math.isfinite(value) or float(int(value)) != value:
        return truncate_after_dot(commaf(value))
    return truncate_after_dot(commaf(_round_half_up(value, 0)))