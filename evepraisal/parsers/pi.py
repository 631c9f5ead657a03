"""Parser for the planetary interaction screens."""

from __future__ import annotations

import math
import re
from collections import defaultdict
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_float,
)

PI_ROUTED = re.compile(
    r"^([\d,'\.]+)\t"  # quantity
    r"([\S ]+)\t"  # name
    r"((Routed|Not\ routed))$",  # routed
    REGEX_FLAGS,
)

PI_WITH_VOLUME = re.compile(
    r"^\t"  # icon
    r"([\S ]+)\t"  # name
    r"([\d,'\.]+)\t"  # quantity
    r"([\d,'\.]+)(?: m3)?$",  # volume
    REGEX_FLAGS,
)

PI_SHORT = re.compile(
    r"^\t"  # icon
    r"([\S ]+)\t"  # name
    r"([\d,'\.]+)$",  # quantity
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class PIItem:
    """A single item from a planetary interaction screen."""

    name: str
    quantity: int = 0
    volume: float = 0.0
    routed: bool = False


@dataclass
class PI(ParserResult):
    """The result of the planetary interaction parser."""

    items: list[PIItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "pi"


def _quantity(s: str) -> int:
    value = to_float(s)
    return int(value) if math.isfinite(value) else 0


def parse_pi(lines: Lines) -> tuple[PI, Lines]:
    """Parse planetary interaction lines, summing quantities of identical items."""
    routed, rest = regex_parse_lines(PI_ROUTED, lines)
    with_volume, rest = regex_parse_lines(PI_WITH_VOLUME, rest)
    short, rest = regex_parse_lines(PI_SHORT, rest)

    totals: defaultdict[tuple[str, float, bool], int] = defaultdict(int)
    for match in routed.values():
        totals[(match[2], 0.0, match[3] == "Routed")] += _quantity(match[1])
    for match in with_volume.values():
        totals[(match[1], to_float(match[3]), False)] += _quantity(match[2])
    for match in short.values():
        totals[(match[1], 0.0, False)] += _quantity(match[2])

    items = sorted(
        (
            PIItem(name=name, quantity=qty, volume=volume, routed=is_routed)
            for (name, volume, is_routed), qty in totals.items()
        ),
        key=go_sort_key,
    )
    used = [*matched_lines(routed), *matched_lines(with_volume), *matched_lines(short)]
    return PI(items=items, line_numbers=used), rest