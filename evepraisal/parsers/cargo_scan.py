"""Parser for cargo scanner results."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_int,
)

CARGO_SCAN = re.compile(r"^([\d,'\.]+) ([\S ]+)$", REGEX_FLAGS)


@dataclass(frozen=True)
class CargoScanItem:
    """A single item from a cargo scan."""

    name: str
    quantity: int = 0
    bpc: bool = False


@dataclass
class CargoScan(ParserResult):
    """The result of the cargo scan parser."""

    items: list[CargoScanItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "cargo_scan"


def parse_cargo_scan(lines: Lines) -> tuple[CargoScan, Lines]:
    """Parse cargo scan lines, summing quantities of identical items."""
    matches, rest = regex_parse_lines(CARGO_SCAN, lines)
    totals: defaultdict[tuple[str, bool], int] = defaultdict(int)
    for match in matches.values():
        name = clean_type_name(match[2])
        bpc = name.endswith(" (Copy)")
        if bpc:
            name = name.removesuffix(" (Copy)")
        name = name.removesuffix(" (Original)")
        totals[(name, bpc)] += to_int(match[1])

    items = sorted(
        (CargoScanItem(name=name, quantity=qty, bpc=bpc) for (name, bpc), qty in totals.items()),
        key=go_sort_key,
    )
    return CargoScan(items=items, line_numbers=matched_lines(matches)), rest