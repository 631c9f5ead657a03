"""Parser for text copied from a container's or ship's contents window."""

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

VIEW_CONTENTS = re.compile(
    r"^([\S ]*)\t"  # name
    r"([\S ]*)\t"  # group
    r"((?:Cargo|Ore|Planetary Commodities) Hold|(?:Drone|Fuel|Fighter) Bay"
    r"|(?:Low|Medium|High|Rig) Slot|Subsystem|Fighter Launch Tube|)\t"  # location
    r"([\d,'\.]+)$",  # quantity
    REGEX_FLAGS,
)

VIEW_CONTENTS_SHORT = re.compile(
    r"^([\S ]*)\t"  # name
    r"([\S ]*)\t"  # group
    r"([\d,'\.]+)$",  # quantity
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class ViewContentsItem:
    """A single item from the view contents window."""

    name: str
    group: str = ""
    location: str = ""
    quantity: int = 0


@dataclass
class ViewContents(ParserResult):
    """The result of the view contents parser."""

    items: list[ViewContentsItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "view_contents"


def parse_view_contents(lines: Lines) -> tuple[ViewContents, Lines]:
    """Parse view contents lines, summing quantities of identical items."""
    full, rest = regex_parse_lines(VIEW_CONTENTS, lines)
    short, rest = regex_parse_lines(VIEW_CONTENTS_SHORT, rest)

    totals: defaultdict[tuple[str, str, str], int] = defaultdict(int)
    for match in full.values():
        totals[(clean_type_name(match[1]), match[2], match[3])] += to_int(match[4])
    for match in short.values():
        totals[(clean_type_name(match[1]), match[2], "")] += to_int(match[3])

    items = sorted(
        (
            ViewContentsItem(name=name, group=group, location=location, quantity=qty)
            for (name, group, location), qty in totals.items()
        ),
        key=go_sort_key,
    )
    used = [*matched_lines(full), *matched_lines(short)]
    return ViewContents(items=items, line_numbers=used), rest