"""Parser for fittings in EFT format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    go_sort_key,
    input_strings,
    strings_to_input,
)
from evepraisal.parsers.listing import ListingItem, parse_listing

EFT_HEADER = re.compile(r"^\[([\S ]+), ?([\S ]+)\]$", REGEX_FLAGS)
EFT_BLACKLIST = frozenset(
    {
        "[empty high slot]",
        "[empty low slot]",
        "[empty medium slot]",
        "[empty rig slot]",
        "[empty subsystem slot]",
    }
)


@dataclass
class EFT(ParserResult):
    """The result of the EFT parser."""

    fitting_name: str = ""
    ship: str = ""
    items: list[ListingItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "eft"


def parse_eft(lines: Lines) -> tuple[EFT | None, Lines]:
    """Parse an EFT fitting: a ``[Ship, Name]`` header followed by a listing."""
    if not lines:
        return None, lines

    header = lines.get(0, "")
    if "[" not in header or "]" not in header:
        return None, lines
    found = EFT_HEADER.search(header)
    if found is None:
        return None, lines

    items_input = strings_to_input(input_strings(lines))
    del items_input[0]

    used = [0]
    for number, line in list(items_input.items()):
        if line.lower() in EFT_BLACKLIST:
            used.append(number)
            del items_input[number]

    listing, rest = parse_listing(items_input)
    used.extend(listing.lines())
    result = EFT(
        fitting_name=found.group(2),
        ship=found.group(1),
        items=sorted(listing.items, key=go_sort_key),
        line_numbers=sorted(used),
    )
    return result, rest