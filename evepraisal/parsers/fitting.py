"""Parser for fittings copied from the fitting window."""

from __future__ import annotations

from dataclasses import dataclass, field

from evepraisal.parsers.base import Lines, ParserResult, go_sort_key
from evepraisal.parsers.listing import ListingItem, parse_listing

FITTING_HEADERS = frozenset(
    {
        "High power",
        "Medium power",
        "Low power",
        "Rig Slot",
        "Sub System",
        "Charges",
        "Drones",
        "Fuel",
    }
)


@dataclass
class Fitting(ParserResult):
    """The result of the fitting parser."""

    items: list[ListingItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "fitting"


def parse_fitting(lines: Lines) -> tuple[Fitting | None, Lines]:
    """Parse a fitting: slot headings followed by listing lines."""
    headers = [number for number, line in lines.items() if line in FITTING_HEADERS]
    if not headers:
        return None, lines

    remaining = {n: line for n, line in lines.items() if line not in FITTING_HEADERS}
    listing, rest = parse_listing(remaining)
    result = Fitting(
        items=sorted(listing.items, key=go_sort_key),
        line_numbers=sorted(headers + listing.lines()),
    )
    return result, rest