"""Parser for text copied from the industry window."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    BIG_NUMBER_CHARS,
    REGEX_FLAGS,
    Lines,
    ParserResult,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_int,
)

_NUMBER_FIELD = r"[\[" + BIG_NUMBER_CHARS + r"]*"

INDUSTRY = re.compile(r"^([\S ]+) \(([\d]+) Units?\)$", REGEX_FLAGS)

INDUSTRY_BLUEPRINTS = re.compile(
    r"^(?:([\d]+) x )?([\S\ ]+)"  # count and name
    + r"\t(-?" + _NUMBER_FIELD + ")"  # ME
    + r"\t(-?" + _NUMBER_FIELD + ")"  # TE
    + r"(?:\t(-?" + _NUMBER_FIELD + "))?"  # unknown
    + r"\t(" + _NUMBER_FIELD + ")"  # runs remaining
    + r"(?:\t([\S ]*))?"  # location
    + r"(?:\t([\S ]*))?"  # location 2
    + r"(?:\t([\S ]*))",  # group
    REGEX_FLAGS,
)

INDUSTRY_MATERIALS = re.compile(
    r"^([\S\ ]+)" + (r"\t(" + _NUMBER_FIELD + ")") * 4,  # name, required, available, price, typeID
    REGEX_FLAGS,
)

INDUSTRY_HEADERS = frozenset(
    {
        "Components\t\t\t\t",
        "Minerals\t\t\t\t",
        "Planetary materials\t\t\t\t",
        "Items\t\t\t\t",
        "Datacores\t\t\t\t",
        "Optional items\t\t\t\t",
        "No item selected\t\t\t\t",
        "Item\tRequired\tAvailable\tEst. Unit price\ttypeID",
    }
)


@dataclass(frozen=True)
class IndustryItem:
    """A single item from the industry window."""

    name: str
    quantity: int = 0
    bpc: bool = False
    bpc_runs: int = 0


@dataclass
class Industry(ParserResult):
    """The result of the industry parser."""

    items: list[IndustryItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "industry"


def _parse_materials(lines: Lines) -> tuple[Industry, Lines]:
    removed = {n for n, line in lines.items() if line in INDUSTRY_HEADERS or line == ""}
    remaining = {n: line for n, line in lines.items() if n not in removed}
    matches, rest = regex_parse_lines(INDUSTRY_MATERIALS, remaining)
    items = sorted(
        (IndustryItem(name=m[1], quantity=to_int(m[2])) for m in matches.values()),
        key=go_sort_key,
    )
    return Industry(items=items, line_numbers=sorted([*removed, *matches])), rest


def parse_industry(lines: Lines) -> tuple[Industry, Lines]:
    """Parse material lists, job outputs and blueprint listings."""
    if any(line in INDUSTRY_HEADERS for line in lines.values()):
        return _parse_materials(lines)

    units, rest = regex_parse_lines(INDUSTRY, lines)
    blueprints, rest = regex_parse_lines(INDUSTRY_BLUEPRINTS, rest)

    totals: defaultdict[tuple[str, bool, int], int] = defaultdict(int)
    for match in units.values():
        totals[(match[1], False, 0)] += to_int(match[2])
    for match in blueprints.values():
        runs = to_int(match[6])
        totals[(match[2], runs > 0, runs)] += to_int(match[1]) or 1

    items = sorted(
        (
            IndustryItem(name=name, quantity=qty, bpc=bpc, bpc_runs=runs)
            for (name, bpc, runs), qty in totals.items()
        ),
        key=go_sort_key,
    )
    used = [*matched_lines(units), *matched_lines(blueprints)]
    return Industry(items=items, line_numbers=used), rest