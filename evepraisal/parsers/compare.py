"""Parser for the item comparison window."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
)

COMPARE = re.compile(
    r"^([\S\ ]*)"
    r"\t(Tech I|Tech II|Tech III|Faction|Deadspace|Storyline)"
    r"[\S\ \t]*",
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class CompareItem:
    """A single item from the compare window."""

    name: str


@dataclass
class Compare(ParserResult):
    """The result of the compare parser."""

    items: list[CompareItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "compare"


def parse_compare(lines: Lines) -> tuple[Compare, Lines]:
    """Parse lines from the compare window."""
    matches, rest = regex_parse_lines(COMPARE, lines)
    items = sorted(
        (CompareItem(name=clean_type_name(match[1])) for match in matches.values()),
        key=go_sort_key,
    )
    return Compare(items=items, line_numbers=matched_lines(matches)), rest