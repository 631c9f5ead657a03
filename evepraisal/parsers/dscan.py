"""Parser for directional scanner results."""

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
    to_float,
)

DSCAN = re.compile(
    r"^([\S ]*)\t"  # item name
    r"([\S ]*)\t"  # type name
    r"((?:([\d,'\." + "\u00a0" + r"]*) (m|km|AU))|-)",  # distance
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class DScanItem:
    """A single item from a d-scan."""

    name: str
    distance: float = 0.0
    distance_unit: str = ""


@dataclass
class DScan(ParserResult):
    """The result of the d-scan parser."""

    items: list[DScanItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "dscan"


def parse_dscan(lines: Lines) -> tuple[DScan, Lines]:
    """Parse directional scan lines."""
    matches, rest = regex_parse_lines(DSCAN, lines)
    items = sorted(
        (
            DScanItem(
                name=clean_type_name(match[2]),
                distance=to_float(match[4]),
                distance_unit=match[5],
            )
            for match in matches.values()
        ),
        key=go_sort_key,
    )
    return DScan(items=items, line_numbers=matched_lines(matches)), rest