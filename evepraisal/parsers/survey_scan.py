"""Parser for survey scanner results."""

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
    to_int,
)

SURVEY_SCAN = re.compile(
    r"^([\S ]+)\t"  # name
    r"([\d,'\.]+)\t"  # quantity
    r"([\d,'\.]*\ (m|km))$",  # distance
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class ScanItem:
    """A single asteroid from a survey scan."""

    name: str
    quantity: int = 0
    distance: str = ""


@dataclass
class SurveyScan(ParserResult):
    """The result of the survey scan parser."""

    items: list[ScanItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "loot_history"


def parse_survey_scan(lines: Lines) -> tuple[SurveyScan, Lines]:
    """Parse survey scan lines; once any line matches, the whole input is consumed."""
    matches, rest = regex_parse_lines(SURVEY_SCAN, lines)
    items = sorted(
        (
            ScanItem(name=clean_type_name(m[1]), quantity=to_int(m[2]), distance=m[3])
            for m in matches.values()
        ),
        key=go_sort_key,
    )
    result = SurveyScan(items=items, line_numbers=matched_lines(matches))
    if matches:
        return result, {}
    return result, rest