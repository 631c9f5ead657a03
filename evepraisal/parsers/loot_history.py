"""Parser for fleet loot history."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_int,
)

LOOT_HISTORY = re.compile(
    r"(\d\d:\d\d:\d\d) ([\S ]+) has looted ([\d,'\.\ ]+) x ([\S ]+)$", REGEX_FLAGS
)

LOOT_HISTORY_TABLE_HEADER = "Time\tCharacter\tItem Type\tQuantity\tItem Group"

LOOT_HISTORY_TABLE = re.compile(
    r"^(\d\d\d\d\.\d\d\.\d\d \d\d\:\d\d)"  # datetime
    r"\t([\S ]+)"  # character
    r"\t([\S ]+)"  # item name
    r"\t([\d,'\.\ ]+)"  # quantity
    r"\t([\S ]+)",  # item group
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class LootItem:
    """A single looted item."""

    time: str
    name: str
    player_name: str = ""
    quantity: int = 0


@dataclass
class LootHistory(ParserResult):
    """The result of the loot history parser."""

    items: list[LootItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "loot_history"


def parse_loot_history(lines: Lines) -> tuple[LootHistory, Lines]:
    """Parse loot history, either the log lines or the copied table."""
    if lines.get(0) == LOOT_HISTORY_TABLE_HEADER:
        remaining = {n: line for n, line in lines.items() if n != 0}
        matches, rest = regex_parse_lines(LOOT_HISTORY_TABLE, remaining)
        items = [
            LootItem(time=m[1], player_name=m[2], name=m[3], quantity=to_int(m[4]))
            for m in matches.values()
        ]
    else:
        matches, rest = regex_parse_lines(LOOT_HISTORY, lines)
        items = [
            LootItem(time=m[1], player_name=m[2], quantity=to_int(m[3]), name=m[4])
            for m in matches.values()
        ]
    items.sort(key=go_sort_key)
    return LootHistory(items=items, line_numbers=matched_lines(matches)), rest