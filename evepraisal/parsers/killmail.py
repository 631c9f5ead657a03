"""Parser for killmails in the in-game text format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from evepraisal.parsers.base import REGEX_FLAGS, Lines, ParserResult, input_strings, to_int

KILLMAIL_DATE = re.compile(r"^(\d\d\d\d.\d\d.\d\d \d\d:\d\d(:\d\d)?)$", REGEX_FLAGS)
KILLMAIL_PLAYER_LINE = re.compile(r"^([\w\s]+): ([\S ]+)$", REGEX_FLAGS)
KILLMAIL_INVOLVED_LINE = re.compile(
    r"^([\w ]+): ([\S ]+?)( \(laid the final blow\))?$", REGEX_FLAGS
)
KILLMAIL_ITEM_LINE = re.compile(
    r"^([\w '-]+?)(?:, Qty: (\d+))?(?: \(([\w ]+)\))?$", REGEX_FLAGS
)


class _KillmailFormatError(ValueError):
    """A killmail section could not be parsed."""


@dataclass(frozen=True)
class KillmailItem:
    """A single destroyed or dropped item from a killmail."""

    name: str
    quantity: int = 1
    location: str = ""


@dataclass
class Killmail(ParserResult):
    """The result of the killmail parser."""

    datetime: str = ""
    victim: dict[str, Any] = field(default_factory=dict)
    involved: list[dict[str, Any]] = field(default_factory=list)
    destroyed: list[KillmailItem] = field(default_factory=list)
    dropped: list[KillmailItem] = field(default_factory=list)
    line_count: int = 0

    def name(self) -> str:
        return "killmail"

    def lines(self) -> list[int]:
        return list(range(self.line_count))


def _key(s: str) -> str:
    return s.lower().replace(" ", "_")


def _parse_victim(lines: list[str]) -> tuple[dict[str, Any], int]:
    victim: dict[str, Any] = {}
    index = 0
    for index, line in enumerate(lines):
        if line == "":
            return victim, index
        found = KILLMAIL_PLAYER_LINE.search(line)
        if found is None:
            raise _KillmailFormatError(f"cannot parse victim data (line {index})")
        victim[_key(found.group(1))] = found.group(2)
    return victim, index


def _parse_involved(lines: list[str]) -> tuple[list[dict[str, Any]], int]:
    involved: list[dict[str, Any]] = []
    player: dict[str, Any] = {}
    index = 0
    for index, line in enumerate(lines):
        if line == "":
            if index + 1 < len(lines) and lines[index + 1].startswith("Name:"):
                involved.append(player)
                player = {}
                continue
            break
        found = KILLMAIL_INVOLVED_LINE.search(line)
        if found is None:
            raise _KillmailFormatError(f"cannot parse involved data (line {index})")
        if found.group(3):
            player["killing_blow"] = True
        player[_key(found.group(1))] = found.group(2)
    if player:
        involved.append(player)
    return involved, index


def _parse_items(lines: list[str]) -> tuple[list[KillmailItem], int]:
    items: list[KillmailItem] = []
    index = 0
    for index, line in enumerate(lines):
        if line == "":
            return items, index
        found = KILLMAIL_ITEM_LINE.search(line)
        if found is None:
            raise _KillmailFormatError(f"cannot parse items data (line {index})")
        items.append(
            KillmailItem(
                name=found.group(1),
                quantity=to_int(found.group(2)) if found.group(2) else 1,
                location=found.group(3) or "",
            )
        )
    return items, index


def parse_killmail(lines: Lines) -> tuple[Killmail | None, Lines]:
    """Parse a whole killmail; anything short of a complete one is left unparsed."""
    if not lines:
        return None, lines

    text = input_strings(lines)
    date = KILLMAIL_DATE.search(text[0])
    if date is None:
        return None, lines

    killmail = Killmail(datetime=date.group(1), line_count=len(lines))
    try:
        killmail.victim, consumed = _parse_victim(text[2:])
        offset = 2 + consumed + 1
        while offset < len(text):
            heading = text[offset]
            if heading == "Involved parties:":
                offset += 2
                killmail.involved, consumed = _parse_involved(text[offset:])
            elif heading == "Destroyed items:":
                offset += 2
                killmail.destroyed, consumed = _parse_items(text[offset:])
            elif heading == "Dropped items:":
                offset += 2
                killmail.dropped, consumed = _parse_items(text[offset:])
            else:
                return None, lines
            offset += consumed + 1
    except _KillmailFormatError:
        return None, lines

    return killmail, {}