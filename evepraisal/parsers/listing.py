"""Parsers for plain item listings, with and without a type database to check names."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Mapping

from evepraisal.models import TypeDB
from evepraisal.parsers.base import (
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    regex_parse_lines,
    to_int,
)

LISTING = re.compile(r"^\s*([\d,'\.]+?) ?(?:x|X)? ([\S ]+)[\s]*$", REGEX_FLAGS)
LISTING_POSTFIX = re.compile(r"^([\S ]+?):? (?:x|X)? ?([\d,'\.]+)[\s]*$", REGEX_FLAGS)
LISTING_BARE = re.compile(r"^\s*([\S ]+)[\s]*$", REGEX_FLAGS)
LISTING_TABBED = re.compile(r"^\s*([\d,'\.]+)\t([\S ]+?)[\s]*$", REGEX_FLAGS)
LISTING_WITH_AMMO = re.compile(r"^([\S ]+), ?([a-zA-Z][\S ]+)[\s]*$", REGEX_FLAGS)


@dataclass(frozen=True)
class ListingItem:
    """A single item from a listing."""

    name: str
    quantity: int = 0


@dataclass
class Listing(ParserResult):
    """The result of the listing parser."""

    items: list[ListingItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "listing"


def _build_listing(counts: Mapping[str, int], line_numbers: list[int]) -> Listing:
    items = sorted((ListingItem(n, q) for n, q in counts.items()), key=go_sort_key)
    return Listing(items=items, line_numbers=sorted(line_numbers))


def parse_listing(lines: Lines) -> tuple[Listing, Lines]:
    """Parse lines of item names with optional quantities."""
    with_ammo, rest = regex_parse_lines(LISTING_WITH_AMMO, lines)
    prefixed, rest = regex_parse_lines(LISTING, rest)
    postfixed, rest = regex_parse_lines(LISTING_POSTFIX, rest)
    bare, rest = regex_parse_lines(LISTING_BARE, rest)
    tabbed, rest = regex_parse_lines(LISTING_TABBED, rest)

    counts: defaultdict[str, int] = defaultdict(int)
    for match in prefixed.values():
        counts[clean_type_name(match[2])] += to_int(match[1])
    for match in postfixed.values():
        counts[clean_type_name(match[1])] += to_int(match[2])
    for match in bare.values():
        counts[clean_type_name(match[1])] += 1
    for match in tabbed.values():
        counts[clean_type_name(match[2])] += to_int(match[1])
    for match in with_ammo.values():
        counts[clean_type_name(match[1])] += 1
        counts[clean_type_name(match[2])] += 1

    used = [*prefixed, *postfixed, *bare, *tabbed, *with_ammo]
    return _build_listing(counts, used), rest


class ContextListingParser:
    """A listing parser that only accepts names the type database knows."""

    # (pattern, group holding the name, group holding the quantity or None for one)
    _PATTERNS = (
        (LISTING, 2, 1),
        (LISTING_POSTFIX, 1, 2),
        (LISTING_BARE, 1, None),
        (LISTING_TABBED, 2, 1),
    )

    def __init__(self, type_db: TypeDB) -> None:
        self.type_db = type_db

    def parse(self, lines: Lines) -> tuple[Listing, Lines]:
        counts: defaultdict[str, int] = defaultdict(int)
        used: list[int] = []

        with_ammo, rest = regex_parse_lines(LISTING_WITH_AMMO, lines)
        for number, match in with_ammo.items():
            weapon = clean_type_name(match[1])
            ammo = clean_type_name(match[2])
            if self.type_db.has_type(weapon) and self.type_db.has_type(ammo):
                counts[weapon] += 1
                counts[ammo] += 1
                used.append(number)
            else:
                rest[number] = lines[number]

        for pattern, name_group, quantity_group in self._PATTERNS:
            matches, rest = regex_parse_lines(pattern, rest)
            for number, match in matches.items():
                name = clean_type_name(match[name_group])
                if self.type_db.has_type(name):
                    counts[name] += 1 if quantity_group is None else to_int(match[quantity_group])
                    used.append(number)
                else:
                    rest[number] = lines[number]

        return _build_listing(counts, used), rest

    def __call__(self, lines: Lines) -> tuple[Listing, Lines]:
        return self.parse(lines)