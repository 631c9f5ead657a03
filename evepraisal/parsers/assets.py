"""Parser for asset lists copied from the inventory window."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    BIG_NUMBER,
    BIG_NUMBER_CHARS,
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_float,
    to_int,
)

ASSET_LIST = re.compile(
    r"^([\S\ ]*)"  # name
    + r"\t([\[" + BIG_NUMBER_CHARS + r"]*)"  # quantity
    + r"(?:\t([\S ]*))?"  # group
    + r"(?:\t([\S ]*))?"  # category
    + r"(?:\t(XLarge|Large|Medium|Small|))?"  # size
    + r"(?:\t(High|Medium|Low|Rigs|[\d ]*))?"  # slot
    + r"(?:\t(" + BIG_NUMBER + r"*) (m3|м\^3))?"  # volume
    + r"(?:\t([\d]+|))?"  # meta level
    + r"(?:\t([\d]+|))?"  # tech level
    + r"(?:\t(" + BIG_NUMBER + r"+) ISK)?$",  # price estimate
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class AssetItem:
    """A single item from an asset list."""

    name: str
    quantity: int = 0
    volume: float = 0.0
    group: str = ""
    category: str = ""
    size: str = ""
    slot: str = ""
    meta_level: str = ""
    tech_level: str = ""
    price_estimate: float = 0.0


@dataclass
class AssetList(ParserResult):
    """The result of the asset list parser."""

    items: list[AssetItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "assets"


def parse_assets(lines: Lines) -> tuple[AssetList, Lines]:
    """Parse an asset listing; a missing quantity counts as one."""
    matches, rest = regex_parse_lines(ASSET_LIST, lines)
    items = [
        AssetItem(
            name=clean_type_name(match[1]),
            quantity=to_int(match[2]) or 1,
            group=match[3],
            category=match[4],
            size=match[5],
            slot=match[6],
            volume=to_float(match[7]),
            meta_level=match[9],
            tech_level=match[10],
            price_estimate=to_float(match[11]),
        )
        for match in matches.values()
    ]
    items.sort(key=go_sort_key)
    return AssetList(items=items, line_numbers=matched_lines(matches)), rest