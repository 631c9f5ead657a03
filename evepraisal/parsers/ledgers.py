"""Parsers for the personal mining ledger and the moon mining ledger."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    BIG_NUMBER_CHARS,
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_int,
)

_NUMBER_FIELD = r"[\[" + BIG_NUMBER_CHARS + r"]*"

# 2018.03.01	 Bright Spodumain	24,993	399,888 m³	33,796,534 ISK	Q-02UL
MINING_LEDGER = re.compile(
    r"^(\d\d\d\d\.\d\d\.\d\d)"  # date
    + r"\t([\S\ ]*)"  # name
    + r"\t(" + _NUMBER_FIELD + ")"  # quantity
    + r"\t[\S\ ]*"  # volume
    + r"\t" + _NUMBER_FIELD + " ISK"  # price estimate
    + r"\t[\S\ ]*$",  # system
    REGEX_FLAGS,
)

MOON_LEDGER_HEADER = (
    "Timestamp\tCorporation\tPilot\tOre Type\tQuantity\tVolume\tEst. Price\tOre TypeID\tSolarSystemID"
)

# 2019.01.19	Corp name	miner 1	Ytterbite	8,625	86,250 m³	70,377,757 ISK
MOON_LEDGER = re.compile(
    r"^(\d\d\d\d\.\d\d\.\d\d)"  # date
    + r"\t([\S\ ]*)"  # corporation
    + r"\t([\S\ ]*)"  # pilot
    + r"\t([\S\ ]*)"  # item name
    + r"\t(" + _NUMBER_FIELD + ")"  # quantity
    + r"\t[\S\ ]*"  # volume
    + r"\t" + _NUMBER_FIELD + " ISK$",  # price estimate
    REGEX_FLAGS,
)

# 2019.01.19	Corp Name	miner 1	Ytterbite	8625	86250	70377757	45513	30003687
MOON_LEDGER_TABLE = re.compile(
    r"^(\d\d\d\d\.\d\d\.\d\d)"  # date
    + r"\t([\S\ ]*)"  # corporation
    + r"\t([\S\ ]*)"  # pilot
    + r"\t([\S\ ]*)"  # item name
    + r"\t(" + _NUMBER_FIELD + ")"  # quantity
    + r"\t[\S\ ]*"  # volume
    + r"\t" + _NUMBER_FIELD  # price estimate
    + r"\t[\d]*"  # type ID
    + r"\t[\d]*$",  # solar system ID
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class MiningLedgerItem:
    """A single item from the mining ledger."""

    name: str
    quantity: int = 0


@dataclass
class MiningLedger(ParserResult):
    """The result of the mining ledger parser."""

    items: list[MiningLedgerItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "mining_ledger"


@dataclass(frozen=True)
class MoonLedgerItem:
    """A single item from the moon mining ledger."""

    player_name: str
    name: str
    quantity: int = 0


@dataclass
class MoonLedger(ParserResult):
    """The result of the moon ledger parser."""

    items: list[MoonLedgerItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "mining_ledger"


def parse_mining_ledger(lines: Lines) -> tuple[MiningLedger, Lines]:
    """Parse mining ledger lines, summing quantities per ore."""
    matches, rest = regex_parse_lines(MINING_LEDGER, lines)
    totals: defaultdict[str, int] = defaultdict(int)
    for match in matches.values():
        totals[clean_type_name(match[2])] += to_int(match[3])
    items = sorted(
        (MiningLedgerItem(name=name, quantity=qty) for name, qty in totals.items()),
        key=go_sort_key,
    )
    return MiningLedger(items=items, line_numbers=matched_lines(matches)), rest


def parse_moon_ledger(lines: Lines) -> tuple[MoonLedger, Lines]:
    """Parse moon ledger lines, summing quantities per pilot and ore."""
    used: list[int] = []
    remaining = dict(lines)
    if remaining.get(0) == MOON_LEDGER_HEADER:
        used.append(0)
        del remaining[0]

    plain, rest = regex_parse_lines(MOON_LEDGER, remaining)
    table, rest = regex_parse_lines(MOON_LEDGER_TABLE, rest)
    used.extend(matched_lines(plain))
    used.extend(matched_lines(table))

    totals: defaultdict[tuple[str, str], int] = defaultdict(int)
    for match in (*plain.values(), *table.values()):
        totals[(match[3], clean_type_name(match[4]))] += to_int(match[5])

    items = sorted(
        (
            MoonLedgerItem(player_name=player, name=name, quantity=qty)
            for (player, name), qty in totals.items()
        ),
        key=go_sort_key,
    )
    return MoonLedger(items=items, line_numbers=used), rest