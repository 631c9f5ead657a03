"""Parser for contract item lists."""

from __future__ import annotations

import dataclasses
import re
from collections import defaultdict
from dataclasses import dataclass, field

from evepraisal.parsers.base import (
    BIG_NUMBER,
    REGEX_FLAGS,
    Lines,
    ParserResult,
    clean_type_name,
    go_sort_key,
    matched_lines,
    regex_parse_lines,
    to_int,
)

CONTRACT = re.compile(
    r"^([\S ]*)\t"  # name
    + "(" + BIG_NUMBER + r"*)\t"  # quantity
    + r"([\S ]*)\t"  # type
    + r"([\S ]*)\t"  # category
    + r"([\S ]*)$",  # details
    REGEX_FLAGS,
)

CONTRACT_SHORT = re.compile(
    r"^([\S ]*)\t" + "(" + BIG_NUMBER + r"*)\t" + r"([\S ]*)$",
    REGEX_FLAGS,
)

CONTRACT_NAME = re.compile(
    r"^([\S ]*) (?:x|X) " + "(" + BIG_NUMBER + "+) " + r"\(Item Exchange\)[\s]*",
    REGEX_FLAGS,
)

BPC_DETAILS = re.compile(r"BLUEPRINT COPY(?: - Runs: ([\d]+) - )?.*", REGEX_FLAGS)


@dataclass(frozen=True)
class ContractItem:
    """A single item from a contract."""

    name: str
    quantity: int = 0
    type: str = ""
    category: str = ""
    details: str = ""
    fitted: bool = False
    bpc: bool = False
    bpc_runs: int = 0


@dataclass
class Contract(ParserResult):
    """The result of the contract parser."""

    items: list[ContractItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "contract"


def _full_item(match: list[str]) -> ContractItem:
    details = match[5]
    bpc = BPC_DETAILS.search(details)
    runs = 0
    if bpc is not None:
        runs = to_int(bpc.group(1)) if bpc.group(1) else 1
    return ContractItem(
        name=clean_type_name(match[1]),
        type=match[3],
        category=match[4],
        details=details,
        fitted=details.startswith("Fitted"),
        bpc=bpc is not None,
        bpc_runs=runs,
    )


def parse_contract(lines: Lines) -> tuple[Contract, Lines]:
    """Parse contract lines, summing quantities of identical items."""
    full, rest = regex_parse_lines(CONTRACT, lines)
    short, rest = regex_parse_lines(CONTRACT_SHORT, rest)
    exchange, rest = regex_parse_lines(CONTRACT_NAME, rest)

    totals: defaultdict[ContractItem, int] = defaultdict(int)
    for match in full.values():
        totals[_full_item(match)] += to_int(match[2])
    for match in short.values():
        totals[ContractItem(name=match[1], type=match[3])] += to_int(match[2])
    for match in exchange.values():
        totals[ContractItem(name=match[1])] += to_int(match[2])

    items = sorted(
        (dataclasses.replace(item, quantity=qty) for item, qty in totals.items()),
        key=go_sort_key,
    )
    used = [*matched_lines(full), *matched_lines(short), *matched_lines(exchange)]
    return Contract(items=items, line_numbers=used), rest