"""A parser that tries several strategies to find items, checking names against a type database."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from evepraisal.models import TypeDB
from evepraisal.parsers.base import Lines, ParserResult, strings_to_input, to_int
from evepraisal.parsers.listing import ContextListingParser


class _Column(enum.Enum):
    ITEM = enum.auto()
    QUANTITY = enum.auto()
    IGNORE = enum.auto()


_SPECS = (
    (_Column.IGNORE, _Column.ITEM, _Column.IGNORE, _Column.QUANTITY),
    (_Column.QUANTITY, _Column.IGNORE, _Column.ITEM),
    (_Column.ITEM, _Column.QUANTITY),
    (_Column.QUANTITY, _Column.ITEM),
)

_TRIM = ", _=-[]*"
_FALLBACK_SEPARATORS = ("  ", "-", " ")


def _split_parts(line: str, separator: str) -> list[str]:
    trimmed = (part.strip(_TRIM).strip() for part in line.split(separator))
    return [part for part in trimmed if part]


@dataclass(frozen=True)
class HeuristicItem:
    """A single item found by the heuristic parser."""

    name: str
    quantity: int = 0


@dataclass
class HeuristicResult(ParserResult):
    """The result of the heuristic parser."""

    items: list[HeuristicItem] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "heuristic"


class HeuristicParser:
    """Guesses items and quantities from loosely formatted text."""

    def __init__(self, type_db: TypeDB) -> None:
        self.type_db = type_db

    def parse(self, lines: Lines) -> tuple[HeuristicResult, Lines]:
        items: list[HeuristicItem] = []
        used: list[int] = []
        rest: Lines = {}
        for number, line in sorted(lines.items()):
            found = self._by_columns(line)
            if found is None:
                found = self._by_prefix(line)
            if found is None:
                rest[number] = line
                continue
            items.extend(found)
            used.append(number)
        return HeuristicResult(items=items, line_numbers=used), rest

    def __call__(self, lines: Lines) -> tuple[HeuristicResult, Lines]:
        return self.parse(lines)

    def _match_spec(self, spec: tuple[_Column, ...], parts: list[str]) -> HeuristicItem | None:
        name = ""
        quantity = 1
        for column, part in zip(spec, parts):
            if column is _Column.ITEM:
                if not self.type_db.has_type(part):
                    return None
                name = part
            elif column is _Column.QUANTITY:
                quantity = to_int(part)
                if quantity == 0:
                    return None
        return HeuristicItem(name=name, quantity=quantity)

    def _by_columns(self, line: str) -> list[HeuristicItem] | None:
        parts = _split_parts(line, "\t")
        for separator in _FALLBACK_SEPARATORS:
            if len(parts) != 1:
                break
            parts = _split_parts(line, separator)
        if len(parts) == 1:
            return None

        for spec in _SPECS:
            if len(parts) < len(spec):
                continue
            item = self._match_spec(spec, parts)
            if item is not None:
                return [item]

        listing, _ = ContextListingParser(self.type_db)(strings_to_input(parts))
        if listing.lines():
            return [HeuristicItem(name=i.name, quantity=i.quantity) for i in listing.items]
        return None

    def _by_prefix(self, line: str) -> list[HeuristicItem] | None:
        name = ""
        for part in line.split():
            name += part.strip(",\t ")
            if self.type_db.has_type(name):
                return [HeuristicItem(name=name, quantity=1)]
        return None