"""Running several parsers in turn, each over the lines the previous ones left."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from evepraisal.parsers.assets import parse_assets
from evepraisal.parsers.base import Lines, Parser, ParserResult
from evepraisal.parsers.cargo_scan import parse_cargo_scan
from evepraisal.parsers.compare import parse_compare
from evepraisal.parsers.contract import parse_contract
from evepraisal.parsers.dscan import parse_dscan
from evepraisal.parsers.eft import parse_eft
from evepraisal.parsers.fitting import parse_fitting
from evepraisal.parsers.industry import parse_industry
from evepraisal.parsers.killmail import parse_killmail
from evepraisal.parsers.ledgers import parse_mining_ledger, parse_moon_ledger
from evepraisal.parsers.listing import parse_listing
from evepraisal.parsers.loot_history import parse_loot_history
from evepraisal.parsers.pi import parse_pi
from evepraisal.parsers.survey_scan import parse_survey_scan
from evepraisal.parsers.view_contents import parse_view_contents
from evepraisal.parsers.wallet import parse_wallet

# The default parsers, in order of preference.
ALL_PARSERS: tuple[Parser, ...] = (
    parse_killmail,
    parse_eft,
    parse_fitting,
    parse_loot_history,
    parse_pi,
    parse_view_contents,
    parse_moon_ledger,
    parse_mining_ledger,
    parse_wallet,
    parse_survey_scan,
    parse_industry,
    parse_contract,
    parse_assets,
    parse_cargo_scan,
    parse_dscan,
    parse_compare,
    parse_listing,
)


@dataclass
class MultiParserResult(ParserResult):
    """The results of every parser that recognised some lines."""

    results: list[ParserResult] = field(default_factory=list)

    def name(self) -> str:
        return "multi"

    def lines(self) -> list[int]:
        return sorted(number for result in self.results for number in result.lines())


class MultiParser:
    """Applies parsers in order of preference until no lines are left."""

    def __init__(self, parsers: Iterable[Parser]) -> None:
        self.parsers = tuple(parsers)

    def __call__(self, lines: Lines) -> tuple[MultiParserResult, Lines]:
        combined = MultiParserResult()
        left = lines
        for parser in self.parsers:
            if not left:
                break
            result, left = parser(left)
            if result is not None and result.lines():
                combined.results.append(result)
        return combined, left


_ALL_PARSER = MultiParser(ALL_PARSERS)


def all_parser(lines: Lines) -> tuple[MultiParserResult, Lines]:
    """Parse lines with every default parser."""
    return _ALL_PARSER(lines)