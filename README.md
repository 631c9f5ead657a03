# evepraisal

Turn text copied out of the EVE Online client into structured item lists.

The package recognises many clipboard formats — asset lists, contracts, cargo
scans, d-scans, EFT and in-game fittings, industry windows, killmails, loot
history, mining and moon ledgers, planetary interaction screens, survey scans,
container contents, wallet journals and the compare window — and reports
which input lines each format consumed.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Parsing text

Input is handled as a dict of line number to line text, so every parser can
report exactly which lines it used and hand back the rest.
`evepraisal.parsers.base.string_to_input` splits text into that form.

```python
from evepraisal.parsers.base import string_to_input
from evepraisal.parsers.multi import all_parser

result, rest = all_parser(string_to_input("10x Minmatar Shuttle\nTritanium: 53333"))
for parsed in result.results:
    print(parsed.name(), parsed.lines())
print(result.lines())   # line numbers that were understood
print(rest)             # lines no parser claimed
```

Each format also has its own parser, for example
`evepraisal.parsers.contract.parse_contract`,
`evepraisal.parsers.assets.parse_assets` or
`evepraisal.parsers.ledgers.parse_moon_ledger`. All of them take the line dict
and return a `(result, rest)` pair. Most results carry an `items` list of
frozen dataclasses; `Killmail` holds the victim, involved parties and
destroyed and dropped items, and `Wallet` holds `transactions` and
`itemized_transactions`. `parse_eft`, `parse_fitting` and `parse_killmail`
return `None` as the result when the text is not in their format; the other
parsers return a result with no lines.

`MultiParser` builds your own combination: it tries parsers in order of
preference and passes on only the lines still unclaimed. `ALL_PARSERS` in the
same module is the default order that `all_parser` uses.

```python
from evepraisal.parsers.multi import MultiParser
from evepraisal.parsers.listing import parse_listing
from evepraisal.parsers.cargo_scan import parse_cargo_scan

parser = MultiParser([parse_cargo_scan, parse_listing])
result, rest = parser(string_to_input("2 Gallente Shuttle"))
```

## Parsers that know item names

`ContextListingParser` and `HeuristicParser` accept only names known to a
type database. `evepraisal.models.TypeDB` is an in-memory store of `EveType`
records, looked up by name (ignoring case, aliases included) or by ID:

```python
from evepraisal.models import EveType, TypeDB
from evepraisal.parsers.heuristic import HeuristicParser

type_db = TypeDB([EveType(id=34, name="Tritanium")])
result, rest = HeuristicParser(type_db)(string_to_input("177887021\tTritanium"))
```

## Numbers

`evepraisal.parsers.base.to_int` and `to_float` read quantities written with
any common thousands separator (`,`, `.`, `'`, spaces and no-break spaces)
and return 0 when the text is not a number.

`evepraisal.web.formatting` formats numbers for display: `human_large_number`
gives totals such as `"123 Million"`, `format_money` gives ISK amounts with two
decimals, `humanize_volume` keeps at most two decimals and `commaf` adds comma
separators.

## Static data

`evepraisal.staticdump.load` downloads the EVE static data export
(`download_types`, `find_last_static_dump_checksum`) and volume tables
(`download_type_volumes`, `download_packaged_volumes`), and `load_types` turns
a downloaded export archive into `EveType` records with blueprint products,
components and base components. Failures raise `StaticDumpError`. Renamed
items get their current name, with the old name kept as an alias, through
`evepraisal.staticdump.aliases.compute_aliases`.

## Access log lines

`evepraisal.web.access_log.format_access_line` renders an `AccessRecord` in
the nginx "combined" format, and `log_access` prints it to standard output.

## What this package does not do

It has no command-line program and no web server: it does not serve an
appraisal site, render pages or handle logins. It looks up no market prices,
so it does not value the items it parses, and it does not store appraisals.
`TypeDB` keeps types in memory only; nothing is written to disk except the
archive that `download_types` saves.