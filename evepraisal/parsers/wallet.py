"""Parser for wallet journal and transaction lines."""

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

WALLET = re.compile(
    r"^(\d\d\d\d.\d\d.\d\d \d\d:\d\d:\d\d)\t"  # datetime
    r"([\S ]+)\t"  # transaction type
    r"([-\d,'\.]+ (?:ISK|AUR))\t"  # amount
    r"([\d,'\.]+ (?:ISK|AUR))\t"  # balance
    r"([\S ]*)$",  # description
    REGEX_FLAGS,
)

WALLET_ITEMIZED = re.compile(
    r"^(\d\d\d\d\.\d\d\.\d\d \d\d:\d\d)\t"  # datetime
    r"([\S ]+)\t"  # name
    r"([\d,'\.]+ (?:ISK|AUR))\t"  # price
    r"([\d,'\.]+)\t"  # quantity
    r"([-\d,'\.]+ (?:ISK|AUR))\t"  # credit
    r"(ISK|AUR)\t"  # currency
    r"([\S ]+)\t"  # client
    r"([\S ]+)$",  # location
    REGEX_FLAGS,
)


@dataclass(frozen=True)
class WalletTransaction:
    """A journal line from the wallet."""

    datetime: str
    transaction_type: str = ""
    amount: str = ""
    balance: str = ""
    description: str = ""


@dataclass(frozen=True)
class WalletItemizedTransaction:
    """A market transaction line from the wallet."""

    datetime: str
    name: str = ""
    price: str = ""
    quantity: int = 0
    credit: str = ""
    currency: str = ""
    client: str = ""
    location: str = ""


@dataclass
class Wallet(ParserResult):
    """The result of the wallet parser."""

    transactions: list[WalletTransaction] = field(default_factory=list)
    itemized_transactions: list[WalletItemizedTransaction] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def name(self) -> str:
        return "view_contents"


def parse_wallet(lines: Lines) -> tuple[Wallet, Lines]:
    """Parse wallet journal and market transaction lines."""
    journal, rest = regex_parse_lines(WALLET, lines)
    itemized, rest = regex_parse_lines(WALLET_ITEMIZED, rest)

    transactions = sorted(
        (
            WalletTransaction(
                datetime=m[1],
                transaction_type=m[2],
                amount=m[3],
                balance=m[4],
                description=m[5],
            )
            for m in journal.values()
        ),
        key=go_sort_key,
    )
    itemized_transactions = sorted(
        (
            WalletItemizedTransaction(
                datetime=m[1],
                name=m[2],
                price=m[3],
                quantity=to_int(m[4]),
                credit=m[5],
                currency=m[6],
                client=m[7],
                location=m[8],
            )
            for m in itemized.values()
        ),
        key=go_sort_key,
    )
    result = Wallet(
        transactions=transactions,
        itemized_transactions=itemized_transactions,
        line_numbers=[*matched_lines(journal), *matched_lines(itemized)],
    )
    return result, rest