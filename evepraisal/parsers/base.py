"""Shared plumbing for the paste parsers: line maps, number parsing and matching."""

from __future__ import annotations

import abc
import dataclasses
import math
import re
from decimal import Decimal
from typing import Any, Callable, Mapping, Pattern

# Parser input: line number -> line text. Parsers hand back the lines they left.
Lines = dict[int, str]

# Characters that may appear in a number, thousands separators included.
BIG_NUMBER_CHARS = r"\d,'. \u2019" + "\u00a0"
BIG_NUMBER = "[" + BIG_NUMBER_CHARS + "]"

# Flags that parser patterns are compiled with, so that \d, \s, \S and \w are ASCII.
REGEX_FLAGS = re.ASCII

_SEPARATORS = frozenset(",. '\u00c2\u00a0\u2019")
_CLEAN_INTEGER = re.compile("[,'. \u2019\u00a0]")
_INT_SYNTAX = re.compile(r"[+-]?[0-9]+")
_FLOAT_SYNTAX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_SYNTAX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ParserResult(abc.ABC):
    """What a parser returns: a named result and the line numbers it was made from."""

    line_numbers: list[int]

    @abc.abstractmethod
    def name(self) -> str:
        """The name of the parser that produced this result."""

    def lines(self) -> list[int]:
        return list(self.line_numbers)


Parser = Callable[[Lines], "tuple[ParserResult | None, Lines]"]


def strings_to_input(lines: list[str]) -> Lines:
    """Number a list of lines from zero."""
    return dict(enumerate(lines))


def string_to_input(s: str) -> Lines:
    """Split text into numbered lines, dropping carriage returns."""
    return strings_to_input(s.replace("\r", "").split("\n"))


def input_strings(lines: Mapping[int, str]) -> list[str]:
    """Return lines 0 to len-1 in order; missing numbers give empty lines."""
    return [lines.get(i, "") for i in range(len(lines))]


def input_to_string(lines: Mapping[int, str]) -> str:
    return "".join(line + "\n" for line in input_strings(lines))


def _split_decimal(s: str) -> tuple[str, str]:
    if len(s) > 3 and s[-3] in _SEPARATORS:
        return s[:-3], s[-2:]
    if len(s) > 2 and s[-2] in _SEPARATORS:
        return s[:-2], s[-1:]
    return s, ""


def to_int(s: str) -> int:
    """Parse a quantity, ignoring separators and a trailing decimal part; 0 on failure."""
    if not s:
        return 0
    whole, _ = _split_decimal(s)
    cleaned = _CLEAN_INTEGER.sub("", whole)
    if not _INT_SYNTAX.fullmatch(cleaned):
        return 0
    value = int(cleaned)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return value


def _parse_float(s: str) -> float | None:
    if _FLOAT_SYNTAX.fullmatch(s):
        value = float(s)
        return None if math.isinf(value) else value
    if _HEX_FLOAT_SYNTAX.fullmatch(s):
        try:
            return float.fromhex(s)
        except OverflowError:
            return None
    unsigned = s.lower().lstrip("+-") if s[:1] in "+-" else s.lower()
    if unsigned in ("inf", "infinity"):
        return -math.inf if s.startswith("-") else math.inf
    if s.lower() == "nan":
        return math.nan
    return None


def to_float(s: str) -> float:
    """Parse a number in any of the usual locale formats; 0.0 on failure."""
    value = _parse_float(s)
    if value is not None:
        return value
    whole, decimal = _split_decimal(s)
    value = _parse_float(f"{to_int(whole)}.{decimal}")
    return value if value is not None else 0.0


def clean_type_name(s: str) -> str:
    """Strip surrounding spaces and one trailing asterisk from a type name."""
    return s.strip(" ").removesuffix("*")


def regex_parse_lines(
    pattern: Pattern[str], lines: Mapping[int, str]
) -> tuple[dict[int, list[str]], Lines]:
    """Split lines into those the pattern matches and the rest.

    A match is the whole match followed by every group; unmatched groups are "".
    """
    matches: dict[int, list[str]] = {}
    rest: Lines = {}
    for number, line in lines.items():
        found = pattern.search(line)
        if found is None:
            rest[number] = line
        else:
            matches[number] = [found.group(0), *(g if g is not None else "" for g in found.groups())]
    return matches, rest


def matched_lines(matches: Mapping[int, Any]) -> list[int]:
    return sorted(matches)


def _go_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    point = len(digit_tuple) + exponent
    digits = "".join(map(str, digit_tuple)).rstrip("0") or "0"
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _go_format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _go_float(value)
    if isinstance(value, str):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return go_sort_key(value)
    if isinstance(value, Mapping):
        pairs = sorted((_go_format(k), _go_format(v)) for k, v in value.items())
        return "map[" + " ".join(f"{k}:{v}" for k, v in pairs) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_go_format(v) for v in value) + "]"
    return str(value)


def go_sort_key(item: Any) -> str:
    """Render a record as ``{field field ...}``, the text parsers sort their items by."""
    return "{" + " ".join(_go_format(getattr(item, f.name)) for f in dataclasses.fields(item)) + "}"