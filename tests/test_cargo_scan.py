import pytest

from evepraisal.parsers.base import string_to_input
from evepraisal.parsers.cargo_scan import CargoScan, CargoScanItem, parse_cargo_scan

CASES = [
    (
        "1 Minmatar Shuttle\n2 Gallente Shuttle",
        CargoScan(
            items=[
                CargoScanItem(name="Gallente Shuttle", quantity=2),
                CargoScanItem(name="Minmatar Shuttle", quantity=1),
            ],
            line_numbers=[0, 1],
        ),
        {},
    ),
    (
        "\n\n1 Minmatar Shuttle\n\n",
        CargoScan(items=[CargoScanItem(name="Minmatar Shuttle", quantity=1)], line_numbers=[2]),
        {0: "", 1: "", 3: "", 4: ""},
    ),
    (
        "10 Plagioclase Mining Crystal I Blueprint (Original)",
        CargoScan(
            items=[CargoScanItem(name="Plagioclase Mining Crystal I Blueprint", quantity=10)],
            line_numbers=[0],
        ),
        {},
    ),
    (
        "10 Plagioclase Mining Crystal I Blueprint (Copy)",
        CargoScan(
            items=[CargoScanItem(name="Plagioclase Mining Crystal I Blueprint", quantity=10,
                                 bpc=True)],
            line_numbers=[0],
        ),
        {},
    ),
    (
        "12'000 Tengu",
        CargoScan(items=[CargoScanItem(name="Tengu", quantity=12000)], line_numbers=[0]),
        {},
    ),
    (
        "1 Tengu\n2 Tengu",
        CargoScan(items=[CargoScanItem(name="Tengu", quantity=3)], line_numbers=[0, 1]),
        {},
    ),
]


@pytest.mark.parametrize("text,expected,expected_rest", CASES)
def test_parse_cargo_scan(text, expected, expected_rest):
    result, rest = parse_cargo_scan(string_to_input(text))
    assert result == expected
    assert rest == expected_rest


def test_name():
    result, _ = parse_cargo_scan(string_to_input("1 Tengu"))
    assert result.name() == "cargo_scan"


def test_copy_and_original_are_separate_items():
    result, _ = parse_cargo_scan(string_to_input("1 Rifter Blueprint (Copy)\n2 Rifter Blueprint"))
    assert result.items == [
        CargoScanItem(name="Rifter Blueprint", quantity=2, bpc=False),
        CargoScanItem(name="Rifter Blueprint", quantity=1, bpc=True),
    ]