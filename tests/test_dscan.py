import pytest

from evepraisal.parsers.base import string_to_input
from evepraisal.parsers.dscan import DScan, DScanItem, parse_dscan

CASES = [
    (
        "+\tNoctis\t3,225 m\n"
        "+\tThrasher\t12 km\n"
        "some dude's Stabber Fleet Issue\tStabber Fleet Issue\t-\n"
        "Wreck\tTayra\t82 km",
        DScan(
            items=[
                DScanItem(name="Noctis", distance=3225, distance_unit="m"),
                DScanItem(name="Stabber Fleet Issue", distance=0, distance_unit=""),
                DScanItem(name="Tayra", distance=82, distance_unit="km"),
                DScanItem(name="Thrasher", distance=12, distance_unit="km"),
            ],
            line_numbers=[0, 1, 2, 3],
        ),
    ),
    (
        "test\tNoctis\t3\u00a0225 m",
        DScan(items=[DScanItem(name="Noctis", distance=3225, distance_unit="m")],
              line_numbers=[0]),
    ),
    (
        "Otanuomi V - Moon 11\tMoon\t10.4 AU",
        DScan(items=[DScanItem(name="Moon", distance=10.4, distance_unit="AU")],
              line_numbers=[0]),
    ),
]


@pytest.mark.parametrize("text,expected", CASES)
def test_parse_dscan(text, expected):
    result, rest = parse_dscan(string_to_input(text))
    assert result == expected
    assert rest == {}


def test_name_and_unmatched():
    result, rest = parse_dscan(string_to_input("just a line"))
    assert result.name() == "dscan"
    assert result.items == []
    assert rest == {0: "just a line"}