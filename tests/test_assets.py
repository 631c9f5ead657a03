import pytest

from evepraisal.parsers.assets import AssetItem, AssetList, parse_assets
from evepraisal.parsers.base import string_to_input

CASES = [
    (
        "Hurricane\t1\tCombat Battlecruiser",
        AssetList(
            items=[AssetItem(name="Hurricane", group="Combat Battlecruiser", quantity=1)],
            line_numbers=[0],
        ),
    ),
    (
        "720mm Gallium Cannon\t1\tProjectile Weapon\tMedium\tHigh\t10 m3\n"
        "Damage Control II\t1\tDamage Control\t\tLow\t5 m3\n"
        "Experimental 10MN Microwarpdrive I\t1\tPropulsion Module\t\tMedium\t10 m3",
        AssetList(
            items=[
                AssetItem(name="720mm Gallium Cannon", quantity=1, group="Projectile Weapon",
                          category="Medium", slot="High", volume=10),
                AssetItem(name="Damage Control II", quantity=1, group="Damage Control",
                          slot="Low", volume=5),
                AssetItem(name="Experimental 10MN Microwarpdrive I", quantity=1,
                          group="Propulsion Module", size="Medium", volume=10),
            ],
            line_numbers=[0, 1, 2],
        ),
    ),
    (
        "200mm AutoCannon I\t1\tProjectile Weapon\tModule\tSmall\tHigh\t5 m3\t1\n"
        "10MN Afterburner II\t1\tPropulsion Module\tModule\tMedium\t5 m3\t5\t2\n"
        "Warrior II\t9",
        AssetList(
            items=[
                AssetItem(name="10MN Afterburner II", quantity=1, group="Propulsion Module",
                          category="Module", size="Medium", meta_level="5", tech_level="2",
                          volume=5),
                AssetItem(name="200mm AutoCannon I", quantity=1, group="Projectile Weapon",
                          category="Module", size="Small", slot="High", meta_level="1",
                          volume=5),
                AssetItem(name="Warrior II", quantity=9),
            ],
            line_numbers=[0, 1, 2],
        ),
    ),
    (
        "Sleeper Data Library\t1080\tSleeper Components\t\t\t10.82 m3",
        AssetList(
            items=[AssetItem(name="Sleeper Data Library", quantity=1080,
                             group="Sleeper Components", volume=10.82)],
            line_numbers=[0],
        ),
    ),
    (
        "Sleeper Data Library\t1,080\nSleeper Data Library\t1'080\nSleeper Data Library\t1.080",
        AssetList(
            items=[
                AssetItem(name="Sleeper Data Library", quantity=1080),
                AssetItem(name="Sleeper Data Library", quantity=1080),
                AssetItem(name="Sleeper Data Library", quantity=1080),
            ],
            line_numbers=[0, 1, 2],
        ),
    ),
    (
        "Sleeper Data Library\t",
        AssetList(items=[AssetItem(name="Sleeper Data Library", quantity=1)], line_numbers=[0]),
    ),
    (
        "Armor Plates*\t477\tGeborgene Materialien*",
        AssetList(
            items=[AssetItem(name="Armor Plates", quantity=477, group="Geborgene Materialien*")],
            line_numbers=[0],
        ),
    ),
    (
        "Robotics\t741\tSpecialized Commodities\t\t\t4 446 m3\t76 705 081,83 ISK",
        AssetList(
            items=[AssetItem(name="Robotics", quantity=741, group="Specialized Commodities",
                             price_estimate=76705081.83, volume=4446)],
            line_numbers=[0],
        ),
    ),
    (
        "Guardian Angels 'Advanced' Cerebral Accelerator\t1\tBooster\t\t10\t1 m3\t37 805 997.92 ISK",
        AssetList(
            items=[AssetItem(name="Guardian Angels 'Advanced' Cerebral Accelerator", quantity=1,
                             group="Booster", slot="10", volume=1.0,
                             price_estimate=37805997.92)],
            line_numbers=[0],
        ),
    ),
    (
        "Mexallon\t1\u00a0667\u00a0487\tMineral\t\t\t16\u00a0674,87 m3\t128\u00a0696\u00a0646,66 ISK",
        AssetList(
            items=[AssetItem(name="Mexallon", quantity=1667487, group="Mineral",
                             volume=16674.87, price_estimate=128696646.66)],
            line_numbers=[0],
        ),
    ),
    (
        "Evaporite Deposits\t1 452\tMoon Materials\t\t\t72,60 м^3\t7 533 164,76 ISK",
        AssetList(
            items=[AssetItem(name="Evaporite Deposits", quantity=1452, group="Moon Materials",
                             volume=72.60, price_estimate=7533164.76)],
            line_numbers=[0],
        ),
    ),
]


@pytest.mark.parametrize("text,expected", CASES)
def test_parse_assets(text, expected):
    result, rest = parse_assets(string_to_input(text))
    assert result == expected
    assert rest == {}


def test_name_and_lines():
    result, _ = parse_assets(string_to_input("Warrior II\t9"))
    assert result.name() == "assets"
    assert result.lines() == [0]


def test_unmatched_lines_are_left():
    result, rest = parse_assets(string_to_input("no tab here\nWarrior II\t9"))
    assert rest == {0: "no tab here"}
    assert result.items == [AssetItem(name="Warrior II", quantity=9)]