"""Current names for types that were renamed after the static data stopped following renames."""

from __future__ import annotations

import re
from itertools import product

SIZES = ("Small", "Medium", "Large", "Capital")
DAMAGE_TYPES = ("EM", "Kinetic", "Explosive", "Thermal")


def _build_overrides() -> dict[int, str]:
    renames: dict[str, tuple[int, ...]] = {
        # January 2020 release: armor repairers
        "Small ACM Compact Armor Repairer": (4533, 4531),
        "Small I-a Enduring Armor Repairer": (4529, 4535),
        "Medium ACM Compact Armor Repairer": (4573, 4571),
        "Medium I-a Enduring Armor Repairer": (4569, 4575),
        "Large ACM Compact Armor Repairer": (4613, 4611),
        "Large I-a Enduring Armor Repairer": (4609, 4615),
        "'Meditation' Medium Armor Repairer I": (4579,),
        # March 2020 release: capacitor boosters
        "'Seed' Micro Capacitor Booster I": (
            4959, 4957, 4961, 4955, 3556, 3558, 15774, 14180, 14182, 15782,
        ),
        "Small F-RX Compact Capacitor Booster": (5011, 5009, 5013, 5007),
        "Medium F-RX Compact Capacitor Booster": (4833, 4831, 4835, 4829),
        "Heavy F-RX Compact Capacitor Booster": (5051, 5049, 5053, 5047),
    }

    # February 2020 release: remote capacitor transmitters
    transmitters = {
        "Small": ((5093, 5087), (5091, 5089)),
        "Medium": ((16489, 16493), (16495, 16491)),
        "Large": ((16481, 16485), (16487, 16483)),
    }
    for size, (scoped, compact) in transmitters.items():
        renames[f"{size} Radiative Scoped Remote Capacitor Transmitter"] = scoped
        renames[f"{size} Inductive Compact Remote Capacitor Transmitter"] = compact

    # 18.04 release: shield hardeners
    shield_hardeners = (
        ("Adaptive Invulnerability", 578, 9632),
        ("Anti-EM", 2293, 9622),
        ("Anti-Explosive", 2289, 9646),
        ("Anti-Kinetic", 2291, 9608),
        ("Anti-Thermal", 2295, 9660),
    )
    for kind, plain_id, compact_id in shield_hardeners:
        renames[f"{kind} Shield Hardener"] = (plain_id,)
        renames[f"Compact {kind} Shield Hardener"] = (compact_id,)

    # 18.05 release; other armor hardeners are handled by armor_hardener_override
    armor_hardeners = {
        "EM": (16357, 16359),
        "Explosive": (16365, 16367),
        "Kinetic": (16373, 16375),
        "Thermal": (16381, 16383),
    }
    for damage, (experimental_id, prototype_id) in armor_hardeners.items():
        renames[f"Experimental Enduring {damage} Armor Hardener I"] = (experimental_id,)
        renames[f"Prototype Compact {damage} Armor Hardener I"] = (prototype_id,)

    return {type_id: name for name, ids in renames.items() for type_id in ids}


NAME_OVERRIDES: dict[int, str] = _build_overrides()

_PLAIN_FLAVORS = (
    "",
    "Experimental",
    "Limited",
    "Prototype",
    "Upgraded",
    "Ammatar Navy",
    "Dark Blood",
    "Domination",
    "Federation Navy",
    "Imperial Navy",
    "Khanid Navy",
    "Republic Fleet",
    "Shadow Serpentis",
    "True Sansha",
)
_MODIFIED_BY = (
    "Ahremen", "Brokara", "Brynn", "Chelm", "Cormack", "Draclira",
    "Raysere", "Selynne", "Setele", "Tairei", "Tuvan", "Vizan",
)

FLAVOR_TYPES: tuple[str, ...] = (
    _PLAIN_FLAVORS
    + tuple(f"{pilot}'s Modified" for pilot in _MODIFIED_BY)
    + tuple(
        f"{line} {grade}-Type"
        for line, grade in product(("Centus", "Core", "Corpus"), ("A", "B", "C", "X"))
    )
)

_RIG = re.compile(
    rf"^({'|'.join(SIZES)}) Anti-({'|'.join(DAMAGE_TYPES)}) (Screen Reinforcer|Pump) (I|II)$"
)

_ARMOR_HARDENER = re.compile(
    rf"^({'|'.join(FLAVOR_TYPES)}) Armor ({'|'.join(DAMAGE_TYPES)}) Hardener ?(I|II)? ?(Blueprint)?$"
)

_RIG_KINDS = {"Screen Reinforcer": "Shield Reinforcer", "Pump": "Armor Reinforcer"}


def rig_override(type_name: str) -> str | None:
    """Return the new name of a renamed resistance rig, or None."""
    found = _RIG.search(type_name)
    if found is None:
        return None
    size, damage, kind, level = found.groups()
    return f"{size} {damage} {_RIG_KINDS[kind]} {level}"


def armor_hardener_override(type_name: str) -> str | None:
    """Return the new name of a renamed armor hardener, or None."""
    found = _ARMOR_HARDENER.search(type_name)
    if found is None:
        return None
    flavor, damage, level, blueprint = found.groups()
    parts = [flavor, damage, "Armor Hardener", level, blueprint]
    return " ".join(part for part in parts if part)


def compute_aliases(type_id: int, type_name: str) -> tuple[str, list[str]]:
    """Return the name to use for a type and the older names it is also known by."""
    override = NAME_OVERRIDES.get(type_id)
    if override is None:
        override = armor_hardener_override(type_name)
    if override is None:
        override = rig_override(type_name)
    if override is None:
        return type_name, []
    return override, [type_name]