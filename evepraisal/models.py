"""Core data types: users, eve types, components and an in-memory type database."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class User:
    """A logged-in user, as kept in the user's session."""

    character_name: str = ""
    character_owner_hash: str = ""


@dataclass(frozen=True)
class Component:
    """How many of a type are needed to make something else."""

    quantity: int = 0
    type_id: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"quantity": self.quantity, "type_id": self.type_id}


@dataclass
class EveType:
    """Information about a single type."""

    id: int = 0
    group_id: int = 0
    market_group_id: int = 0
    name: str = ""
    aliases: list[str] = field(default_factory=list)
    volume: float = 0.0
    packaged_volume: float = 0.0
    base_price: float = 0.0
    blueprint_products: list[Component] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    base_components: list[Component] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the type; empty component lists are left out."""
        data: dict[str, Any] = {
            "id": self.id,
            "group_id": self.group_id,
            "market_group_id": self.market_group_id,
            "name": self.name,
            "aliases": list(self.aliases),
            "volume": self.volume,
            "packaged_volume": self.packaged_volume,
            "base_price": self.base_price,
        }
        for key, components in (
            ("blueprint_products", self.blueprint_products),
            ("components", self.components),
            ("base_components", self.base_components),
        ):
            if components:
                data[key] = [c.to_dict() for c in components]
        return data


class TypeDB:
    """An in-memory store of types, looked up by name (case-insensitive) or by ID."""

    def __init__(self, types: Iterable[EveType] = ()) -> None:
        self._by_name: dict[str, EveType] = {}
        self._by_id: dict[int, EveType] = {}
        self.closed = False
        self.put_types(types)

    def __enter__(self) -> TypeDB:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_type(self, type_name: str) -> EveType | None:
        return self._by_name.get(type_name.lower())

    def has_type(self, type_name: str) -> bool:
        return type_name.lower() in self._by_name

    def get_type_by_id(self, type_id: int) -> EveType | None:
        return self._by_id.get(type_id)

    def list_types(self, starting_type_id: int, limit: int) -> list[EveType]:
        """Return up to ``limit`` types with an ID of at least ``starting_type_id``, by ID."""
        selected = sorted(
            (t for t in self._by_id.values() if t.id >= starting_type_id),
            key=lambda t: t.id,
        )
        return selected[: max(limit, 0)]

    def put_types(self, types: Iterable[EveType]) -> None:
        for eve_type in types:
            for alias in eve_type.aliases:
                self._by_name.setdefault(alias.lower(), eve_type)
            self._by_name[eve_type.name.lower()] = eve_type
            self._by_id[eve_type.id] = eve_type

    def search(self, s: str) -> list[EveType]:
        """Return the types whose name contains ``s``, ignoring case, ordered by name."""
        needle = s.lower()
        if not needle:
            return []
        found = {t.id: t for t in self._by_id.values() if needle in t.name.lower()}
        return sorted(found.values(), key=lambda t: t.name)

    def delete(self) -> None:
        self._by_name.clear()
        self._by_id.clear()

    def close(self) -> None:
        """Mark the database as closed; the stored types stay readable."""
        self.closed = True