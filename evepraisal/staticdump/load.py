"""Fetching and reading the static data export into type records."""

from __future__ import annotations

import csv
import io
import logging
import shutil
import urllib.error
import urllib.request
import zipfile
from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from evepraisal.models import Component, EveType
from evepraisal.staticdump.aliases import compute_aliases

log = logging.getLogger(__name__)

USER_AGENT = "evepraisal"
STATIC_DUMP_URL = "https://eve-static-data-export.s3-eu-west-1.amazonaws.com/tranquility/sde.zip"
STATIC_DUMP_CHECKSUM_URL = (
    "https://eve-static-data-export.s3-eu-west-1.amazonaws.com/tranquility/checksum"
)
TYPE_VOLUMES_URL = "https://www.fuzzwork.co.uk/dump/latest/invTypes.csv"
PACKAGED_VOLUMES_URL = "https://www.fuzzwork.co.uk/dump/latest/invVolumes.csv"

BASE_COMPONENT_DEPTH = 5

Blueprints = Mapping[int, list[Mapping[str, Any]]]


class StaticDumpError(Exception):
    """The static data could not be fetched or read."""


def _request(url: str) -> urllib.request.Request:
    return urllib.request.Request(url, headers={"User-Agent": USER_AGENT})


def _fetch(url: str, opener: Any) -> tuple[int, str, bytes]:
    opener = opener or urllib.request.build_opener()
    try:
        with opener.open(_request(url)) as response:
            return response.status, str(getattr(response, "reason", "")), response.read()
    except urllib.error.HTTPError as err:
        return err.code, str(err.reason), err.read() or b""


def find_last_static_dump_url() -> str:
    """Return the URL of the latest static data export."""
    return STATIC_DUMP_URL


def parse_checksum(body: str) -> str:
    """Return the checksum given for sde.zip in a checksum listing."""
    for line in body.split("\n"):
        if "sde.zip" in line:
            fields = line.split()
            if fields:
                return fields[0]
    raise StaticDumpError("Checksum for sde.zip not found")


def find_last_static_dump_checksum(opener: Any = None) -> str:
    """Fetch the checksum of the latest static data export."""
    status, reason, body = _fetch(STATIC_DUMP_CHECKSUM_URL, opener)
    text = body.decode("utf-8", errors="replace")
    log.info("Checksum body: %s %d", text, status)
    if status in (200, 304):
        return parse_checksum(text)
    if status == 404:
        raise StaticDumpError("Could not find latest static dump checksum (404)")
    raise StaticDumpError(
        f"Unexpected response when trying to find last static dump checksum: {status} {reason}"
    )


def download_types(static_dump_url: str, static_data_path: str | Path, opener: Any = None) -> int:
    """Download the static data export to a file; return the number of bytes written."""
    path = Path(static_data_path)
    opener = opener or urllib.request.build_opener()
    try:
        with opener.open(_request(static_dump_url)) as response, path.open("wb") as out:
            shutil.copyfileobj(response, out)
            written = out.tell()
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    log.info("Successfully wrote %d bytes to %s", written, path)
    return written


def load_data_from_zip_file(archive: zipfile.ZipFile, filename: str) -> Any:
    """Read and parse a YAML file from the archive."""
    if filename not in archive.namelist():
        raise StaticDumpError(f"Could not locate {filename} in archive")
    loader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)
    return yaml.load(archive.read(filename), Loader=loader)


def _manufacturing(blueprint: Mapping[str, Any], key: str) -> list[Component]:
    activities = blueprint.get("activities") or {}
    manufacturing = activities.get("manufacturing") or {}
    return [
        Component(quantity=int(entry.get("quantity") or 0), type_id=int(entry.get("typeID") or 0))
        for entry in manufacturing.get(key) or []
    ]


def _first_blueprint(blueprints: Blueprints, type_id: int) -> Mapping[str, Any] | None:
    found = blueprints.get(type_id)
    return found[0] if found else None


def resolve_blueprint_products(blueprints_by_product_type: Blueprints, type_id: int) -> list[Component]:
    """Return the products of the first blueprint that makes the type."""
    blueprint = _first_blueprint(blueprints_by_product_type, type_id)
    return [] if blueprint is None else _manufacturing(blueprint, "products")


def resolve_components(blueprints_by_product_type: Blueprints, type_id: int) -> list[Component]:
    """Return the materials of the first blueprint that makes the type."""
    blueprint = _first_blueprint(blueprints_by_product_type, type_id)
    return [] if blueprint is None else _manufacturing(blueprint, "materials")


def flatten_components(components: Iterable[Component]) -> list[Component]:
    """Merge components of the same type, summing their quantities."""
    totals: dict[int, int] = {}
    for component in components:
        totals[component.type_id] = totals.get(component.type_id, 0) + component.quantity
    return [Component(quantity=qty, type_id=type_id) for type_id, qty in totals.items()]


def resolve_base_components(
    blueprints_by_product_type: Blueprints, type_id: int, multiplier: int, left: int
) -> list[Component]:
    """Expand a type into raw materials, following blueprints at most ``left`` levels deep."""
    if left == 0:
        return []
    blueprint = _first_blueprint(blueprints_by_product_type, type_id)
    if blueprint is None:
        return []
    components: list[Component] = []
    for material in _manufacturing(blueprint, "materials"):
        quantity = material.quantity * multiplier
        below = resolve_base_components(
            blueprints_by_product_type, material.type_id, quantity, left - 1
        )
        components.extend(below or [Component(quantity=quantity, type_id=material.type_id)])
    return components


def _blueprints_by_product(blueprints: Mapping[int, Any]) -> dict[int, list[Mapping[str, Any]]]:
    by_product: defaultdict[int, list[Mapping[str, Any]]] = defaultdict(list)
    for _, blueprint in sorted(blueprints.items()):
        for product in _manufacturing(blueprint or {}, "products"):
            by_product[product.type_id].append(blueprint)
    return dict(by_product)


def load_types(static_data_path: str | Path) -> list[EveType]:
    """Read every named type from a static data export archive."""
    try:
        archive = zipfile.ZipFile(static_data_path)
    except (OSError, zipfile.BadZipFile) as err:
        raise StaticDumpError(f"unzip static data: {err} ({static_data_path})") from err

    with archive:
        all_types = load_data_from_zip_file(archive, "fsd/types.yaml") or {}
        log.info("Loaded %d types", len(all_types))
        all_blueprints = load_data_from_zip_file(archive, "fsd/blueprints.yaml") or {}
        log.info("Loaded %d blueprints", len(all_blueprints))

    by_product = _blueprints_by_product(all_blueprints)

    types: list[EveType] = []
    for type_id, data in sorted(all_types.items()):
        data = data or {}
        names = data.get("name") or {}
        english = names.get("en", "") if isinstance(names, Mapping) else ""
        if not english:
            continue
        name, aliases = compute_aliases(type_id, english.strip())
        types.append(
            EveType(
                id=type_id,
                group_id=int(data.get("groupID") or 0),
                market_group_id=int(data.get("marketGroupID") or 0),
                name=name,
                aliases=aliases,
                volume=float(data.get("volume") or 0.0),
                base_price=float(data.get("basePrice") or 0.0),
                blueprint_products=resolve_blueprint_products(by_product, type_id),
                components=resolve_components(by_product, type_id),
                base_components=flatten_components(
                    resolve_base_components(by_product, type_id, 1, BASE_COMPONENT_DEPTH)
                ),
            )
        )
    return types


def parse_volumes_csv(text: str, column: int) -> dict[int, float]:
    """Read type IDs (first column) and volumes (given column) from CSV, skipping the header."""
    rows = csv.reader(io.StringIO(text))
    if next(rows, None) is None:
        raise StaticDumpError("volume data is empty")
    volumes: dict[int, float] = {}
    for row in rows:
        try:
            volumes[int(row[0])] = float(row[column])
        except IndexError as err:
            raise StaticDumpError(f"volume row has too few fields: {row}") from err
    return volumes


def download_type_volumes(opener: Any = None) -> dict[int, float]:
    """Fetch the assembled volume of every type."""
    _, _, body = _fetch(TYPE_VOLUMES_URL, opener)
    return parse_volumes_csv(body.decode("utf-8"), 5)


def download_packaged_volumes(opener: Any = None) -> dict[int, float]:
    """Fetch the packaged volume of the types that have one."""
    _, _, body = _fetch(PACKAGED_VOLUMES_URL, opener)
    return parse_volumes_csv(body.decode("utf-8"), 1)