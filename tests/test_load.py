import io
import urllib.error
import zipfile

import pytest
import yaml

from evepraisal.models import Component
from evepraisal.staticdump.load import (
    StaticDumpError,
    download_packaged_volumes,
    download_type_volumes,
    download_types,
    find_last_static_dump_checksum,
    find_last_static_dump_url,
    flatten_components,
    load_data_from_zip_file,
    load_types,
    parse_checksum,
    parse_volumes_csv,
    resolve_base_components,
    resolve_blueprint_products,
    resolve_components,
)


class _Response(io.BytesIO):
    def __init__(self, data: bytes, status: int = 200):
        super().__init__(data)
        self.status = status
        self.reason = "OK"


class _Opener:
    def __init__(self, data=b"", status=200, error=None):
        self.data = data
        self.status = status
        self.error = error
        self.requests = []

    def open(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return _Response(self.data, self.status)


class _BrokenResponse:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self, *args):
        raise OSError("connection reset")


class _BrokenOpener:
    def open(self, request):
        return _BrokenResponse()


def _blueprint(materials, products):
    return {
        "activities": {
            "manufacturing": {
                "materials": [{"quantity": q, "typeID": t} for q, t in materials],
                "products": [{"quantity": q, "typeID": t} for q, t in products],
            }
        }
    }


def _write_sde(path, types, blueprints):
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("fsd/types.yaml", yaml.safe_dump(types))
        archive.writestr("fsd/blueprints.yaml", yaml.safe_dump(blueprints))
    return path


def test_static_dump_url_points_at_sde_zip():
    assert find_last_static_dump_url().endswith("/sde.zip")


def test_parse_checksum_finds_sde_line():
    body = "aaa111  other.zip\nbbb222  sde.zip\n"
    assert parse_checksum(body) == "bbb222"


def test_parse_checksum_missing_raises():
    with pytest.raises(StaticDumpError, match="sde.zip not found"):
        parse_checksum("ccc333  other.zip\n")


def test_find_checksum_sends_user_agent():
    opener = _Opener(b"ddd444 sde.zip\n")
    assert find_last_static_dump_checksum(opener) == "ddd444"
    assert opener.requests[0].get_header("User-agent") == "evepraisal"


def test_find_checksum_not_found():
    error = urllib.error.HTTPError("http://localhost/checksum", 404, "Not Found", {}, io.BytesIO(b""))
    with pytest.raises(StaticDumpError, match="404"):
        find_last_static_dump_checksum(_Opener(error=error))


def test_find_checksum_unexpected_status():
    error = urllib.error.HTTPError("http://localhost/checksum", 500, "Boom", {}, io.BytesIO(b""))
    with pytest.raises(StaticDumpError, match="Unexpected response"):
        find_last_static_dump_checksum(_Opener(error=error))


def test_download_types_writes_file(tmp_path):
    target = tmp_path / "sde.zip"
    data = b"zip-bytes" * 100
    written = download_types("http://localhost/sde.zip", target, _Opener(data))
    assert written == len(data)
    assert target.read_bytes() == data


def test_download_types_removes_partial_file(tmp_path):
    target = tmp_path / "sde.zip"
    with pytest.raises(OSError):
        download_types("http://localhost/sde.zip", target, _BrokenOpener())
    assert not target.exists()


def test_load_data_from_zip_file(tmp_path):
    path = _write_sde(tmp_path / "sde.zip", {34: {"name": {"en": "Tritanium"}}}, {})
    with zipfile.ZipFile(path) as archive:
        assert load_data_from_zip_file(archive, "fsd/types.yaml") == {34: {"name": {"en": "Tritanium"}}}
        with pytest.raises(StaticDumpError, match="Could not locate missing.yaml"):
            load_data_from_zip_file(archive, "missing.yaml")


def test_load_types_reads_fields_and_aliases(tmp_path):
    types = {
        34: {"groupID": 18, "marketGroupID": 1857, "name": {"en": " Tritanium "}, "volume": 0.01, "basePrice": 2.5},
        35: {"name": {"en": ""}},
        1000: {"name": {"en": "Small Anti-EM Screen Reinforcer I"}},
    }
    path = _write_sde(tmp_path / "sde.zip", types, {})
    loaded = {t.id: t for t in load_types(path)}
    assert set(loaded) == {34, 1000}
    tritanium = loaded[34]
    assert (tritanium.name, tritanium.group_id, tritanium.market_group_id) == ("Tritanium", 18, 1857)
    assert (tritanium.volume, tritanium.base_price) == (0.01, 2.5)
    assert tritanium.aliases == []
    assert loaded[1000].name == "Small EM Shield Reinforcer I"
    assert loaded[1000].aliases == ["Small Anti-EM Screen Reinforcer I"]


def test_load_types_resolves_blueprints(tmp_path):
    types = {
        10: {"name": {"en": "Widget"}},
        20: {"name": {"en": "Part"}},
        30: {"name": {"en": "Ore"}},
    }
    blueprints = {
        110: _blueprint([(2, 20), (4, 30)], [(1, 10)]),
        120: _blueprint([(1, 30)], [(1, 20)]),
    }
    path = _write_sde(tmp_path / "sde.zip", types, blueprints)
    widget = {t.id: t for t in load_types(path)}[10]
    assert widget.blueprint_products == [Component(quantity=1, type_id=10)]
    assert widget.components == [Component(quantity=2, type_id=20), Component(quantity=4, type_id=30)]
    assert widget.base_components == [Component(quantity=6, type_id=30)]


def test_load_types_bad_archive(tmp_path):
    path = tmp_path / "broken.zip"
    path.write_bytes(b"not a zip")
    with pytest.raises(StaticDumpError, match="unzip static data"):
        load_types(path)


def test_resolve_without_blueprint():
    assert resolve_components({}, 1) == []
    assert resolve_blueprint_products({}, 1) == []
    assert resolve_base_components({}, 1, 1, 5) == []


def test_resolve_base_components_depth_limit():
    blueprints = {
        10: [_blueprint([(2, 20), (4, 30)], [(1, 10)])],
        20: [_blueprint([(1, 40)], [(1, 20)])],
    }
    assert resolve_base_components(blueprints, 10, 1, 0) == []
    assert resolve_base_components(blueprints, 10, 1, 1) == [
        Component(quantity=2, type_id=20),
        Component(quantity=4, type_id=30),
    ]
    assert resolve_base_components(blueprints, 10, 1, 5) == [
        Component(quantity=2, type_id=40),
        Component(quantity=4, type_id=30),
    ]


def test_resolve_base_components_cycle_terminates():
    blueprints = {10: [_blueprint([(1, 10)], [(1, 10)])]}
    assert resolve_base_components(blueprints, 10, 1, 3) == [Component(quantity=1, type_id=10)]


def test_flatten_components_invariants():
    components = [Component(2, 34), Component(3, 35), Component(5, 34)]
    flat = flatten_components(components)
    type_ids = [c.type_id for c in flat]
    assert sorted(type_ids) == [34, 35]
    assert sum(c.quantity for c in flat) == sum(c.quantity for c in components)
    assert flatten_components([]) == []


def test_parse_volumes_csv():
    text = "typeID,a,b,c,d,volume\n34,x,x,x,x,0.01\n35,x,x,x,x,0E-10\n"
    assert parse_volumes_csv(text, 5) == {34: 0.01, 35: 0.0}


def test_parse_volumes_csv_errors():
    with pytest.raises(StaticDumpError):
        parse_volumes_csv("", 1)
    with pytest.raises(ValueError):
        parse_volumes_csv("typeID,volume\nabc,1.0\n", 1)
    with pytest.raises(StaticDumpError):
        parse_volumes_csv("typeID,volume\n34\n", 1)


def test_download_volumes_use_their_columns():
    types_csv = b"typeID,a,b,c,d,volume\n34,x,x,x,x,0.01\n"
    packaged_csv = b"typeID,volume\n587,2500\n"
    assert download_type_volumes(_Opener(types_csv)) == {34: 0.01}
    assert download_packaged_volumes(_Opener(packaged_csv)) == {587: 2500.0}