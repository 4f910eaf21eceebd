import pytest
from pathlib import Path

from vidproxy.domain.exceptions import CatalogError
from vidproxy.infrastructure.video.catalog import DEFAULT_CATALOG, load_catalog, parse_catalog

def test_load_catalog_from_yaml(catalog_file: Path):
    entries = load_catalog(catalog_file)
    assert [e.video_id for e in entries] == ["alpha", "beta"]
    alpha, beta = entries
    assert alpha.duration_seconds == 3725
    assert alpha.payload() == b"alpha-bytes"
    assert alpha.to_info().size_bytes == len(b"alpha-bytes")
    assert beta.duration_seconds == 0
    assert beta.description == ""
    assert len(beta.payload()) == 10

def test_load_catalog_without_path_returns_default():
    entries = load_catalog(None)
    assert entries == DEFAULT_CATALOG
    assert entries is not DEFAULT_CATALOG

def test_numeric_ids_become_strings():
    entries = parse_catalog({"videos": [{"id": 42, "title": "Demo"}]})
    assert entries[0].video_id == "42"

@pytest.mark.parametrize("data, message", [
    (None, "mapping"),
    ({"videos": "nope"}, "mapping"),
    ({"videos": ["just a string"]}, "not a mapping"),
    ({"videos": [{"id": "a"}]}, "'id' and 'title'"),
    ({"videos": [{"id": "a", "title": "A", "duration_seconds": "long"}]}, "non-numeric"),
    ({"videos": [{"id": "a", "title": "A", "size_bytes": -1}]}, "negative"),
    ({"videos": [{"id": "a", "title": "A"}, {"id": "a", "title": "Again"}]}, "Duplicate"),
])
def test_parse_catalog_rejects_bad_data(data, message):
    with pytest.raises(CatalogError, match=message):
        parse_catalog(data)

def test_missing_file_raises_catalog_error(tmp_path: Path):
    with pytest.raises(CatalogError, match="Cannot read"):
        load_catalog(tmp_path / "missing.yaml")

def test_invalid_yaml_raises_catalog_error(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("videos: [unclosed", encoding="utf-8")
    with pytest.raises(CatalogError, match="not valid YAML"):
        load_catalog(path)
