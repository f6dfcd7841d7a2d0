"""Unit tests for the built-in chord catalog."""

import pytest

from chordomatic.catalog import CHORD_TEMPLATES, KEYS, build_catalog, load_catalog
from chordomatic.chord_shape import InvalidEncodingError


def test_load_catalog_is_cached() -> None:
    assert load_catalog() is load_catalog()


def test_catalog_keys_in_order() -> None:
    catalog = load_catalog()
    assert catalog.keys == KEYS
    assert catalog.keys[0] == "A"
    assert len(catalog.keys) == 12


def test_catalog_has_every_template() -> None:
    catalog = load_catalog()
    assert catalog.suffixes == tuple(suffix for suffix, _, _ in CHORD_TEMPLATES)
    assert len(catalog) == len(CHORD_TEMPLATES)


def test_catalog_shape_lookup() -> None:
    shape = load_catalog().shape("major")
    assert shape.encoding == "57756x"
    assert shape.barre_fret == 5


def test_catalog_unknown_suffix() -> None:
    with pytest.raises(KeyError):
        load_catalog().shape("sus13")


def test_catalog_mapping_is_read_only() -> None:
    with pytest.raises(TypeError):
        load_catalog().shapes["new"] = load_catalog().shape("m")  # type: ignore[index]


def test_build_catalog_rejects_bad_template() -> None:
    with pytest.raises(InvalidEncodingError):
        build_catalog(KEYS, (("bad", "x3201z", 0),))


def test_build_catalog_rejects_duplicate_suffix() -> None:
    with pytest.raises(ValueError):
        build_catalog(KEYS, (("m", "x32010", 0), ("m", "x22010", 2)))


def test_catalog_knows_key() -> None:
    catalog = load_catalog()
    assert catalog.knows_key("C#")
    assert not catalog.knows_key("H")
    assert not hasattr(catalog, "has_key")
