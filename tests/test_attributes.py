"""Tests for attribute path resolution."""

from rum_tools.datadog.attributes import (
    NOT_FOUND,
    get_attrs,
    lookup,
    resolve_path,
    split_path,
)


ATTRS = {
    "view": {"load_time": 120, "name": "/home", "meta": None},
    "session": {"id": "s1"},
    "geo": {"country": "FR"},
}


def test_split_path():
    assert split_path("view.load_time") == ["view", "load_time"]
    assert split_path("@geo.country") == ["@geo", "country"]
    assert split_path("type") == ["type"]


def test_resolve_nested_value():
    result = resolve_path(ATTRS, ["view", "load_time"])
    assert result.found
    assert result.value == 120


def test_resolve_intermediate_map():
    result = resolve_path(ATTRS, ["session"])
    assert result.found
    assert result.value == {"id": "s1"}


def test_resolve_missing_key_is_not_found():
    assert resolve_path(ATTRS, ["view", "missing"]) == NOT_FOUND
    assert resolve_path(ATTRS, ["missing", "load_time"]) == NOT_FOUND


def test_resolve_through_scalar_is_not_found():
    # 'name' is a string, there is nothing to index into
    assert not resolve_path(ATTRS, ["view", "name", "length"]).found
    assert not resolve_path(ATTRS, ["view", "meta", "x"]).found


def test_resolve_explicit_null_is_found():
    result = resolve_path(ATTRS, ["view", "meta"])
    assert result.found
    assert result.value is None


def test_resolve_empty_path_returns_root():
    result = resolve_path(ATTRS, [])
    assert result.found
    assert result.value is ATTRS


def test_resolve_non_mapping_root():
    assert not resolve_path(["a"], ["0"]).found
    assert resolve_path(42, []).value == 42


def test_resolve_deep_path_does_not_recurse():
    root = current = {}
    for _ in range(5000):
        current["k"] = {}
        current = current["k"]
    current["k"] = "leaf"
    result = resolve_path(root, ["k"] * 5001)
    assert result.found
    assert result.value == "leaf"


def test_lookup():
    assert lookup(ATTRS, ["geo", "country"]) == "FR"
    assert lookup(ATTRS, ["geo", "city"]) is None
    assert lookup(ATTRS, ["view", "name", "x"]) is None
    assert lookup({"a": 0}, ["a", "b"]) is None


def test_get_attrs():
    assert get_attrs({"attributes": {"attributes": {"a": 1}}}) == {"a": 1}
    assert get_attrs({"attributes": {"attributes": {}}}) is None
    assert get_attrs({"attributes": {"attributes": None}}) is None
    assert get_attrs({"attributes": {}}) is None
    assert get_attrs({}) is None


def test_get_attrs_uses_to_dict():
    class Model:
        def to_dict(self):
            return {"attributes": {"attributes": {"view": {"id": "v1"}}}}

    assert get_attrs(Model()) == {"view": {"id": "v1"}}
