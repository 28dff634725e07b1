"""
Tests for the JSON tree format.
"""

import json
import sys

import pytest
from obswalk.core import find_observers
from obswalk.dom import HandlerKind
from obswalk.formats.json import JSONFormat, build_component


@pytest.fixture
def fmt():
    return JSONFormat()


SAMPLE = {
    "id": "form",
    "type": "form",
    "children": [
        {
            "id": "table",
            "type": "dataTable",
            "handlers": [{"kind": "autoUpdate", "on": "refresh"}],
            "facets": {
                "header": {"id": "hdr", "handlers": [{"kind": "autoUpdate", "on": "save, refresh"}]},
            },
        },
        {"id": "saveBtn", "type": "commandButton", "handlers": [{"kind": "ajax"}]},
    ],
}


class TestJSONFormat:
    def test_metadata(self, fmt):
        assert fmt.name == "json"
        assert fmt.extensions == [".json"]

    def test_detect(self, fmt):
        assert fmt.detect('  {"id": "x"}')
        assert not fmt.detect("<form/>")

    def test_builds_tree(self, fmt):
        root = fmt.parse(json.dumps(SAMPLE))
        assert root.id == "form"
        assert root.type == "form"
        assert [c.id for c in root.children] == ["table", "saveBtn"]
        table = root.children[0]
        assert table.type == "dataTable"
        assert table.facets["header"].id == "hdr"

    def test_handlers(self, fmt):
        root = fmt.parse(json.dumps(SAMPLE))
        table, button = root.children
        assert table.handlers[0].is_auto_update
        assert table.handlers[0].on == "refresh"
        assert button.handlers[0].kind is HandlerKind.OTHER
        assert button.handlers[0].tag == "ajax"

    def test_defaults_for_missing_keys(self, fmt):
        root = fmt.parse("{}")
        assert root.id is None
        assert root.type == "component"
        assert root.children == []

    def test_auto_update_without_on(self, fmt):
        root = fmt.parse('{"handlers": [{"kind": "autoUpdate"}]}')
        assert root.handlers[0].is_auto_update
        assert root.handlers[0].on is None
        assert root.handlers[0].tag is None

    def test_find_observers_on_loaded_tree(self, fmt):
        root = fmt.parse(json.dumps(SAMPLE))
        assert [c.id for c in find_observers(root, "refresh")] == ["table", "hdr"]
        assert [c.id for c in find_observers(root, "save")] == ["hdr"]


class TestJSONFormatErrors:
    def test_invalid_json(self, fmt):
        with pytest.raises(ValueError, match="Invalid JSON tree"):
            fmt.parse("{not json")

    def test_root_not_object(self, fmt):
        with pytest.raises(ValueError, match=r"\$: component must be an object"):
            fmt.parse("[1, 2]")

    def test_bad_child_located(self, fmt):
        with pytest.raises(ValueError, match=r"\$\.children\[1\]"):
            fmt.parse('{"children": [{}, 5]}')

    def test_children_not_list(self, fmt):
        with pytest.raises(ValueError, match="children: expected a list"):
            fmt.parse('{"children": {}}')

    def test_facets_not_object(self, fmt):
        with pytest.raises(ValueError, match="facets: expected an object"):
            fmt.parse('{"facets": []}')

    def test_handler_without_kind(self, fmt):
        with pytest.raises(ValueError, match="kind"):
            fmt.parse('{"handlers": [{"on": "save"}]}')

    def test_non_string_on(self, fmt):
        with pytest.raises(ValueError, match="on: expected a string"):
            fmt.parse('{"handlers": [{"kind": "autoUpdate", "on": 3}]}')


class TestDeepJSON:
    def test_build_beyond_recursion_limit(self):
        depth = sys.getrecursionlimit() + 500
        data = {"id": "leaf", "handlers": [{"kind": "autoUpdate", "on": "save"}]}
        for i in range(depth):
            data = {"id": f"n{i}", "children": [data]}
        root = build_component(data)
        assert [c.id for c in find_observers(root, "save")] == ["leaf"]
        assert sum(1 for _ in root.depth_first()) == depth + 1

    def test_facets_built_iteratively(self):
        data = {"id": "leaf"}
        for i in range(sys.getrecursionlimit() + 500):
            data = {"id": f"n{i}", "facets": {"inner": data}}
        root = build_component(data)
        assert sum(1 for _ in root.depth_first(max_depth=None)) == sys.getrecursionlimit() + 501
        assert root.facets["inner"].id == f"n{sys.getrecursionlimit() + 498}"

    def test_error_located_deep(self, fmt):
        with pytest.raises(ValueError, match=r"\$\.children\[0\]\.children\[0\]\.id"):
            fmt.parse('{"children": [{"children": [{"id": 7}]}]}')

    def test_too_deep_to_decode(self, fmt):
        depth = 100_000
        with pytest.raises(ValueError, match="nested too deeply"):
            fmt.parse('{"children": [' * depth + "{}" + "]}" * depth)
