"""
Tests for format registration and detection.
"""

from obswalk.formats import json as _json  # noqa: F401
from obswalk.formats import markup as _markup  # noqa: F401
from obswalk.formats.base import FormatRegistry, TreeFormat, registry
from obswalk.dom import Component


class DummyFormat(TreeFormat):
    @property
    def name(self) -> str:
        return "dummy"

    @property
    def extensions(self) -> list[str]:
        return [".dum", ".json"]

    def parse(self, content: str) -> Component:
        return Component(id=content)


class TestGlobalRegistry:
    def test_builtin_formats_registered(self):
        names = {s.name for s in registry.strategies}
        assert {"json", "markup"} <= names

    def test_extension_lookup(self):
        assert registry.get_by_extension(".json").name == "json"
        assert registry.get_by_extension("XHTML").name == "markup"

    def test_detect_by_extension(self):
        match = registry.detect("<form/>", "page.json")
        assert match.strategy.name == "json"
        assert match.confidence == 1.0

    def test_detect_by_content(self):
        match = registry.detect("<form/>", "page.txt")
        assert match.strategy.name == "markup"
        assert match.confidence == 0.8

    def test_detect_nothing(self):
        assert registry.detect("plain words", None) is None


class TestFormatRegistry:
    def test_first_extension_wins(self):
        reg = FormatRegistry()
        first = DummyFormat()
        reg.register(first)
        reg.register(DummyFormat())
        assert reg.get_by_extension(".dum") is first

    def test_get_by_name(self):
        reg = FormatRegistry()
        reg.register(DummyFormat())
        assert reg.get_by_name("dummy").parse("x").id == "x"
        assert reg.get_by_name("missing") is None

    def test_default_detect_is_false(self):
        reg = FormatRegistry()
        reg.register(DummyFormat())
        assert reg.detect("anything") is None
