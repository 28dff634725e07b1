"""
JSON tree format.

One object per component:

    {"id": "form", "type": "form",
     "handlers": [{"kind": "autoUpdate", "on": "save"}],
     "children": [...],
     "facets": {"header": {...}}}

Every key is optional. A handler kind other than "autoUpdate" becomes an
OTHER handler tagged with that kind.
"""

from __future__ import annotations

import json

from ..dom import Component, Handler, HandlerKind
from .base import TreeFormat, registry


class JSONFormat(TreeFormat):
    """JSON component tree loader."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def extensions(self) -> list[str]:
        return [".json"]

    def detect(self, content: str) -> bool:
        return content.lstrip().startswith("{")

    def parse(self, content: str) -> Component:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON tree: {e}") from e
        except RecursionError as e:
            raise ValueError("Invalid JSON tree: nested too deeply to decode") from e
        return build_component(data)


def build_component(data: object, where: str = "$") -> Component:
    """
    Build a Component tree from decoded JSON. `where` locates errors.

    Works from an explicit stack, so nesting depth is not limited by the
    interpreter's recursion limit.
    """
    root = _new_component(data, where)
    stack: list[tuple[Component, dict, str]] = [(root, data, where)]
    while stack:
        component, raw, loc = stack.pop()

        children = raw.get("children", [])
        if not isinstance(children, list):
            raise ValueError(f"{loc}.children: expected a list")
        for i, child_raw in enumerate(children):
            child_loc = f"{loc}.children[{i}]"
            child = component.add_child(_new_component(child_raw, child_loc))
            stack.append((child, child_raw, child_loc))

        facets = raw.get("facets", {})
        if not isinstance(facets, dict):
            raise ValueError(f"{loc}.facets: expected an object")
        for name, facet_raw in facets.items():
            facet_loc = f"{loc}.facets.{name}"
            facet = component.set_facet(name, _new_component(facet_raw, facet_loc))
            stack.append((facet, facet_raw, facet_loc))

    return root


def _new_component(data: object, where: str) -> Component:
    """Component with id, type and handlers; subtree is filled in by the caller."""
    if not isinstance(data, dict):
        raise ValueError(f"{where}: component must be an object, got {type(data).__name__}")

    component = Component(
        id=_optional_str(data.get("id"), f"{where}.id"),
        type=_optional_str(data.get("type"), f"{where}.type") or "component",
    )

    handlers = data.get("handlers", [])
    if not isinstance(handlers, list):
        raise ValueError(f"{where}.handlers: expected a list")
    for i, raw in enumerate(handlers):
        component.attach(_build_handler(raw, f"{where}.handlers[{i}]"))

    return component


def _build_handler(raw: object, where: str) -> Handler:
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: handler must be an object")
    kind = raw.get("kind")
    if not isinstance(kind, str) or not kind:
        raise ValueError(f"{where}.kind: expected a non-empty string")
    if kind == HandlerKind.AUTO_UPDATE.value:
        return Handler.auto_update(_optional_str(raw.get("on"), f"{where}.on"))
    return Handler.other(kind)


def _optional_str(value: object, where: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"{where}: expected a string, got {type(value).__name__}")


registry.register(JSONFormat())
