"""
DOM - Component tree model for obswalk

A UI tree is made of Components. Each component has ordered children, named
facets, and attached handlers. Handlers are tagged by kind; only auto-update
handlers carry an event list.

Key invariant: walking never mutates the tree. The tree is assumed acyclic;
pass max_depth to turn a cycle into a TreeDepthError instead of a hang.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class TreeDepthError(RecursionError):
    """Raised when a walk goes deeper than its max_depth."""


class HandlerKind(Enum):
    AUTO_UPDATE = "autoUpdate"
    OTHER = "other"


_EVENT_SPLIT = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class Handler:
    """An object attached to a component. Only AUTO_UPDATE uses `on`."""
    kind: HandlerKind
    on: str | None = None
    tag: str | None = None  # markup element this handler came from, if any

    @classmethod
    def auto_update(cls, on: str | None = None, tag: str | None = None) -> Handler:
        return cls(kind=HandlerKind.AUTO_UPDATE, on=on, tag=tag)

    @classmethod
    def other(cls, tag: str) -> Handler:
        return cls(kind=HandlerKind.OTHER, tag=tag)

    @property
    def is_auto_update(self) -> bool:
        return self.kind is HandlerKind.AUTO_UPDATE

    @property
    def events(self) -> list[str]:
        """Event tokens declared in `on` (space or comma separated)."""
        if not self.is_auto_update or not self.on:
            return []
        return [tok for tok in _EVENT_SPLIT.split(self.on) if tok]


@dataclass(eq=False)
class Component:
    """A node in the UI tree. Compared by identity."""
    id: str | None = None
    type: str = "component"
    children: list[Component] = field(default_factory=list, repr=False)
    facets: dict[str, Component] = field(default_factory=dict, repr=False)
    handlers: list[Handler] = field(default_factory=list)

    def add_child(self, child: Component) -> Component:
        """Add a child component and return it for chaining."""
        self.children.append(child)
        return child

    def set_facet(self, name: str, component: Component) -> Component:
        """Bind a facet and return the facet component."""
        self.facets[name] = component
        return component

    def attach(self, handler: Handler) -> Handler:
        self.handlers.append(handler)
        return handler

    def depth_first(self, max_depth: int | None = None) -> Iterator[Component]:
        """Pre-order walk: self, then children in order, then facet values."""
        for _, component in self.walk(max_depth):
            yield component

    def walk(self, max_depth: int | None = None) -> Iterator[tuple[tuple[str, ...], Component]]:
        """
        Pre-order walk yielding (path, component).

        Uses an explicit stack so deep trees do not hit the interpreter's
        recursion limit. Successors are pushed in reverse so they pop in
        children-then-facets order.
        """
        stack: list[tuple[tuple[str, ...], Component, int]] = [((_segment(self, None),), self, 0)]
        while stack:
            path, node, depth = stack.pop()
            if max_depth is not None and depth > max_depth:
                raise TreeDepthError(
                    f"Tree deeper than max_depth={max_depth} near .../{'/'.join(path[-3:])} (cyclic tree?)"
                )
            yield path, node

            successors: list[tuple[tuple[str, ...], Component, int]] = []
            for index, child in enumerate(node.children):
                successors.append((path + (_segment(child, index),), child, depth + 1))
            for name, facet in node.facets.items():
                successors.append((path + (f"@{name}",), facet, depth + 1))
            stack.extend(reversed(successors))


def _segment(component: Component, index: int | None) -> str:
    if component.id:
        return component.id
    if index is None:
        return component.type
    return f"{component.type}[{index}]"


def find_by_id(root: Component, component_id: str) -> Component | None:
    """Find the first component with the given id (pre-order)."""
    for node in root.depth_first():
        if node.id == component_id:
            return node
    return None


def collect_ids(root: Component) -> dict[str, Component]:
    """Collect all components with an id into a lookup dict."""
    return {node.id: node for node in root.depth_first() if node.id is not None}
