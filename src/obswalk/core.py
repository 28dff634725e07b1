"""
Core observer search for obswalk.

Finds components whose auto-update handlers declare interest in an event.
Matching is a plain substring test on the handler's `on` string, so an event
name "click" also matches an `on` of "dblclick".

A component is reported once per qualifying handler: two matching handlers
on the same component put it in the result twice.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import get_config
from .dom import Component, Handler
from .log import get_logger

logger = get_logger(__name__)

# Pass as max_depth to walk with no depth bound, whatever the config says
UNBOUNDED = 0


@dataclass(frozen=True)
class Observer:
    """One qualifying (component, handler) pair and where it sits in the tree."""
    path: tuple[str, ...]
    component: Component
    handler: Handler

    @property
    def path_str(self) -> str:
        return "/".join(self.path)


def handler_observes(handler: Handler, event_name: str) -> bool:
    """True if handler is auto-update and its `on` contains event_name."""
    return handler.is_auto_update and handler.on is not None and event_name in handler.on


def _resolve_depth(max_depth: int | None) -> int | None:
    """None defers to config; 0 or less (UNBOUNDED) disables the bound."""
    if max_depth is None:
        return get_config().max_depth
    return max_depth if max_depth > 0 else None


def _check_args(root: Component | None, event_name: str) -> None:
    if root is None:
        raise ValueError("root component must not be None")
    if event_name == "":
        logger.warning("Empty event name matches every auto-update handler with an 'on' list")


def _collect(root: Component, event_name: str, depth: int | None) -> list[Observer]:
    found: list[Observer] = []
    for path, component in root.walk(depth):
        for handler in component.handlers:
            if handler_observes(handler, event_name):
                found.append(Observer(path=path, component=component, handler=handler))
    return found


def locate_observers(
    root: Component,
    event_name: str,
    max_depth: int | None = None,
) -> list[Observer]:
    """
    Find every (component, handler) pair observing event_name.

    Order is pre-order: a component before its children, children before
    facets, facets in mapping order. Handlers are checked in attachment order.

    max_depth: None uses the configured bound, UNBOUNDED (or any value
    <= 0) walks without one.
    """
    _check_args(root, event_name)
    depth = _resolve_depth(max_depth)
    logger.debug("Searching observers of %r (max_depth=%s)", event_name, depth)

    found = _collect(root, event_name, depth)

    logger.debug("Found %d observer(s) of %r", len(found), event_name)
    return found


def find_observers(
    root: Component,
    event_name: str,
    max_depth: int | None = None,
) -> list[Component]:
    """Return components observing event_name, in traversal order, one entry per qualifying handler."""
    return [obs.component for obs in locate_observers(root, event_name, max_depth)]


def group_by_event(root: Component, max_depth: int | None = None) -> dict[str, list[Component]]:
    """
    Map each event token declared in the tree to its observers.

    Keys are in first-seen order. Observers per key follow find_observers,
    so substring semantics apply: "click" also lists components whose `on`
    only declares "dblclick".
    """
    if root is None:
        raise ValueError("root component must not be None")
    depth = _resolve_depth(max_depth)

    events: dict[str, None] = {}
    for component in root.depth_first(depth):
        for handler in component.handlers:
            for event in handler.events:
                events.setdefault(event, None)

    return {
        event: [obs.component for obs in _collect(root, event, depth)]
        for event in events
    }
