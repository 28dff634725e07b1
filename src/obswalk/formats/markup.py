"""
Markup tree format.

Reads Facelets-style page markup (XHTML/XML) into a Component tree:
- <autoUpdate on="..."/> attaches an auto-update handler to its parent
- ajax, listeners, converters and validators attach OTHER handlers
- <facet name="x"> binds its child element as facet "x"
- every other element is a child component (id from the id attribute)

Namespace prefixes are ignored; only local tag names matter.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..dom import Component, Handler
from .base import TreeFormat, registry

AUTO_UPDATE_TAG = "autoUpdate"
FACET_TAG = "facet"
FACET_WRAPPER_TYPE = "panelGroup"

# Tags that attach to their parent instead of becoming components
ATTACHED_TAGS = frozenset({
    "ajax",
    "actionListener",
    "valueChangeListener",
    "setPropertyActionListener",
    "resetInput",
    "converter",
    "convertDateTime",
    "convertNumber",
    "validator",
    "validateBean",
    "validateLength",
    "validateLongRange",
    "validateRegex",
    "validateRequired",
    "attribute",
    "param",
})


def local_name(tag: str) -> str:
    """Strip an ElementTree "{namespace}" prefix."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def _is_component(element: ET.Element) -> bool:
    if not isinstance(element.tag, str):
        return False  # comments, processing instructions
    tag = local_name(element.tag)
    return tag not in ATTACHED_TAGS and tag not in (AUTO_UPDATE_TAG, FACET_TAG)


class MarkupFormat(TreeFormat):
    """Facelets-style markup loader."""

    @property
    def name(self) -> str:
        return "markup"

    @property
    def extensions(self) -> list[str]:
        return [".xhtml", ".xml"]

    def detect(self, content: str) -> bool:
        return content.lstrip().startswith("<")

    def parse(self, content: str) -> Component:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ValueError(f"Invalid markup: {e}") from e
        except RecursionError as e:
            raise ValueError("Invalid markup: nested too deeply to parse") from e
        if not _is_component(root):
            raise ValueError(f"Root element must be a component, got <{local_name(root.tag)}>")
        return self._build(root)

    def _build(self, element: ET.Element) -> Component:
        """Build the component tree from an explicit stack of pending elements."""
        root = _new_component(element)
        stack: list[tuple[Component, ET.Element]] = [(root, element)]
        while stack:
            component, el = stack.pop()
            for child in el:
                if not isinstance(child.tag, str):
                    continue  # comments, processing instructions
                tag = local_name(child.tag)
                if tag == AUTO_UPDATE_TAG:
                    component.attach(Handler.auto_update(child.get("on"), tag=tag))
                elif tag in ATTACHED_TAGS:
                    component.attach(Handler.other(tag))
                elif tag == FACET_TAG:
                    stack.extend(self._bind_facet(component, child))
                else:
                    sub = component.add_child(_new_component(child))
                    stack.append((sub, child))

        return root

    def _bind_facet(self, owner: Component, facet: ET.Element) -> list[tuple[Component, ET.Element]]:
        """Bind the facet's component(s) to owner; return them for further building."""
        name = facet.get("name")
        if not name:
            raise ValueError(f"<facet> without a name inside <{owner.type}>")

        pending = [(_new_component(el), el) for el in facet if _is_component(el)]
        if not pending:
            return []
        if len(pending) == 1:
            owner.set_facet(name, pending[0][0])
            return pending

        # A facet holds one component; group several under a wrapper
        wrapper = Component(type=FACET_WRAPPER_TYPE)
        for part, _ in pending:
            wrapper.add_child(part)
        owner.set_facet(name, wrapper)
        return pending


def _new_component(element: ET.Element) -> Component:
    return Component(id=element.get("id"), type=local_name(element.tag))


registry.register(MarkupFormat())
