# press/markdown/anchors.py
"""
Anchor-tagging hooks for headings and list items.

Every heading and list item rendered through these hooks gets:
- An anchor id usable as a URL fragment for deep linking
- A marker link (map-marker icon) in front of its text pointing at that anchor

The anchor policy decides where the heading id lives and how list item
anchors are numbered:

- heading_id: id on the heading element, list items are L_1, L_2, ...
- marker_id:  id on the marker link inside the heading, list items as above
- section:    headings bump a section counter, list items are S{section}_L{n}
              (n keeps counting across sections)
- scoped:     list items are {heading-slug}_L{n}, n restarts at every heading

An AnchorRenderer holds the counters for one document. Create a new one per
document so anchors from different pages never interfere.
"""

import re
from enum import Enum
from typing import Optional

# Character entity references such as &amp; or &nbsp;
_ENTITY_RE = re.compile(r"&\w+;", re.ASCII)

MARKER_ICON = "<i class='icon-map-marker'></i>"


class AnchorPolicy(str, Enum):
    HEADING_ID = "heading_id"
    MARKER_ID = "marker_id"
    SECTION = "section"
    SCOPED = "scoped"

    @classmethod
    def from_value(cls, value) -> "AnchorPolicy":
        """Look up a policy by its setting name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(policy.value for policy in cls)
            raise ValueError(
                f"Unknown anchor policy {value!r} (expected one of: {choices})"
            ) from None


DEFAULT_POLICY = AnchorPolicy.SCOPED


def slugify_header(text: str) -> str:
    """
    Derive a heading anchor from its rendered text.

    The steps run in this order: lowercase, strip surrounding whitespace,
    turn each space into a hyphen, drop entity references. Nothing else is
    removed, so "A &amp; B" becomes "a--b".
    """
    slug = text.lower().strip().replace(" ", "-")
    return _ENTITY_RE.sub("", slug)


def _marker_link(anchor: str, with_id: bool = False) -> str:
    if with_id:
        return f"<a class='reference' id='{anchor}' href='#{anchor}'>{MARKER_ICON}</a>"
    return f"<a class='reference' href='#{anchor}'>{MARKER_ICON}</a>"


class AnchorRenderer:
    """
    Render context for a single document.

    Args:
        policy: AnchorPolicy or its string name (default: scoped)
    """

    def __init__(self, policy=DEFAULT_POLICY):
        self.policy = AnchorPolicy.from_value(policy)
        self.reset()

    def reset(self):
        """Return to the initial state: counters at zero, no current heading."""
        self.list_index = 0
        self.section = 0
        self.current_anchor = ""

    def header(self, text: str, level: int) -> str:
        """Render a heading of the given level (1-6) around already-rendered text."""
        if self.policy is AnchorPolicy.SECTION:
            self.section += 1

        anchor = slugify_header(text)

        if self.policy is AnchorPolicy.SCOPED:
            self.current_anchor = anchor
            self.list_index = 0

        if self.policy is AnchorPolicy.MARKER_ID:
            return f"<h{level}>{_marker_link(anchor, with_id=True)}{text}</h{level}>"

        return f"<h{level} id='{anchor}'>{_marker_link(anchor)}{text}</h{level}>"

    def list_item(self, text: str, list_type: Optional[str] = None) -> str:
        """Render a list item. list_type is accepted for the engine's calling convention only."""
        anchor = self.next_list_anchor()
        return f"<li id='{anchor}'>{_marker_link(anchor)}{text}</li>"

    def next_list_anchor(self) -> str:
        self.list_index += 1

        if self.policy is AnchorPolicy.SECTION:
            return f"S{self.section}_L{self.list_index}"
        if self.policy is AnchorPolicy.SCOPED:
            return f"{self.current_anchor}_L{self.list_index}"
        return f"L_{self.list_index}"

    def __repr__(self):
        return (
            f"AnchorRenderer(policy={self.policy.value!r}, section={self.section}, "
            f"list_index={self.list_index}, current_anchor={self.current_anchor!r})"
        )
