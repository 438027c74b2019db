"""Labels for items of ordered lists inside clauses."""

from __future__ import annotations

from bs4 import Tag

from .greek_numerals import greek_double, greek_lower, greek_upper, roman
from .types import Node

# Explicit list types and how their item positions are spelled.
_EXPLICIT_STYLES = {
    "lowergreek": greek_lower,
    "uppergreek": greek_upper,
    "roman": lambda n: roman(n, upper=False),
    "roman_upper": roman,
    "arabic": str,
}


def list_depth(ordered_list: Tag) -> int:
    """Return the nesting depth of ``ordered_list`` (1 for top level)."""

    depth = 1
    for parent in ordered_list.parents:
        if parent.name == "clause":
            break
        if parent.name in ("ol", "ul"):
            depth += 1
    return depth


def item_position(item: Tag) -> int:
    """Return the 1-based position of ``item`` including merged offsets."""

    position = len(item.find_previous_siblings("li")) + 1
    parent = item.parent
    if parent is not None and parent.name == "ol":
        try:
            position += int(parent.get("merged-start", "0"))
        except ValueError:
            pass
    return position


def _parent_item(item: Tag) -> Tag | None:
    parent = item.parent
    while parent is not None and parent.name != "clause":
        if parent.name == "li":
            return parent
        parent = parent.parent
    return None


def item_label(item: Tag) -> str | None:
    """Return the display label of a list item.

    Lists with an explicit ``type`` use that style. Otherwise the style
    follows nesting: lower Greek at the first level, double Greek
    (``αα``, ``αβ``...) at the second, lowercase Roman below that.

    Returns:
        The label, or ``None`` for items of unordered lists.
    """

    ordered_list = item.parent
    if ordered_list is None or ordered_list.name != "ol":
        return None

    position = item_position(item)
    style = ordered_list.get("type")
    if style in _EXPLICIT_STYLES:
        return _EXPLICIT_STYLES[style](position)

    depth = list_depth(ordered_list)
    if depth == 1:
        return greek_lower(position)
    if depth == 2:
        parent = _parent_item(item)
        if parent is not None:
            return greek_double(item_position(parent), position)
        return greek_lower(position)
    return roman(position, upper=False)


def owned_items(clause: Node) -> list[Tag]:
    """Return list items whose nearest clause ancestor is ``clause``."""

    return [
        item
        for item in clause.find_all("li")
        if item.find_parent("clause") is clause
    ]
