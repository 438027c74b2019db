"""Insert sentence-unit boundary markers between source lines."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

logger = logging.getLogger(__name__)

BOUNDARY = "eb"

# Position inside a text node: the node and a character offset.
Site = tuple[NavigableString, int]


def _is_continuation(line: str) -> bool:
    """Return True for lines that only carry formatting (blank or ``+``)."""

    stripped = line.strip()
    return not stripped or stripped == "+"


def _line_layout(block: Tag) -> tuple[list[str], list[Site]]:
    """Split the direct content of ``block`` into lines.

    Returns:
        The text of every line and, for each newline, the text node and
        offset where it sits. ``sites[k]`` terminates ``lines[k]``.
    """

    lines = [""]
    sites: list[Site] = []

    for child in block.children:
        if isinstance(child, Comment):
            continue

        if isinstance(child, NavigableString):
            for offset, char in enumerate(str(child)):
                if char == "\n":
                    sites.append((child, offset))
                    lines.append("")
                else:
                    lines[-1] += char
        elif isinstance(child, Tag):
            lines[-1] += child.get_text()

    return lines, sites


def _skip_block(block: Tag) -> bool:
    """Return True when ``block`` must keep its authored boundaries."""

    # Explicit sentence spans take precedence over line detection.
    for span in block.find_all("span"):
        if "ed" in span.get("class", []):
            return True

    if block.find(BOUNDARY) is not None:
        return True

    # Wrappers around nested clauses hold no running text of their own.
    if block.find("clause") is not None:
        return True

    return block.find_parent("edafio-group") is not None


def boundary_sites(block: Tag) -> list[Site]:
    """Return where boundary markers belong inside ``block``.

    A marker separates each pair of consecutive content lines. It goes at
    the end of the earlier line, or at the start of the later line when
    the earlier one ends with a hard break (`` +``).
    """

    lines, sites = _line_layout(block)
    content = [i for i, line in enumerate(lines) if not _is_continuation(line)]

    result: list[Site] = []
    for prev_idx, curr_idx in zip(content, content[1:]):
        if lines[prev_idx].rstrip().endswith(" +"):
            node, offset = sites[curr_idx - 1]
            result.append((node, offset + 1))
        else:
            result.append(sites[prev_idx])

    return result


def insert_boundary_markers(doc: BeautifulSoup) -> int:
    """Insert ``<eb/>`` markers between the source lines of text blocks.

    Args:
        doc: Document tree, modified in place.

    Returns:
        Number of markers inserted.
    """

    # Plan every insertion before mutating the tree.
    plan: dict[int, tuple[NavigableString, list[int]]] = {}
    for block in doc.find_all("p"):
        if _skip_block(block):
            continue

        for node, offset in boundary_sites(block):
            entry = plan.setdefault(id(node), (node, []))
            entry[1].append(offset)

    inserted = 0
    for node, offsets in plan.values():
        text = str(node)
        pieces: list[NavigableString | Tag] = []
        start = 0
        for offset in sorted(offsets):
            if offset > start:
                pieces.append(NavigableString(text[start:offset]))
            pieces.append(doc.new_tag(BOUNDARY))
            start = offset
            inserted += 1

        if start < len(text):
            pieces.append(NavigableString(text[start:]))

        node.replace_with(*pieces)

    logger.debug("Inserted %d sentence boundary markers", inserted)
    return inserted
