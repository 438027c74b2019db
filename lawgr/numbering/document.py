"""Helpers for reading and normalising the clause tree."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from .classifier import HEADING_TYPES
from .types import Node, NodeList

logger = logging.getLogger(__name__)

# Element names that are numbering-relevant children of a clause.
NUMBERED_CHILD_NAMES = frozenset(
    {"clause", "terms", "definitions", "references"}
)


def load_document(markup: str) -> BeautifulSoup:
    """Parse document markup into a tree.

    Args:
        markup: XML-like markup of the document.

    Returns:
        Parsed tree.
    """

    return BeautifulSoup(markup, "html.parser")


def document_to_string(doc: BeautifulSoup) -> str:
    """Serialise ``doc`` back to markup."""

    return doc.decode()


def normalize_headings(doc: BeautifulSoup) -> int:
    """Turn authoring ``heading`` attributes into clause ``type`` values.

    A clause written with ``heading="article"`` becomes ``type="article"``.
    A different type already present on the clause is kept as its
    ``semantic-type``.

    Args:
        doc: Document tree, modified in place.

    Returns:
        Number of clauses that were rewritten.
    """

    changed = 0
    for clause in doc.find_all("clause", attrs={"heading": True}):
        heading = clause["heading"].strip().lower()
        del clause["heading"]

        if heading not in HEADING_TYPES:
            logger.debug("Ignoring unknown heading %r", heading)
            continue

        # Keep the authored semantic classification.
        previous = clause.get("type")
        if previous and previous != heading:
            clause["semantic-type"] = previous

        clause["type"] = heading
        changed += 1

    return changed


def read_inherit_numbering(doc: BeautifulSoup) -> bool:
    """Return the document-level ``inheritnumbering`` flag."""

    bibdata = doc.find("bibdata")
    if bibdata is None:
        return False

    flag = bibdata.find("inheritnumbering")
    return flag is not None and flag.get_text(strip=True) == "true"


def numbering_roots(doc: BeautifulSoup) -> NodeList:
    """Return the top-level nodes the walker starts from.

    Children of ``<sections>`` are used when present; otherwise every
    clause without a clause ancestor.
    """

    sections = doc.find("sections")
    if sections is not None:
        return [
            child
            for child in sections.children
            if isinstance(child, Tag) and child.name in NUMBERED_CHILD_NAMES
        ]

    return [
        clause
        for clause in doc.find_all("clause")
        if clause.find_parent("clause") is None
    ]


def clause_children(node: Node) -> NodeList:
    """Return the numbering-relevant children of ``node`` in order.

    Clauses wrapped in a direct ``<p>`` child are included in place.
    """

    children: NodeList = []
    for child in node.children:
        if not isinstance(child, Tag):
            continue

        if child.name in NUMBERED_CHILD_NAMES:
            children.append(child)
        elif child.name == "p":
            children.extend(child.find_all("clause", recursive=False))

    return children


def clause_parent(node: Node) -> Node | None:
    """Return the nearest clause ancestor, skipping ``<p>`` wrappers."""

    parent = node.parent
    while isinstance(parent, Tag) and parent.name == "p":
        parent = parent.parent

    if isinstance(parent, Tag) and parent.name == "clause":
        return parent
    return None


def clause_title(node: Node) -> str | None:
    """Return the plain text of the direct ``<title>`` child, if any."""

    title = node.find("title", recursive=False)
    if title is None:
        return None

    text = title.get_text(" ", strip=True)
    return text or None


def is_unnumbered(node: Node) -> bool:
    """Return True when ``node`` is flagged as not numbered."""

    return node.get("unnumbered") == "true"


def shows_number(node: Node) -> bool:
    """Return False when the number must not be attached to the heading."""

    return node.get("number-heading") != "false"

