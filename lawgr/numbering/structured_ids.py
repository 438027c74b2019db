"""Derive path-like identifiers for structural clauses.

A structured identifier concatenates three segments:

* ``higher``: one ``<code><position>`` pair per book, part, tmima or chapter
  on the path, e.g. ``b1pt2``;
* ``article``: ``a<n>`` where ``n`` is the article's position among all
  articles of the document, extended with ``.<m>`` for a subarticle;
* ``paragraph``: ``p<n>`` with ``.<m>`` per nested paragraph level.

So the second paragraph of the first subarticle of the fifth article of a
law inside part 2 of book 1 is ``b1pt2a5.1p2``. Custom and untyped clauses
do not contribute a segment; their children are counted as if they sat
directly under the nearest structural ancestor.
"""

from __future__ import annotations

import logging

from attrs import define, field
from bs4 import BeautifulSoup, Tag

from .classifier import (
    ID_PREFIXES,
    StructuralType,
    classify,
    is_identified,
    is_transparent,
)
from .document import clause_children, clause_parent
from .types import IdMap, Node, NodeList

logger = logging.getLogger(__name__)


@define(slots=True)
class StructuredPath:
    """Segments of a structured identifier.

    Attributes:
        higher: Concatenated codes of the enclosing containers.
        articles: Article position followed by subarticle positions.
        paragraphs: Paragraph positions from outermost to innermost.
    """

    higher: str = ""
    articles: list[int] = field(factory=list)
    paragraphs: list[int] = field(factory=list)

    @property
    def article(self) -> str:
        """Article segment such as ``a5.1`` or an empty string."""

        if not self.articles:
            return ""
        return "a" + ".".join(str(n) for n in self.articles)

    @property
    def paragraph(self) -> str:
        """Paragraph segment such as ``p2.1`` or an empty string."""

        if not self.paragraphs:
            return ""
        return "p" + ".".join(str(n) for n in self.paragraphs)

    def identifier(self) -> str:
        """Return the full structured identifier."""

        return f"{self.higher}{self.article}{self.paragraph}"


class StructuredIdDeriver:
    """Compute structured identifiers for the clauses of one document."""

    def __init__(self, doc: BeautifulSoup) -> None:
        self.doc = doc

        # Document-order position of every article, keyed by node identity.
        articles = [
            c
            for c in doc.find_all("clause")
            if classify(c) is StructuralType.ARTICLE
        ]
        self._article_positions = {
            id(node): index for index, node in enumerate(articles, start=1)
        }

    def path(self, node: Node) -> StructuredPath:
        """Return the structured path segments for ``node``."""

        result = StructuredPath()
        for ancestor in self._ancestor_chain(node):
            kind = classify(ancestor)

            if is_transparent(kind):
                position = self._position_among_type(ancestor)
                result.higher += f"{ID_PREFIXES[kind]}{position}"
            elif kind is StructuralType.ARTICLE:
                result.articles.append(self._article_positions[id(ancestor)])
            elif kind is StructuralType.SUBARTICLE:
                result.articles.append(self._position_among_type(ancestor))
            elif kind is StructuralType.PARAGRAPH:
                result.paragraphs.append(self._position_among_type(ancestor))

        return result

    def identifier(self, node: Node) -> str | None:
        """Return the structured identifier of ``node``.

        Returns:
            The identifier, or ``None`` when ``node`` is not a structural
            clause.
        """

        if not is_identified(node):
            return None

        new_id = self.path(node).identifier()
        return new_id or None

    def plan(self) -> IdMap:
        """Map every current identifier to its structured replacement.

        Clauses without an identifier are left out of the plan.
        """

        id_map: IdMap = {}
        for clause in self.doc.find_all("clause"):
            new_id = self.identifier(clause)
            if new_id is None:
                continue

            old_id = clause.get("id")
            if not old_id:
                logger.debug("Clause %s has no id to rewrite", new_id)
                continue

            id_map[old_id] = new_id

        return id_map

    def _ancestor_chain(self, node: Node) -> NodeList:
        """Return the clause ancestors of ``node``, outermost first."""

        chain: NodeList = []
        current: Node | None = node
        while current is not None:
            chain.append(current)
            current = clause_parent(current)

        chain.reverse()
        return chain

    def _effective_parent(self, node: Node) -> Node | None:
        """Return the nearest ancestor that is not a pass-through clause."""

        parent = node.parent
        while isinstance(parent, Tag) and parent.name in ("clause", "p"):
            if parent.name == "clause" and is_identified(parent):
                return parent
            parent = parent.parent

        return parent if isinstance(parent, Tag) else None

    def _typed_children(self, parent: Node, kind: StructuralType) -> NodeList:
        """Collect clauses of ``kind`` under ``parent``.

        Pass-through clauses (custom, untyped) are flattened so that their
        children are counted at the parent's level.
        """

        result: NodeList = []
        for child in clause_children(parent):
            if child.name != "clause":
                continue

            child_kind = classify(child)
            if child_kind is kind:
                result.append(child)
            elif not is_identified(child):
                result.extend(self._typed_children(child, kind))

        return result

    def _position_among_type(self, node: Node) -> int:
        """Return the 1-based position of ``node`` among same-type clauses."""

        parent = self._effective_parent(node)
        if parent is None:
            return 1

        siblings = self._typed_children(parent, classify(node))
        for index, sibling in enumerate(siblings, start=1):
            if sibling is node:
                return index

        return 1


def replace_id_references(doc: BeautifulSoup, id_map: IdMap) -> int:
    """Rewrite every attribute value found in ``id_map``.

    Each attribute is looked up once, so chains such as ``x -> y -> z`` in
    the map are never followed.

    Args:
        doc: Document tree, modified in place.
        id_map: Old identifier to new identifier.

    Returns:
        Number of attribute values rewritten.
    """

    if not id_map:
        return 0

    # Collect all substitutions before touching the tree.
    updates: list[tuple[Tag, str, str]] = []
    for tag in doc.find_all(True):
        for name, value in tag.attrs.items():
            if isinstance(value, str) and value in id_map:
                updates.append((tag, name, id_map[value]))

    for tag, name, new_value in updates:
        tag[name] = new_value

    return len(updates)


def assign_structured_ids(doc: BeautifulSoup) -> IdMap:
    """Replace clause identifiers with structured ones.

    Args:
        doc: Document tree, modified in place.

    Returns:
        Map of old identifier to new identifier that was applied.
    """

    id_map = StructuredIdDeriver(doc).plan()
    rewritten = replace_id_references(doc, id_map)
    logger.debug(
        "Assigned %d structured ids (%d attribute values rewritten)",
        len(id_map),
        rewritten,
    )
    return id_map
