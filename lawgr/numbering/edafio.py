"""Number sentence units (εδάφια) inside paragraphs and list items.

Sentence units are delimited by ``<eb/>`` boundary markers inside ``<p>``
blocks. Only eligible clauses take part: paragraph clauses, and articles or
subarticles with no paragraph below them (which act as one implicit
paragraph). The pipeline runs these passes over the whole document:

1. explicit ``<span class="ed">`` spans become text separated by markers;
2. markers outside any eligible scope are dropped;
3. consecutive lists with contiguous numbering are linked;
4. units are numbered and receive identifiers such as ``a3p2e4``;
5. ``<edafio-group>`` wrappers are dissolved.
"""

from __future__ import annotations

import logging

from attrs import define
from bs4 import BeautifulSoup, Tag

from .classifier import StructuralType, classify, is_identified
from .document import clause_children
from .lists import item_position
from .sentence_lines import BOUNDARY
from .structured_ids import StructuredIdDeriver
from .types import Node, NodeList

logger = logging.getLogger(__name__)

GROUP = "edafio-group"


@define(slots=True)
class EdafioStats:
    """Summary of one sentence-unit numbering run.

    Attributes:
        converted_spans: Explicit spans unwrapped into marker-separated text.
        dropped_markers: Markers removed because they were out of scope.
        merged_lists: Lists linked to a preceding list.
        numbered_units: Sentence units that received a number.
    """

    converted_spans: int = 0
    dropped_markers: int = 0
    merged_lists: int = 0
    numbered_units: int = 0


def is_eligible(node: Node | None) -> bool:
    """Return True when sentence units are numbered inside ``node``."""

    if not isinstance(node, Tag) or node.name != "clause":
        return False

    kind = classify(node)
    if kind is StructuralType.PARAGRAPH:
        return True
    if kind not in (StructuralType.ARTICLE, StructuralType.SUBARTICLE):
        return False

    return not _holds_paragraph(node)


def _holds_paragraph(node: Node) -> bool:
    """Return True when a paragraph clause sits below ``node``.

    Custom and untyped clauses are looked through; their paragraphs count
    at the level of ``node``.
    """

    for child in clause_children(node):
        if classify(child) is StructuralType.PARAGRAPH:
            return True
        if not is_identified(child) and _holds_paragraph(child):
            return True
    return False


def nearest_eligible(node: Node) -> Node | None:
    """Return the closest eligible clause above ``node``, if any."""

    for parent in node.parents:
        if is_eligible(parent):
            return parent
    return None


def eligible_clauses(doc: BeautifulSoup) -> NodeList:
    """Return every eligible clause in document order."""

    return [c for c in doc.find_all("clause") if is_eligible(c)]


def explicit_markers(block: Tag) -> NodeList:
    """Return the authored or detected markers of ``block``.

    The synthesised marker of the first unit is not included.
    """

    return [
        eb
        for eb in block.find_all(BOUNDARY, recursive=False)
        if not eb.has_attr("implicit")
    ]


def _implicit_marker(block: Tag) -> Tag | None:
    for eb in block.find_all(BOUNDARY, recursive=False):
        if eb.has_attr("implicit"):
            return eb
    return None


def _enclosing_item(node: Tag, stop: Tag) -> Tag | None:
    """Return the nearest ``<li>`` above ``node`` that is below ``stop``."""

    parent = node.parent
    while parent is not None and parent is not stop:
        if parent.name == "li":
            return parent
        parent = parent.parent
    return None


class EdafioNumberer:
    """Run the sentence-unit pipeline over one document."""

    def __init__(self, doc: BeautifulSoup) -> None:
        self.doc = doc
        self.stats = EdafioStats()
        self._deriver: StructuredIdDeriver | None = None

    def run(self) -> EdafioStats:
        """Execute all passes in order and return the statistics."""

        self.convert_spans()
        self.strip_out_of_scope()
        self.merge_contiguous_lists()
        self.number_and_identify()
        self.unwrap_groups()

        logger.debug("Sentence-unit numbering finished: %s", self.stats)
        return self.stats

    # ---------- Pass 1: explicit spans ----------

    def convert_spans(self) -> None:
        """Replace explicit sentence spans with marker-separated text."""

        for block in self.doc.find_all("p"):
            spans = [
                span
                for span in block.find_all("span", recursive=False)
                if "ed" in span.get("class", [])
            ]

            for index, span in enumerate(spans):
                # The first unit gets its marker during numbering.
                if index > 0:
                    span.insert_before(self.doc.new_tag(BOUNDARY))
                span.unwrap()
                self.stats.converted_spans += 1

    # ---------- Pass 2: scope pruning ----------

    def _in_scope(self, marker: Tag) -> bool:
        block = marker.parent
        if block is None or block.name != "p":
            return False

        container = block.parent
        if is_eligible(container):
            return True
        if container is not None and container.name == GROUP:
            return is_eligible(container.parent)
        if container is not None and container.name == "li":
            return nearest_eligible(container) is not None
        return False

    def strip_out_of_scope(self) -> None:
        """Remove markers that are not inside an eligible body or item."""

        stray = [
            eb for eb in self.doc.find_all(BOUNDARY) if not self._in_scope(eb)
        ]
        for marker in stray:
            marker.decompose()

        self.stats.dropped_markers += len(stray)

    # ---------- Pass 3: contiguous lists ----------

    def merge_contiguous_lists(self) -> None:
        """Link lists whose ``start`` continues the previous list."""

        for clause in eligible_clauses(self.doc):
            lists: NodeList = []
            for child in clause.children:
                if not isinstance(child, Tag):
                    continue
                if child.name == "ol":
                    lists.append(child)
                elif child.name == GROUP:
                    lists.extend(child.find_all("ol", recursive=False))

            for prev, curr in zip(lists, lists[1:]):
                prev_count = len(prev.find_all("li", recursive=False))
                try:
                    start = int(curr.get("start", ""))
                except ValueError:
                    continue

                if start == prev_count + 1:
                    curr["merged-list"] = "true"
                    curr["merged-start"] = str(prev_count)
                    self.stats.merged_lists += 1

    # ---------- Pass 4: numbering ----------

    @property
    def deriver(self) -> StructuredIdDeriver:
        if self._deriver is None:
            self._deriver = StructuredIdDeriver(self.doc)
        return self._deriver

    def paragraph_prefix(self, clause: Tag) -> str:
        """Return the identifier prefix for units in ``clause``'s body.

        Articles and subarticles without paragraphs get the implicit
        ``p1`` segment, e.g. ``a2p1``. The higher segment is only kept when
        there is no article segment to anchor the identifier.
        """

        path = self.deriver.path(clause)
        paragraph = path.paragraph or "p1"
        if path.article:
            return f"{path.article}{paragraph}"
        return f"{path.higher}{paragraph}"

    def item_prefix(self, clause: Tag, item: Tag) -> str:
        """Return the identifier prefix for units of a list item.

        Nested items add one ``li<n>`` step per level, e.g. ``a9.1p3li3li1``.
        """

        steps: list[int] = []
        current: Tag | None = item
        while current is not None:
            steps.insert(0, item_position(current))
            current = _enclosing_item(current, clause)

        return self.paragraph_prefix(clause) + "".join(
            f"li{step}" for step in steps
        )

    def number_block(
        self, block: Tag, counter: int, prefix: str | None
    ) -> int:
        """Number the units of one text block.

        The first unit is implicit; when a prefix is known it receives a
        synthesised ``<eb implicit="true">`` at the start of the block.
        Every following marker takes the next number.

        Args:
            block: ``<p>`` element.
            counter: Units numbered so far in the enclosing body.
            prefix: Identifier prefix, or ``None`` to number without ids.

        Returns:
            The updated counter.
        """

        start = counter
        markers = explicit_markers(block)

        counter += 1
        if prefix:
            first = _implicit_marker(block)
            if first is None:
                first = self.doc.new_tag(BOUNDARY, attrs={"implicit": "true"})
                block.insert(0, first)
            first["edafio-n"] = str(counter)
            first["id"] = f"{prefix}e{counter}"

        for marker in markers:
            counter += 1
            marker["edafio-n"] = str(counter)
            if prefix:
                marker["id"] = f"{prefix}e{counter}"

        units = counter - start
        if units > 1:
            block["edafio-count"] = str(units)
        elif block.has_attr("edafio-count"):
            del block["edafio-count"]

        self.stats.numbered_units += units
        return counter

    def number_group(
        self, group: Tag, counter: int, prefix: str | None
    ) -> int:
        """Number an explicit group as a single unit."""

        first_block = group.find("p", recursive=False)
        if first_block is None:
            return counter

        counter += 1
        if prefix:
            marker = _implicit_marker(first_block)
            if marker is None:
                marker = self.doc.new_tag(BOUNDARY, attrs={"implicit": "true"})
                first_block.insert(0, marker)
            marker["edafio-n"] = str(counter)
            marker["id"] = f"{prefix}e{counter}"

        self.stats.numbered_units += 1
        return counter

    def number_body(self, clause: Tag) -> None:
        """Number units across the direct body blocks of ``clause``."""

        prefix = self.paragraph_prefix(clause)
        counter = 0
        for child in clause.children:
            if not isinstance(child, Tag):
                continue
            if child.name == "p":
                counter = self.number_block(child, counter, prefix)
            elif child.name == GROUP:
                counter = self.number_group(child, counter, prefix)

    def number_items(self, clause: Tag) -> None:
        """Number units inside each list item owned by ``clause``."""

        for item in clause.find_all("li"):
            # Items of a nested eligible clause are numbered with it.
            if nearest_eligible(item) is not clause:
                continue

            prefix = self.item_prefix(clause, item)
            counter = 0
            for block in item.find_all("p", recursive=False):
                counter = self.number_block(block, counter, prefix)

    def number_and_identify(self) -> None:
        for clause in eligible_clauses(self.doc):
            self.number_body(clause)
            self.number_items(clause)

    # ---------- Pass 5: unwrap ----------

    def unwrap_groups(self) -> None:
        """Dissolve ``<edafio-group>`` wrappers, keeping their children."""

        for group in self.doc.find_all(GROUP):
            group.unwrap()


def number_sentence_units(doc: BeautifulSoup) -> EdafioStats:
    """Run the sentence-unit pipeline on ``doc`` in place."""

    return EdafioNumberer(doc).run()
