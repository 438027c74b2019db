"""Assign labels to the structural nodes of a legal document.

The walker visits the clause tree once in document order and registers an
:class:`~lawgr.numbering.anchor.Anchor` for every node it numbers.

Numbering rules:

* books, parts, tmimata and chapters have one counter per type for the
  whole document and do not take part in the numbering prefix;
* articles share one counter across the whole document, whatever
  container they sit in;
* subarticles restart in every article, paragraphs and custom divisions
  in every article, subarticle and paragraph;
* a custom division takes a letter of its own but lets the surrounding
  paragraph sequence run through it;
* anything else is numbered with a plain per-level counter.

When inherited numbering is on, subarticles and paragraphs are shown with
their ancestry (``3.1.2``); otherwise with their own number only.
"""

from __future__ import annotations

import logging

from attrs import define, evolve, field
from bs4 import BeautifulSoup

from lawgr.config import NumberingConfig

from .anchor import Anchor, AnchorRegistry
from .classifier import StructuralType, classify, is_transparent
from .counter import Counter
from .document import (
    clause_children,
    clause_title,
    is_unnumbered,
    numbering_roots,
    read_inherit_numbering,
    shows_number,
)
from .edafio import is_eligible, nearest_eligible
from .greek_numerals import (
    BOOK_ORDINALS,
    book_ordinal,
    edafio_ordinal,
    greek_letter,
    greek_letter_keraia,
    greek_upcase,
    roman,
)
from .lists import item_label, list_depth, owned_items
from .sentence_lines import BOUNDARY
from .types import CounterMap, Node, NumberingPrefix

logger = logging.getLogger(__name__)


@define(slots=True)
class Scope:
    """Counters and prefix that apply to the children of one node.

    Attributes:
        prefix: Numerals of the numbering ancestors, outermost first.
        depth: Depth assigned to nodes numbered in this scope.
        subarticles: Subarticle counter of the enclosing article.
        paragraphs: Paragraph counter of the enclosing container.
        customs: Custom-division counter of the enclosing container.
        generic: Per-type counters for unclassified nodes at this level.
    """

    prefix: NumberingPrefix = ()
    depth: int = 1
    subarticles: Counter | None = None
    paragraphs: Counter | None = None
    customs: Counter | None = None
    generic: CounterMap = field(factory=dict)

    def subarticle_counter(self) -> Counter:
        if self.subarticles is None:
            self.subarticles = Counter()
        return self.subarticles

    def paragraph_counter(self) -> Counter:
        if self.paragraphs is None:
            self.paragraphs = Counter()
        return self.paragraphs

    def custom_counter(self) -> Counter:
        if self.customs is None:
            self.customs = Counter()
        return self.customs

    def generic_counter(self, key: str) -> Counter:
        return self.generic.setdefault(key, Counter())

    def descend(self, **changes: object) -> Scope:
        """Return the scope for children with a fresh per-level map."""

        return evolve(self, depth=self.depth + 1, generic={}, **changes)

    def pass_through(self) -> Scope:
        """Return the scope for children of a transparent container."""

        return evolve(self, depth=self.depth + 1)


class HierarchyWalker:
    """Number the structural nodes of one document.

    Args:
        doc: Document tree with structured identifiers already assigned.
        config: Numbering settings.
        registry: Registry to fill; a new one is created when omitted.
    """

    def __init__(
        self,
        doc: BeautifulSoup,
        config: NumberingConfig | None = None,
        registry: AnchorRegistry | None = None,
    ) -> None:
        self.doc = doc
        self.config = config or NumberingConfig()
        self.labels = self.config.labels()
        self.registry = registry if registry is not None else AnchorRegistry()

        # The document flag is read once and held for the whole traversal.
        if self.config.inherit_numbering is None:
            self.inherit_numbering = read_inherit_numbering(doc)
        else:
            self.inherit_numbering = self.config.inherit_numbering

        self.articles = Counter()
        self.containers: CounterMap = {}

    def walk(self) -> AnchorRegistry:
        """Number the whole document and return the filled registry."""

        scope = Scope()
        for node in numbering_roots(self.doc):
            self.number(node, scope)

        logger.debug(
            "Numbered %d articles, registered %d anchors",
            self.articles.value,
            len(self.registry),
        )
        return self.registry

    def number(self, node: Node, scope: Scope) -> None:
        """Number ``node`` and its subtree within ``scope``."""

        kind = classify(node)

        if is_unnumbered(node):
            self._unnumbered(node, kind, scope)
            return

        if is_transparent(kind):
            self._container(node, kind, scope)
        elif kind is StructuralType.ARTICLE:
            self._article(node, scope)
        elif kind is StructuralType.SUBARTICLE:
            self._subarticle(node, scope)
        elif kind is StructuralType.PARAGRAPH:
            self._paragraph(node, scope)
        elif kind is StructuralType.CUSTOM:
            self._custom(node, scope)
        else:
            self._generic(node, scope)

    def _children(self, node: Node, scope: Scope) -> None:
        for child in clause_children(node):
            self.number(child, scope)

    def _word(self, kind: str) -> str:
        return self.labels.word(kind)

    def _display(self, prefix: NumberingPrefix, numeral: str) -> str:
        """Return ``numeral`` with its ancestry when numbering is inherited."""

        if self.inherit_numbering and prefix:
            return ".".join((*prefix, numeral))
        return numeral

    def _register(
        self,
        node: Node,
        kind: str,
        label: str | None,
        xref: str,
        depth: int,
        value: str | None = None,
    ) -> None:
        self.registry.register(
            node.get("id"),
            Anchor(
                label=label,
                xref=xref,
                depth=depth,
                type=kind,
                elem=self._word(kind),
                title=clause_title(node),
                value=value,
                show_number=shows_number(node),
            ),
        )

    # ---------- Unnumbered nodes ----------

    def _counter_for(
        self, node: Node, kind: StructuralType, scope: Scope
    ) -> Counter:
        """Return the counter ``node`` would draw its number from."""

        if is_transparent(kind):
            return self.containers.setdefault(kind.value, Counter())
        if kind is StructuralType.ARTICLE:
            return self.articles
        if kind is StructuralType.SUBARTICLE:
            return scope.subarticle_counter()
        if kind is StructuralType.PARAGRAPH:
            return scope.paragraph_counter()
        if kind is StructuralType.CUSTOM:
            return scope.custom_counter()
        return scope.generic_counter(node.get("type") or node.name)

    def _unnumbered(
        self, node: Node, kind: StructuralType, scope: Scope
    ) -> None:
        """Register label-less anchors for an unnumbered subtree."""

        if self.config.unnumbered_advances_counter:
            self._counter_for(node, kind, scope).increment(node.get("id"))

        self._passthrough(node, scope.depth)

    def _passthrough(self, node: Node, depth: int) -> None:
        kind = classify(node)
        key = kind.value
        if kind is StructuralType.GENERIC:
            key = node.get("type") or node.name
        self._register(node, key, None, clause_title(node) or "", depth)

        for child in clause_children(node):
            self._passthrough(child, depth + 1)

    # ---------- Transparent containers ----------

    def _container_numeral(self, kind: StructuralType, n: int) -> str:
        style = self.config.structural_numerals.get(kind.value, "keraia")

        if style == "ordinal" and n < len(BOOK_ORDINALS):
            return book_ordinal(n)
        if style == "letter":
            return greek_letter(n) or str(n)
        if style == "roman":
            return roman(n)
        return greek_letter_keraia(n) or str(n)

    def _container(
        self, node: Node, kind: StructuralType, scope: Scope
    ) -> None:
        counter = self.containers.setdefault(kind.value, Counter())
        counter.increment(node.get("id"))

        numeral = self._container_numeral(kind, counter.value)
        label = f"{greek_upcase(self._word(kind.value))} {numeral}"
        self._register(node, kind.value, label, label, scope.depth, numeral)

        # Children keep counting as if the container were absent.
        self._children(node, scope.pass_through())

    # ---------- Articles and their subdivisions ----------

    def _article(self, node: Node, scope: Scope) -> None:
        numeral = self.articles.increment(node.get("id")).print()
        label = f"{self._word('article')} {numeral}"
        self._register(node, "article", label, label, scope.depth, numeral)

        # Every article opens fresh subarticle and paragraph sequences.
        inner = scope.descend(
            prefix=(numeral,),
            subarticles=Counter(),
            paragraphs=Counter(),
            customs=Counter(),
        )
        self._children(node, inner)
        self._owned_anchors(node, scope.depth)

    def _subarticle(self, node: Node, scope: Scope) -> None:
        numeral = scope.subarticle_counter().increment(node.get("id")).print()
        display = self._display(scope.prefix, numeral)
        xref = f"{self._word('subarticle')} {display}"
        self._register(node, "subarticle", display, xref, scope.depth, display)

        inner = scope.descend(
            prefix=(*scope.prefix, numeral),
            subarticles=Counter(),
            paragraphs=Counter(),
            customs=Counter(),
        )
        self._children(node, inner)
        self._owned_anchors(node, scope.depth)

    def _paragraph(self, node: Node, scope: Scope) -> None:
        numeral = scope.paragraph_counter().increment(node.get("id")).print()
        display = self._display(scope.prefix, numeral)
        xref = f"{self._word('paragraph')} {display}"
        self._register(node, "paragraph", display, xref, scope.depth, display)
        self._owned_anchors(node, scope.depth)

        inner = scope.descend(
            prefix=(*scope.prefix, numeral),
            subarticles=None,
            paragraphs=Counter(),
            customs=Counter(),
        )
        self._children(node, inner)

    def _custom(self, node: Node, scope: Scope) -> None:
        position = scope.custom_counter().increment(node.get("id")).value
        letter = greek_letter(position) or str(position)
        self._register(node, "custom", letter, letter, scope.depth, letter)

        # The paragraph sequence runs through the division; its own letters
        # are not passed down.
        inner = scope.descend(
            paragraphs=scope.paragraph_counter(),
            customs=Counter(),
        )
        self._children(node, inner)
        self._list_anchors(node, scope.depth + 1)

    # ---------- Everything else ----------

    def _generic(self, node: Node, scope: Scope) -> None:
        key = node.get("type") or node.name
        numeral = scope.generic_counter(key).increment(node.get("id")).print()
        label = f"{self._word(key)} {numeral}"
        self._register(node, key, label, label, scope.depth, numeral)

        self._children(node, scope.descend())
        self._list_anchors(node, scope.depth + 1)

    # ---------- Sentence units and list items ----------

    def _owned_anchors(self, node: Node, depth: int) -> None:
        """Register sentence units and list items that belong to ``node``."""

        if is_eligible(node):
            self._edafio_anchors(node, depth + 1)
        self._list_anchors(node, depth + 1)

    def _edafio_anchors(self, clause: Node, depth: int) -> None:
        word = self._word("edafio")

        blocks = clause.find_all("p", recursive=False)
        for item in clause.find_all("li"):
            if nearest_eligible(item) is clause:
                blocks.extend(item.find_all("p", recursive=False))

        for block in blocks:
            for marker in block.find_all(BOUNDARY, recursive=False):
                try:
                    n = int(marker.get("edafio-n", ""))
                except ValueError:
                    continue
                if n <= 0 or not marker.get("id"):
                    continue

                ordinal = edafio_ordinal(n)
                self.registry.register(
                    marker["id"],
                    Anchor(
                        label=ordinal,
                        xref=f"{word} {ordinal}",
                        depth=depth,
                        type="edafio",
                        elem=word,
                        value=str(n),
                    ),
                )

    def _list_anchors(self, clause: Node, depth: int) -> None:
        word = self._word("listitem")

        for item in owned_items(clause):
            if not item.get("id"):
                continue

            label = item_label(item)
            if label is None:
                continue

            self.registry.register(
                item["id"],
                Anchor(
                    label=label,
                    xref=f"{word} {label}",
                    depth=depth + list_depth(item.parent) - 1,
                    type="listitem",
                    elem=word,
                    value=label,
                ),
            )


def number_hierarchy(
    doc: BeautifulSoup, config: NumberingConfig | None = None
) -> AnchorRegistry:
    """Number ``doc`` and return the anchor registry."""

    return HierarchyWalker(doc, config).walk()
