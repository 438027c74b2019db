"""Run the complete numbering pipeline over a document."""

from __future__ import annotations

import logging

from attrs import define, field
from bs4 import BeautifulSoup

from lawgr.config import NumberingConfig
from lawgr.numbering.anchor import AnchorRegistry
from lawgr.numbering.document import load_document, normalize_headings
from lawgr.numbering.edafio import EdafioStats, number_sentence_units
from lawgr.numbering.sentence_lines import insert_boundary_markers
from lawgr.numbering.structured_ids import assign_structured_ids
from lawgr.numbering.types import IdMap
from lawgr.numbering.walker import HierarchyWalker
from lawgr.numbering.xref import fill_xrefs

logger = logging.getLogger(__name__)


@define(slots=True)
class NumberingResult:
    """Outcome of numbering one document.

    Attributes:
        document: The numbered tree.
        registry: Anchors keyed by node identifier.
        id_map: Old to structured identifier replacements that were applied.
        stats: Sentence-unit pipeline statistics.
        inherit_numbering: Whether dotted inherited numbering was used.
        boundaries: Markers inserted by sentence-line detection.
        xrefs: Cross-references filled with resolved text.
    """

    document: BeautifulSoup
    registry: AnchorRegistry
    id_map: IdMap = field(factory=dict)
    stats: EdafioStats = field(factory=EdafioStats)
    inherit_numbering: bool = False
    boundaries: int = 0
    xrefs: int = 0

    def to_dict(self) -> dict[str, object]:
        """Return the anchors and document flag as plain data."""

        return {
            "anchors": self.registry.to_dict(),
            "inherit_numbering": self.inherit_numbering,
        }


def process_document(
    doc: BeautifulSoup, config: NumberingConfig | None = None
) -> NumberingResult:
    """Number ``doc`` in place.

    Args:
        doc: Parsed document tree.
        config: Numbering settings; defaults are used when omitted.

    Returns:
        The numbering result holding the modified tree and its anchors.
    """

    config = config or NumberingConfig()

    normalized = normalize_headings(doc)
    if normalized:
        logger.debug("Normalised %d clause headings", normalized)

    id_map = assign_structured_ids(doc)

    boundaries = 0
    if config.detect_sentence_lines:
        boundaries = insert_boundary_markers(doc)

    stats = number_sentence_units(doc)

    walker = HierarchyWalker(doc, config)
    registry = walker.walk()

    xrefs = fill_xrefs(doc, registry)

    logger.info(
        "Numbered document: %d anchors, %d sentence units",
        len(registry),
        stats.numbered_units,
    )
    return NumberingResult(
        document=doc,
        registry=registry,
        id_map=id_map,
        stats=stats,
        inherit_numbering=walker.inherit_numbering,
        boundaries=boundaries,
        xrefs=xrefs,
    )


def number_document(
    text: str, config: NumberingConfig | None = None
) -> dict[str, object]:
    """Parse ``text``, number it and return the anchors as plain data."""

    return process_document(load_document(text), config).to_dict()
