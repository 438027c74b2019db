"""Resolve cross-references against the anchor registry."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from .anchor import AnchorRegistry

logger = logging.getLogger(__name__)


class XrefResolver:
    """Look up reference text for node identifiers.

    Args:
        registry: Anchors produced by a numbering run.
    """

    def __init__(self, registry: AnchorRegistry) -> None:
        self.registry = registry

    def xref_text(self, target: str) -> str | None:
        """Return the cross-reference text registered for ``target``."""

        anchor = self.registry.get(target)
        if anchor is None:
            return None
        return anchor.xref or None

    def locality_text(self, target: str) -> str | None:
        """Return ``"<type word> <numeral>"`` for ``target``.

        This is the short form used when citing a locality of another
        document, e.g. ``"Άρθρο 5"`` or ``"Μέρος Β'"``. Anchors without a
        numeral fall back to their cross-reference text.
        """

        anchor = self.registry.get(target)
        if anchor is None:
            return None

        if anchor.elem and anchor.value:
            return f"{anchor.elem} {anchor.value}"
        return anchor.xref or None


def fill_xrefs(doc: BeautifulSoup, registry: AnchorRegistry) -> int:
    """Write reference text into empty ``<xref target="...">`` elements.

    Elements that already have text are left alone, as are references
    whose target is unknown.

    Args:
        doc: Document tree, modified in place.
        registry: Anchors to resolve against.

    Returns:
        Number of references filled.
    """

    resolver = XrefResolver(registry)
    filled = 0

    for xref in doc.find_all("xref", attrs={"target": True}):
        if xref.get_text(strip=True):
            continue

        text = resolver.xref_text(xref["target"])
        if text is None:
            logger.warning("Unresolved cross-reference to %r", xref["target"])
            continue

        xref.string = text
        filled += 1

    return filled
