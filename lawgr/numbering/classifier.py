"""Structural classification of document nodes."""

from __future__ import annotations

from enum import Enum

from .types import Node


class StructuralType(str, Enum):
    """Closed vocabulary of structural roles a node can play."""

    BOOK = "book"
    PART = "part"
    TMIMA = "tmima"
    CHAPTER = "chapter"
    ARTICLE = "article"
    SUBARTICLE = "subarticle"
    PARAGRAPH = "paragraph"
    CUSTOM = "custom"
    GENERIC = "generic"


# Aliases accepted in the ``type`` attribute.
_ALIASES = {"section": StructuralType.TMIMA}

# Containers that get their own label but never extend the numbering prefix.
TRANSPARENT_TYPES = frozenset(
    {
        StructuralType.BOOK,
        StructuralType.PART,
        StructuralType.TMIMA,
        StructuralType.CHAPTER,
    }
)

# Types that take part in structured identifiers.
IDENTIFIED_TYPES = TRANSPARENT_TYPES | {
    StructuralType.ARTICLE,
    StructuralType.SUBARTICLE,
    StructuralType.PARAGRAPH,
}

# Short codes used for each type in structured identifiers.
ID_PREFIXES = {
    StructuralType.BOOK: "b",
    StructuralType.PART: "pt",
    StructuralType.TMIMA: "t",
    StructuralType.CHAPTER: "c",
    StructuralType.ARTICLE: "a",
    StructuralType.PARAGRAPH: "p",
}

# Values of the authoring ``heading`` attribute that name a structural type.
HEADING_TYPES = frozenset(
    {
        "book",
        "part",
        "section",
        "tmima",
        "chapter",
        "article",
        "subarticle",
        "paragraph",
        "custom",
    }
)


def parse_type(value: str | None) -> StructuralType:
    """Map a raw ``type`` attribute value to a :class:`StructuralType`."""

    if not value:
        return StructuralType.GENERIC

    key = value.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]

    try:
        return StructuralType(key)
    except ValueError:
        return StructuralType.GENERIC


def classify(node: Node) -> StructuralType:
    """Return the structural type of ``node``.

    Only ``<clause>`` elements carry structural types; every other element,
    and any clause with a missing or unknown ``type``, is generic.
    """

    if node.name != "clause":
        return StructuralType.GENERIC
    return parse_type(node.get("type"))


def is_transparent(kind: StructuralType) -> bool:
    """Return True when ``kind`` does not own a numbering prefix segment."""

    return kind in TRANSPARENT_TYPES


def is_identified(node: Node) -> bool:
    """Return True when ``node`` receives a structured identifier."""

    return classify(node) in IDENTIFIED_TYPES
