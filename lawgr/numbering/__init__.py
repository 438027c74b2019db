"""Structural numbering engine for legal documents."""

from .anchor import Anchor, AnchorRegistry
from .classifier import StructuralType, classify
from .counter import Counter
from .document import document_to_string, load_document
from .edafio import EdafioStats, number_sentence_units
from .sentence_lines import insert_boundary_markers
from .structured_ids import assign_structured_ids
from .walker import HierarchyWalker, number_hierarchy
from .xref import XrefResolver, fill_xrefs

__all__ = [
    "Anchor",
    "AnchorRegistry",
    "Counter",
    "EdafioStats",
    "HierarchyWalker",
    "StructuralType",
    "XrefResolver",
    "assign_structured_ids",
    "classify",
    "document_to_string",
    "fill_xrefs",
    "insert_boundary_markers",
    "load_document",
    "number_hierarchy",
    "number_sentence_units",
]
