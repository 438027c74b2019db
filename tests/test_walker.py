"""Tests for the hierarchy walker."""

import logging

import pytest
from bs4 import BeautifulSoup

from lawgr.config import NumberingConfig
from lawgr.numbering.document import load_document
from lawgr.numbering.edafio import number_sentence_units
from lawgr.numbering.sentence_lines import insert_boundary_markers
from lawgr.numbering.walker import HierarchyWalker, number_hierarchy

CONTAINERS = """
<sections>
<clause type="book" id="B1">
  <clause type="chapter" id="C1">
    <clause type="article" id="A">
      <clause type="paragraph" id="AP"><p>x</p></clause>
    </clause>
  </clause>
</clause>
<clause type="book" id="B2">
  <clause type="chapter" id="C2"><title>Τελικές διατάξεις</title></clause>
</clause>
</sections>
"""


def test_inherited_numbering(law: BeautifulSoup) -> None:
    """The document flag turns on dotted display numbers."""

    registry = number_hierarchy(law)

    assert len(registry) == 9
    assert registry.get("A1").label == "Άρθρο 1"
    assert registry.get("A1").title == "Σκοπός"
    assert registry.get("A1P1").label == "1.1"
    assert registry.get("A1P2").xref == "Παράγραφος 1.2"
    assert registry.get("A3S1").label == "3.1"
    assert registry.get("A3S1").xref == "Υποάρθρο 3.1"
    assert registry.get("A3S1P1").label == "3.1.1"
    assert registry.get("A3S1P1").depth == 4


def test_articles_are_numbered_across_containers(law: BeautifulSoup) -> None:
    registry = number_hierarchy(law)

    assert registry.get("A2").label == "Άρθρο 2"
    assert registry.get("A3").label == "Άρθρο 3"
    assert registry.get("A3").depth == 2


def test_configuration_overrides_document_flag(law: BeautifulSoup) -> None:
    walker = HierarchyWalker(law, NumberingConfig(inherit_numbering=False))
    registry = walker.walk()

    assert not walker.inherit_numbering
    assert registry.get("A1P2").label == "2"
    assert registry.get("A1P2").xref == "Παράγραφος 2"
    assert registry.get("A3S1").xref == "Υποάρθρο 1"
    assert registry.get("A3S1P1").label == "1"


def test_part_labels(law: BeautifulSoup) -> None:
    registry = number_hierarchy(law)
    part = registry.get("P1")

    assert part.label == "ΜΕΡΟΣ Α'"
    assert part.xref == "ΜΕΡΟΣ Α'"
    assert part.value == "Α'"
    assert part.elem == "Μέρος"
    assert part.title == "Γενικές διατάξεις"
    assert registry.get("P2").label == "ΜΕΡΟΣ Β'"


def test_containers_stay_out_of_the_prefix() -> None:
    doc = load_document(CONTAINERS)

    registry = number_hierarchy(doc, NumberingConfig(inherit_numbering=True))

    assert registry.get("B1").label == "ΒΙΒΛΙΟ ΠΡΩΤΟ"
    assert registry.get("B2").label == "ΒΙΒΛΙΟ ΔΕΥΤΕΡΟ"
    assert registry.get("C1").label == "ΚΕΦΑΛΑΙΟ Α'"
    assert registry.get("C2").label == "ΚΕΦΑΛΑΙΟ Β'"
    assert registry.get("A").label == "Άρθρο 1"
    assert registry.get("A").depth == 3
    assert registry.get("AP").label == "1.1"


def test_structural_numeral_styles() -> None:
    doc = load_document(CONTAINERS)
    config = NumberingConfig(
        structural_numerals={"book": "letter", "chapter": "roman"}
    )

    registry = number_hierarchy(doc, config)

    assert registry.get("B2").label == "ΒΙΒΛΙΟ Β"
    assert registry.get("C2").label == "ΚΕΦΑΛΑΙΟ II"


def test_paragraphs_continue_through_custom_divisions(
    custom_doc: BeautifulSoup,
) -> None:
    registry = number_hierarchy(custom_doc)

    assert [
        registry.get(node_id).label
        for node_id in ("X1P1", "X1P2", "X1P3", "X2P1")
    ] == ["1", "2", "3", "1"]
    assert registry.get("X1P2").depth == 3


def test_custom_divisions_take_letters(custom_doc: BeautifulSoup) -> None:
    registry = number_hierarchy(custom_doc)
    first = registry.get("X1C1")

    assert first.label == "Α"
    assert first.xref == "Α"
    assert first.type == "custom"
    assert first.title == "Πρώτη ενότητα"
    assert registry.get("X1C2").label == "Β"
    assert registry.get("X2C1").label == "Α"


def test_unnumbered_node_keeps_the_counter(
    unnumbered_doc: BeautifulSoup,
) -> None:
    registry = number_hierarchy(unnumbered_doc)
    skipped = registry.get("U2")

    assert skipped.label is None
    assert skipped.xref == "Μεταβατική διάταξη"
    assert skipped.type == "article"
    assert registry.get("U3").label == "Άρθρο 2"


def test_unnumbered_node_can_consume_a_number(
    unnumbered_doc: BeautifulSoup,
) -> None:
    config = NumberingConfig(unnumbered_advances_counter=True)

    registry = number_hierarchy(unnumbered_doc, config)

    assert registry.get("U2").label is None
    assert registry.get("U3").label == "Άρθρο 3"


def test_generic_nodes_use_level_counters() -> None:
    doc = load_document(
        '<clause id="g1"><title>Παράρτημα</title></clause>'
        '<clause id="g2"></clause>'
        '<clause type="annex" id="g3"></clause>'
    )

    registry = number_hierarchy(doc)

    assert registry.get("g1").label == "Ενότητα 1"
    assert registry.get("g1").xref == "Ενότητα 1"
    assert registry.get("g2").label == "Ενότητα 2"
    assert registry.get("g3").label == "Ενότητα 1"
    assert registry.get("g3").type == "annex"


def test_number_heading_flag() -> None:
    doc = load_document(
        '<clause type="article" id="a">'
        '<clause type="paragraph" id="p" number-heading="false"></clause>'
        "</clause>"
    )

    registry = number_hierarchy(doc)

    assert registry.get("p").label == "1"
    assert registry.get("p").show_number is False
    assert registry.get("a").show_number is True


def test_sentence_units_and_list_items(sentences_doc: BeautifulSoup) -> None:
    insert_boundary_markers(sentences_doc)
    number_sentence_units(sentences_doc)

    registry = number_hierarchy(sentences_doc)

    third = registry.get("a1p1e3")
    assert third.label == "τρίτο"
    assert third.xref == "εδάφιο τρίτο"
    assert third.type == "edafio"
    assert third.depth == 3
    assert registry.get("a1p2li2li1e1").label == "πρώτο"

    item = registry.get("L21")
    assert item.label == "βα"
    assert item.xref == "περίπτωση βα"
    assert item.type == "listitem"
    assert item.depth == 4
    assert registry.get("L1").depth == 3


def test_articles_in_separate_books() -> None:
    doc = load_document(
        "<sections>"
        '<clause type="book" id="B1"><clause type="article" id="a">'
        '<clause type="paragraph" id="ap1"></clause>'
        '<clause type="paragraph" id="ap2"></clause>'
        '<clause type="paragraph" id="ap3"></clause>'
        "</clause></clause>"
        '<clause type="book" id="B2"><clause type="article" id="b">'
        '<clause type="paragraph" id="bp1"></clause>'
        "</clause></clause>"
        "</sections>"
    )

    flat = number_hierarchy(doc, NumberingConfig(inherit_numbering=False))
    assert flat.get("a").label == "Άρθρο 1"
    assert flat.get("b").label == "Άρθρο 2"
    assert [flat.get(f"ap{n}").label for n in (1, 2, 3)] == ["1", "2", "3"]
    assert flat.get("bp1").label == "1"

    dotted = number_hierarchy(doc, NumberingConfig(inherit_numbering=True))
    assert dotted.get("bp1").label == "2.1"


def test_custom_letters_restart_in_each_subarticle(
    subarticle_custom_doc: BeautifulSoup,
) -> None:
    registry = number_hierarchy(subarticle_custom_doc)

    assert [
        registry.get(node_id).label
        for node_id in ("S1C1", "S1C2", "S2C1")
    ] == ["Α", "Β", "Α"]
    assert [
        registry.get(node_id).label
        for node_id in ("S1P1", "S1P2", "S1P3", "S2P1", "S2P2")
    ] == ["1", "2", "3", "1", "2"]


def test_sentence_units_of_custom_wrapped_paragraphs(
    caplog: pytest.LogCaptureFixture,
) -> None:
    doc = load_document(
        '<clause type="article" id="A">'
        "<p>Εισαγωγή πρώτη.\nΕισαγωγή δεύτερη.</p>"
        '<clause type="custom" id="C">'
        '<clause type="paragraph" id="P"><p>Κείμενο.\nΣυνέχεια.</p></clause>'
        "</clause></clause>"
    )
    insert_boundary_markers(doc)
    number_sentence_units(doc)

    with caplog.at_level(logging.WARNING):
        registry = number_hierarchy(doc)

    assert "Duplicate anchor" not in caplog.text
    assert registry.get("a1p1e1").depth == 4
    assert registry.get("a1p1e2").label == "δεύτερο"
