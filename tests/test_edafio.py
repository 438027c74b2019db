"""Tests for sentence-unit numbering."""

from bs4 import BeautifulSoup

from lawgr.numbering.document import load_document
from lawgr.numbering.edafio import (
    explicit_markers,
    is_eligible,
    number_sentence_units,
)
from lawgr.numbering.sentence_lines import insert_boundary_markers


def _ids(block: BeautifulSoup) -> list[str]:
    return [eb.get("id") for eb in block.find_all("eb")]


def test_eligibility() -> None:
    """Paragraphs and articles without paragraphs hold sentence units."""

    doc = load_document(
        '<clause type="article" id="a1">'
        '<clause type="paragraph" id="p1"><p>x</p></clause>'
        "</clause>"
        '<clause type="article" id="a2"><p>y</p></clause>'
        '<clause type="custom" id="c1"><p>z</p></clause>'
    )
    a1, p1, a2, c1 = doc.find_all("clause")

    assert not is_eligible(a1)
    assert is_eligible(p1)
    assert is_eligible(a2)
    assert not is_eligible(c1)
    assert not is_eligible(None)


def test_lines_become_numbered_units(sentences_doc: BeautifulSoup) -> None:
    """Two detected boundaries and the implicit first unit give three."""

    insert_boundary_markers(sentences_doc)
    stats = number_sentence_units(sentences_doc)

    block = sentences_doc.find("clause", id="S1P1").p
    assert len(explicit_markers(block)) == 2
    assert block["edafio-count"] == "3"
    assert _ids(block) == ["a1p1e1", "a1p1e2", "a1p1e3"]
    assert [eb["edafio-n"] for eb in block.find_all("eb")] == ["1", "2", "3"]
    assert block.find("eb").get("implicit") == "true"
    assert stats.numbered_units == 7


def test_single_unit_has_no_count(sentences_doc: BeautifulSoup) -> None:
    number_sentence_units(sentences_doc)

    intro = sentences_doc.find("clause", id="S1P2").p
    assert not intro.has_attr("edafio-count")
    assert _ids(intro) == ["a1p2e1"]


def test_list_items_extend_the_prefix(sentences_doc: BeautifulSoup) -> None:
    number_sentence_units(sentences_doc)

    def item_ids(item_id: str) -> list[str]:
        return _ids(sentences_doc.find("li", id=item_id).p)

    assert item_ids("L1") == ["a1p2li1e1"]
    assert item_ids("L2") == ["a1p2li2e1"]
    assert item_ids("L21") == ["a1p2li2li1e1"]


def test_explicit_spans_are_converted() -> None:
    doc = load_document(
        '<clause type="article" id="a">'
        '<clause type="paragraph" id="p"><p>'
        '<span class="ed">Α.</span> <span class="ed">Β.</span> '
        '<span class="ed">Γ.</span>'
        "</p></clause></clause>"
    )

    stats = number_sentence_units(doc)

    block = doc.find("p")
    assert stats.converted_spans == 3
    assert block.find("span") is None
    assert block["edafio-count"] == "3"
    assert _ids(block) == ["a1p1e1", "a1p1e2", "a1p1e3"]


def test_markers_outside_eligible_clauses_are_dropped() -> None:
    doc = load_document(
        '<clause type="article" id="a">'
        "<p>Εισαγωγή<eb/>συνέχεια</p>"
        '<clause type="paragraph" id="p"><p>Κείμενο.</p></clause>'
        "</clause>"
    )

    stats = number_sentence_units(doc)

    intro, body = doc.find_all("p")
    assert stats.dropped_markers == 1
    assert intro.find("eb") is None
    assert _ids(body) == ["a1p1e1"]


def test_article_without_paragraphs_uses_implicit_paragraph() -> None:
    doc = load_document(
        '<clause type="article" id="a"><p>Πρώτο.</p><p>Δεύτερο.</p></clause>'
        '<clause type="article" id="b"><p>Τρίτο.</p></clause>'
    )

    number_sentence_units(doc)

    first, second, third = doc.find_all("p")
    assert _ids(first) == ["a1p1e1"]
    assert _ids(second) == ["a1p1e2"]
    assert _ids(third) == ["a2p1e1"]


def test_contiguous_lists_are_merged() -> None:
    doc = load_document(
        '<clause type="article" id="a">'
        '<clause type="paragraph" id="p">'
        '<ol><li id="i1"><p>α</p></li><li id="i2"><p>β</p></li></ol>'
        "<p>Ενδιάμεσο.</p>"
        '<ol start="3"><li id="i3"><p>γ</p></li></ol>'
        '<ol start="7"><li id="i7"><p>ζ</p></li></ol>'
        "</clause></clause>"
    )

    stats = number_sentence_units(doc)

    _, merged, separate = doc.find_all("ol")
    assert stats.merged_lists == 1
    assert merged["merged-list"] == "true"
    assert merged["merged-start"] == "2"
    assert not separate.has_attr("merged-list")
    assert _ids(doc.find("li", id="i3").p) == ["a1p1li3e1"]


def test_group_counts_as_one_unit() -> None:
    doc = load_document(
        '<clause type="article" id="a">'
        '<clause type="paragraph" id="p">'
        "<p>Πρώτο.</p>"
        "<edafio-group><p>Δεύτερο α.</p><p>Δεύτερο β.</p></edafio-group>"
        "<p>Τρίτο.</p>"
        "</clause></clause>"
    )

    number_sentence_units(doc)

    blocks = doc.find_all("p")
    assert doc.find("edafio-group") is None
    assert [_ids(block) for block in blocks] == [
        ["a1p1e1"],
        ["a1p1e2"],
        [],
        ["a1p1e3"],
    ]


def test_numbering_twice_gives_the_same_result(
    sentences_doc: BeautifulSoup,
) -> None:
    insert_boundary_markers(sentences_doc)
    number_sentence_units(sentences_doc)
    first = str(sentences_doc)

    insert_boundary_markers(sentences_doc)
    number_sentence_units(sentences_doc)

    assert str(sentences_doc) == first


def test_paragraphs_inside_custom_divisions_keep_their_own_ids() -> None:
    """Intro text of an article whose paragraphs sit in a custom division
    is not numbered as an implicit paragraph."""

    doc = load_document(
        '<clause type="article" id="A">'
        "<p>Εισαγωγή πρώτη.\nΕισαγωγή δεύτερη.</p>"
        '<clause type="custom" id="C">'
        '<clause type="paragraph" id="P"><p>Κείμενο.\nΣυνέχεια.</p></clause>'
        "</clause></clause>"
    )

    insert_boundary_markers(doc)
    stats = number_sentence_units(doc)

    intro = doc.find("p")
    assert not is_eligible(doc.find("clause", id="A"))
    assert stats.dropped_markers == 1
    assert intro.find("eb") is None
    assert [eb.get("id") for eb in doc.find_all("eb")] == [
        "a1p1e1",
        "a1p1e2",
    ]
