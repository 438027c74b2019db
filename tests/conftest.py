"""Shared sample documents for the numbering tests."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from lawgr.numbering.document import load_document

# Two parts holding three articles; inherited numbering is switched on.
SAMPLE_LAW = """
<doc>
<bibdata><ext><inheritnumbering>true</inheritnumbering></ext></bibdata>
<sections>
<clause type="part" id="P1">
  <title>Γενικές διατάξεις</title>
  <clause type="article" id="A1">
    <title>Σκοπός</title>
    <clause type="paragraph" id="A1P1"><p>Πρώτη παράγραφος.</p></clause>
    <clause type="paragraph" id="A1P2"><p>Δεύτερη παράγραφος.</p></clause>
  </clause>
  <clause type="article" id="A2">
    <title>Ορισμοί</title>
    <p>Κείμενο χωρίς παραγράφους.</p>
  </clause>
</clause>
<clause type="part" id="P2">
  <clause type="article" id="A3">
    <clause type="subarticle" id="A3S1">
      <clause type="paragraph" id="A3S1P1"><p>Υποάρθρο.</p></clause>
    </clause>
  </clause>
</clause>
</sections>
</doc>
"""

# Paragraph numbering continues through lettered custom divisions.
SAMPLE_CUSTOM = """
<clause type="article" id="X1">
  <clause type="paragraph" id="X1P1"><p>α</p></clause>
  <clause type="custom" id="X1C1">
    <title>Πρώτη ενότητα</title>
    <clause type="paragraph" id="X1P2"><p>β</p></clause>
  </clause>
  <clause type="custom" id="X1C2">
    <clause type="paragraph" id="X1P3"><p>γ</p></clause>
  </clause>
</clause>
<clause type="article" id="X2">
  <clause type="custom" id="X2C1">
    <clause type="paragraph" id="X2P1"><p>δ</p></clause>
  </clause>
</clause>
"""

# Custom divisions inside two subarticles of one article.
SAMPLE_SUBARTICLE_CUSTOM = """
<clause type="article" id="S">
  <clause type="subarticle" id="S1">
    <clause type="paragraph" id="S1P1"><p>α</p></clause>
    <clause type="custom" id="S1C1">
      <clause type="paragraph" id="S1P2"><p>β</p></clause>
    </clause>
    <clause type="custom" id="S1C2">
      <clause type="paragraph" id="S1P3"><p>γ</p></clause>
    </clause>
  </clause>
  <clause type="subarticle" id="S2">
    <clause type="custom" id="S2C1">
      <clause type="paragraph" id="S2P1"><p>δ</p></clause>
    </clause>
    <clause type="paragraph" id="S2P2"><p>ε</p></clause>
  </clause>
</clause>
"""

# The middle article is excluded from numbering.
SAMPLE_UNNUMBERED = """
<clause type="article" id="U1"><p>Πρώτο.</p></clause>
<clause type="article" id="U2" unnumbered="true">
  <title>Μεταβατική διάταξη</title>
  <p>Χωρίς αριθμό.</p>
</clause>
<clause type="article" id="U3"><p>Τρίτο.</p></clause>
"""

# A paragraph whose text spans three source lines, followed by lists.
SAMPLE_SENTENCES = """
<clause type="article" id="S1">
  <clause type="paragraph" id="S1P1"><p>Πρώτη πρόταση.
Δεύτερη πρόταση.
Τρίτη πρόταση.</p></clause>
  <clause type="paragraph" id="S1P2">
    <p>Εισαγωγή:</p>
    <ol>
      <li id="L1"><p>πρώτη περίπτωση</p></li>
      <li id="L2"><p>δεύτερη περίπτωση</p>
        <ol><li id="L21"><p>υποπερίπτωση</p></li></ol>
      </li>
    </ol>
  </clause>
</clause>
"""


@pytest.fixture
def law() -> BeautifulSoup:
    return load_document(SAMPLE_LAW)


@pytest.fixture
def custom_doc() -> BeautifulSoup:
    return load_document(SAMPLE_CUSTOM)


@pytest.fixture
def subarticle_custom_doc() -> BeautifulSoup:
    return load_document(SAMPLE_SUBARTICLE_CUSTOM)


@pytest.fixture
def unnumbered_doc() -> BeautifulSoup:
    return load_document(SAMPLE_UNNUMBERED)


@pytest.fixture
def sentences_doc() -> BeautifulSoup:
    return load_document(SAMPLE_SENTENCES)
