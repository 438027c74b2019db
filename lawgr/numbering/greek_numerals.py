"""Numeral formatters used by Greek legislative numbering.

All functions are pure. Out-of-range input never raises: it degrades to an
empty string or to the decimal representation of the number, as documented
on each function.
"""

from __future__ import annotations

import unicodedata

from roman import OutOfRangeError, toRoman  # type: ignore[import-untyped]

# Digit alphabets for the alphabetic (Milesian) system. The sixth "ones"
# symbol is the digraph used in legislative numbering instead of the stigma.
ONES = ["", "α", "β", "γ", "δ", "ε", "στ", "ζ", "η", "θ"]
TENS = ["", "ι", "κ", "λ", "μ", "ν", "ξ", "ο", "π", "ϟ"]

# Largest value ``greek_lower`` knows how to spell.
GREEK_LOWER_MAX = 99

BOOK_ORDINALS = [
    "",
    "ΠΡΩΤΟ",
    "ΔΕΥΤΕΡΟ",
    "ΤΡΙΤΟ",
    "ΤΕΤΑΡΤΟ",
    "ΠΕΜΠΤΟ",
    "ΕΚΤΟ",
    "ΕΒΔΟΜΟ",
    "ΟΓΔΟΟ",
    "ΕΝΑΤΟ",
    "ΔΕΚΑΤΟ",
]

EDAFIO_ORDINALS = [
    "",
    "πρώτο",
    "δεύτερο",
    "τρίτο",
    "τέταρτο",
    "πέμπτο",
    "έκτο",
    "έβδομο",
    "όγδοο",
    "ένατο",
    "δέκατο",
]

GREEK_UPPER_LETTERS = list("ΑΒΓΔΕΖΗΘΙΚΛΜΝΞΟΠΡΣΤΥΦΧΨΩ")

KERAIA = "'"

def greek_lower(n: int) -> str:
    """Return the lowercase Greek numeral for ``n``.

    Args:
        n: Number to convert. Valid for 1 to 99.

    Returns:
        Numeral such as ``"α"``, ``"στ"`` or ``"ιστ"``. Non-positive input
        yields an empty string. Values above 99 are outside the supported
        range and yield the decimal representation.
    """

    if n <= 0:
        return ""
    if n > GREEK_LOWER_MAX:
        return str(n)

    tens, ones = divmod(n, 10)
    return f"{TENS[tens]}{ONES[ones]}"


def greek_upper(n: int) -> str:
    """Return the uppercase form of :func:`greek_lower`."""

    return greek_lower(n).upper()


def greek_double(parent_n: int, child_n: int) -> str:
    """Return the two-level numeral used for sub-items (``αα``, ``στγ``)."""

    return f"{greek_lower(parent_n)}{greek_lower(child_n)}"


def greek_letter(n: int) -> str:
    """Return the ``n``-th uppercase Greek letter or an empty string."""

    if n <= 0 or n > len(GREEK_UPPER_LETTERS):
        return ""
    return GREEK_UPPER_LETTERS[n - 1]


def greek_letter_keraia(n: int) -> str:
    """Return the ``n``-th uppercase Greek letter followed by a keraia.

    Args:
        n: Position in the 24-letter alphabet.

    Returns:
        Letter with keraia such as ``"Α'"``, or an empty string when ``n``
        is outside ``1..24``.
    """

    letter = greek_letter(n)
    return f"{letter}{KERAIA}" if letter else ""


def ordinal_word(n: int, table: list[str]) -> str:
    """Look up an ordinal word, falling back to the decimal string.

    Args:
        n: Ordinal position.
        table: Ordinal words indexed by position; index 0 is unused.

    Returns:
        The word for ``n`` or ``str(n)`` when the table has no entry.
    """

    if 0 < n < len(table):
        return table[n]
    return str(n)


def book_ordinal(n: int) -> str:
    """Return the uppercase ordinal word used in book labels."""

    return ordinal_word(n, BOOK_ORDINALS)


def edafio_ordinal(n: int) -> str:
    """Return the lowercase ordinal word used for sentence units."""

    return ordinal_word(n, EDAFIO_ORDINALS)


def roman(n: int, upper: bool = True) -> str:
    """Convert ``n`` to a Roman numeral.

    Args:
        n: Number to convert.
        upper: Return uppercase letters when true, lowercase otherwise.

    Returns:
        The Roman numeral, or an empty string for non-positive input.
        Values above 4999 have no Roman form and yield the decimal
        representation.
    """

    if n <= 0:
        return ""

    try:
        result = toRoman(n)
    except OutOfRangeError:
        return str(n)

    return result if upper else result.lower()


def greek_upcase(text: str) -> str:
    """Uppercase Greek text and drop accents.

    All-caps Greek is typeset without tonos, so ``"Κεφάλαιο"`` becomes
    ``"ΚΕΦΑΛΑΙΟ"``.
    """

    decomposed = unicodedata.normalize("NFD", text.upper())
    stripped = "".join(
        ch for ch in decomposed if unicodedata.category(ch) != "Mn"
    )
    return unicodedata.normalize("NFC", stripped)
