"""Language label tables for structural types."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from attrs import define, field

# Directory holding the packaged ``<language>.yaml`` tables.
DATA_DIR = Path(__file__).parent / "data"

DEFAULT_LANGUAGE = "el"

LabelTable = dict[str, str]

# Loaded tables keyed by source file.
_CACHE: dict[Path, LabelTable] = {}


@define(slots=True)
class Labels:
    """Lookup of display words for structural type tags.

    Attributes:
        table: Mapping of type tag to display word.
        fallback: Key used when a tag has no entry of its own.
    """

    table: LabelTable = field(factory=dict)
    fallback: str = "clause"

    def word(self, kind: str) -> str:
        """Return the display word for ``kind``.

        Unknown tags use the fallback entry, and the tag itself when even
        that is missing.
        """

        if kind in self.table:
            return self.table[kind]
        return self.table.get(self.fallback, kind)


def _read_table(path: Path) -> LabelTable:
    """Read a label table from a YAML file.

    Args:
        path: Location of the YAML mapping.

    Returns:
        Mapping of type tag to display word.
    """

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Label table {path} must be a mapping")

    return {str(key): str(value) for key, value in data.items()}


def load_labels(
    language: str = DEFAULT_LANGUAGE, path: Path | None = None
) -> Labels:
    """Return the label table for ``language``.

    Args:
        language: Language code of a packaged table.
        path: Optional YAML file whose entries override the packaged ones.

    Returns:
        The merged label lookup.
    """

    source = DATA_DIR / f"{language}.yaml"
    if not source.exists():
        raise ValueError(f"No label table for language {language!r}")

    # Read each file at most once per process.
    if source not in _CACHE:
        _CACHE[source] = _read_table(source)
    table = dict(_CACHE[source])

    if path is not None:
        if path not in _CACHE:
            _CACHE[path] = _read_table(path)
        table.update(_CACHE[path])

    return Labels(table=table)
