"""Configuration of a numbering run."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]
from attrs import define, evolve, field

from lawgr.labels import DEFAULT_LANGUAGE, Labels, load_labels

# Numeral styles available to transparent containers.
NUMERAL_STYLES = frozenset({"ordinal", "keraia", "letter", "roman"})

DEFAULT_STRUCTURAL_NUMERALS = {
    "book": "ordinal",
    "part": "keraia",
    "tmima": "keraia",
    "chapter": "keraia",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when configuration values cannot be interpreted."""


def _parse_bool(name: str, value: Any) -> bool:  # noqa: ANN401
    """Interpret ``value`` as a boolean setting."""

    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def _default_numerals() -> dict[str, str]:
    return dict(DEFAULT_STRUCTURAL_NUMERALS)


@define(slots=True)
class NumberingConfig:
    """Settings that influence how a document is numbered.

    Attributes:
        inherit_numbering: Force dotted inherited numbering on or off;
            ``None`` reads the document's own flag.
        unnumbered_advances_counter: Whether a node flagged as unnumbered
            still consumes a number from its counter.
        detect_sentence_lines: Insert sentence boundaries between source
            lines of text blocks.
        language: Language of the label table.
        labels_file: Optional YAML file overriding label words.
        structural_numerals: Numeral style for each container type.
    """

    inherit_numbering: bool | None = None
    unnumbered_advances_counter: bool = False
    detect_sentence_lines: bool = True
    language: str = DEFAULT_LANGUAGE
    labels_file: Path | None = None
    structural_numerals: dict[str, str] = field(factory=_default_numerals)

    def __attrs_post_init__(self) -> None:
        for kind, style in self.structural_numerals.items():
            if style not in NUMERAL_STYLES:
                raise ConfigError(
                    f"structural_numerals.{kind}: unknown style {style!r}"
                )

    def labels(self) -> Labels:
        """Return the label table selected by this configuration."""

        try:
            return load_labels(self.language, self.labels_file)
        except (OSError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NumberingConfig:
        """Build a configuration from a plain mapping.

        Args:
            data: Settings keyed by attribute name. Unknown keys are an
                error.

        Returns:
            The configuration.
        """

        known = {
            "inherit_numbering",
            "unnumbered_advances_counter",
            "detect_sentence_lines",
            "language",
            "labels_file",
            "structural_numerals",
        }
        unknown = set(data) - known
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ConfigError(f"Unknown settings: {names}")

        kwargs: dict[str, Any] = {}
        if data.get("inherit_numbering") is not None:
            kwargs["inherit_numbering"] = _parse_bool(
                "inherit_numbering", data["inherit_numbering"]
            )
        for name in ("unnumbered_advances_counter", "detect_sentence_lines"):
            if name in data:
                kwargs[name] = _parse_bool(name, data[name])
        if "language" in data:
            kwargs["language"] = str(data["language"])
        if data.get("labels_file"):
            kwargs["labels_file"] = Path(data["labels_file"])
        if "structural_numerals" in data:
            numerals = _default_numerals()
            for kind, style in data["structural_numerals"].items():
                numerals[str(kind)] = str(style)
            kwargs["structural_numerals"] = numerals

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path) -> NumberingConfig:
        """Load a configuration from a YAML file."""

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")
        return cls.from_mapping(data)

    def with_env(
        self, environ: Mapping[str, str] | None = None
    ) -> NumberingConfig:
        """Return a copy updated from ``LAWGR_*`` environment variables."""

        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {}

        if env.get("LAWGR_INHERIT_NUMBERING"):
            changes["inherit_numbering"] = _parse_bool(
                "LAWGR_INHERIT_NUMBERING", env["LAWGR_INHERIT_NUMBERING"]
            )
        if env.get("LAWGR_UNNUMBERED_ADVANCES"):
            changes["unnumbered_advances_counter"] = _parse_bool(
                "LAWGR_UNNUMBERED_ADVANCES", env["LAWGR_UNNUMBERED_ADVANCES"]
            )
        if env.get("LAWGR_DETECT_LINES"):
            changes["detect_sentence_lines"] = _parse_bool(
                "LAWGR_DETECT_LINES", env["LAWGR_DETECT_LINES"]
            )
        if env.get("LAWGR_LANGUAGE"):
            changes["language"] = env["LAWGR_LANGUAGE"]

        return evolve(self, **changes)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> NumberingConfig:
        """Build a default configuration updated from the environment."""

        return cls().with_env(environ)
