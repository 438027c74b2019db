"""Structural numbering and cross-references for Greek legal documents."""

from .config import ConfigError, NumberingConfig
from .pipeline import NumberingResult, number_document, process_document

__all__ = [
    "ConfigError",
    "NumberingConfig",
    "NumberingResult",
    "number_document",
    "process_document",
]
