"""Common type aliases for numbering structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import Tag

if TYPE_CHECKING:
    from .anchor import Anchor  # noqa: F401
    from .counter import Counter  # noqa: F401


Node = Tag
NodeList = list[Tag]
AnchorMap = dict[str, "Anchor"]
CounterMap = dict[str, "Counter"]
IdMap = dict[str, str]
NumberingPrefix = tuple[str, ...]
