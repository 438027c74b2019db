"""Anchor records describing how a node is labelled and referenced."""

from __future__ import annotations

import logging

from attrs import asdict, define, field

from .types import AnchorMap

logger = logging.getLogger(__name__)


@define(slots=True)
class Anchor:
    """Label and cross-reference text registered for one node.

    Attributes:
        label: Display label such as ``"3.1"`` or ``None`` for nodes that
            are reference targets without a number.
        xref: Text used when the node is referenced from elsewhere.
        depth: Nesting depth of the node, starting at 1.
        type: Structural type tag of the node (``article``, ``edafio``...).
        elem: Natural-language word for the node type.
        title: Plain text of the node title, if any.
        value: Raw numeral or letter behind the label.
        show_number: False when the number must not be attached to the
            displayed heading.
    """

    label: str | None
    xref: str
    depth: int
    type: str
    elem: str | None = None
    title: str | None = None
    value: str | None = None
    show_number: bool = True


@define(slots=True)
class AnchorRegistry:
    """Append-only mapping from node identifier to :class:`Anchor`.

    The first record registered for an identifier wins; later attempts are
    logged and ignored so that one traversal cannot silently relabel a
    node.
    """

    anchors: AnchorMap = field(factory=dict)

    def register(self, node_id: str | None, anchor: Anchor) -> bool:
        """Store ``anchor`` under ``node_id``.

        Args:
            node_id: Identity of the labelled node.
            anchor: Record to store.

        Returns:
            True when the record was stored.
        """

        if not node_id:
            logger.debug("Skipping %s anchor without identifier", anchor.type)
            return False

        if node_id in self.anchors:
            logger.warning("Duplicate anchor for %r ignored", node_id)
            return False

        self.anchors[node_id] = anchor
        return True

    def get(self, node_id: str) -> Anchor | None:
        """Return the anchor registered for ``node_id``, if any."""

        return self.anchors.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.anchors

    def __len__(self) -> int:
        return len(self.anchors)

    def to_dict(self) -> dict[str, dict[str, object]]:
        """Return the registry as plain dictionaries keyed by identifier."""

        return {key: asdict(anchor) for key, anchor in self.anchors.items()}
