"""Running tally used for one numbering scope."""

from __future__ import annotations

from attrs import define, field


@define(slots=True)
class Counter:
    """Running tally used for one numbering scope.

    Counters only move forward. Restarting a sequence means constructing a
    new counter; deciding which counter applies to which subtree is the
    walker's job.

    Attributes:
        value: Current value of the tally.
        trace: Identifiers of the nodes that advanced the counter, in order.
    """

    value: int = 0
    trace: list[str] = field(factory=list, repr=False)

    def increment(self, node_id: str | None = None) -> Counter:
        """Advance the counter by one and return it."""

        self.value += 1
        if node_id is not None:
            self.trace.append(node_id)
        return self

    def print(self) -> str:
        """Return the current value as a decimal string."""

        return str(self.value)
