"""Mutable state owned by one traversal of one file."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TraversalState:
    """
    Group nesting and counters for a single traversal.

    Attributes:
        next_group_id: Id handed to the next valid group (starts at 1)
        anonymous_examples: Number of unnamed calls seen so far
        group_stack: Open groups as ``(marker, group_id)``, innermost last
    """

    next_group_id: int = 1
    anonymous_examples: int = 0
    group_stack: list[tuple[object, int]] = field(default_factory=list)

    @property
    def current_group_id(self) -> int | None:
        """Id of the innermost open group, or None at top level."""
        if not self.group_stack:
            return None
        return self.group_stack[-1][1]

    def allocate_group_id(self) -> int:
        group_id = self.next_group_id
        self.next_group_id += 1
        return group_id

    def push_group(self, marker: object, group_id: int) -> None:
        self.group_stack.append((marker, group_id))

    def pop_group(self, marker: object) -> bool:
        """Close the group opened by ``marker``.

        Only the innermost group can be closed; a leave without a matching
        enter leaves the stack untouched and returns False.
        """
        if self.group_stack and self.group_stack[-1][0] is marker:
            self.group_stack.pop()
            return True
        return False

    def next_anonymous_name(self) -> str:
        self.anonymous_examples += 1
        return f"<unnamed-{self.anonymous_examples}>"
