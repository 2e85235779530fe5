"""Comment tree assembly.

Threads are stored as flat lists of messages. This module turns one thread's
messages into an ordered forest of reply trees, and carries the nesting
policy that decides how deep a reply chain may visually indent.

The forest is rebuilt from scratch whenever the flat list changes; nodes are
never patched in place.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import logfire

from huddle.domain.model import Message
from huddle.domain.value import MessageId

DEFAULT_MAX_DEPTH = 5


@dataclass
class CommentNode:
    """Node in a comment forest.

    Wraps a single message and its direct replies, in the order the replies
    appeared in the flat input.
    """

    message: Message
    depth: int = 1
    children: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> MessageId:
        return self.message.id


@dataclass(frozen=True)
class DepthPolicy:
    """How deep reply chains may nest when shown.

    The forest itself keeps every node at its true depth; the policy only
    governs reply affordances and indentation.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

    def can_reply(self, depth: int) -> bool:
        """Whether a node at ``depth`` offers a reply action."""
        return depth < self.max_depth

    def should_indent(self, depth: int) -> bool:
        """Whether the children of a node at ``depth`` are indented under it."""
        return depth < self.max_depth

    def visual_level(self, depth: int) -> int:
        """Indentation level a node at ``depth`` is drawn at."""
        return min(depth, self.max_depth)


class CommentTreeBuilder:
    """Builds reply forests from flat message lists.

    The builder is pure: no I/O, no sorting, and it never raises for odd
    input. Replies whose parent is missing from the input (not loaded yet,
    deleted, or pointing at themselves) become roots.
    """

    def build_forest(self, messages: Sequence[Message]) -> list[CommentNode]:
        """Assemble the reply forest for one thread.

        Algorithm:
        1. Wrap every message in a fresh node and index nodes by message id
        2. Attach each message to its parent's children in encounter order;
           messages with no resolvable parent become roots
        3. Promote one member of every parent cycle to root so that each
           node is reachable exactly once
        4. Assign depths top-down (roots are depth 1)

        Args:
            messages: Messages of a single thread, in the store's order

        Returns:
            Root nodes in input order, children populated
        """
        with logfire.span("comment_tree.build_forest", message_count=len(messages)):
            nodes = [CommentNode(message=message) for message in messages]

            position_by_id: dict[MessageId, int] = {}
            for position, node in enumerate(nodes):
                position_by_id.setdefault(node.id, position)

            parent_of: list[int | None] = [None] * len(nodes)
            orphans = 0
            for position, node in enumerate(nodes):
                parent_id = node.message.parent_id
                if parent_id is None:
                    continue
                parent_position = position_by_id.get(parent_id)
                if parent_position is None or parent_position == position:
                    orphans += 1
                    continue
                parent_of[position] = parent_position
                nodes[parent_position].children.append(node)

            promoted = self._break_cycles(nodes, parent_of)

            forest = [
                node
                for position, node in enumerate(nodes)
                if parent_of[position] is None
            ]
            self._assign_depths(forest)

            if orphans or promoted:
                logfire.warn(
                    "Replies promoted to top level",
                    orphaned=orphans,
                    cycle_breaks=len(promoted),
                    promoted_ids=[nodes[p].id for p in promoted],
                )
            logfire.debug(
                "Comment forest built",
                message_count=len(messages),
                root_count=len(forest),
            )
            return forest

    def walk(
        self, forest: Sequence[CommentNode], max_depth: int | None = None
    ) -> Iterator[tuple[CommentNode, int]]:
        """Yield ``(node, depth)`` pairs in pre-order.

        Uses an explicit stack, so arbitrarily long reply chains are safe.
        When ``max_depth`` is given, nodes deeper than it are not visited.

        Args:
            forest: Root nodes
            max_depth: Deepest level to visit (inclusive), None for all

        Yields:
            Each visited node with its depth relative to the forest roots
        """
        seen: set[int] = set()
        stack: list[tuple[CommentNode, int]] = [(root, 1) for root in reversed(forest)]
        while stack:
            node, depth = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node, depth
            if max_depth is not None and depth >= max_depth:
                continue
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    def count_nodes(self, forest: Sequence[CommentNode]) -> int:
        """Count every node in the forest."""
        return sum(1 for _ in self.walk(forest))

    def find_node(
        self, forest: Sequence[CommentNode], message_id: MessageId
    ) -> CommentNode | None:
        """Find the node wrapping ``message_id``."""
        for node, _ in self.walk(forest):
            if node.id == message_id:
                return node
        return None

    def _break_cycles(
        self, nodes: list[CommentNode], parent_of: list[int | None]
    ) -> list[int]:
        """Detach nodes whose parent chain loops back on itself.

        After the attach pass every node has at most one parent, so anything
        not reachable from a root sits on, or hangs off, a cycle. For each
        such cycle the member that came first in the input is promoted.

        Returns:
            Positions of the promoted nodes
        """
        position_of = {id(node): position for position, node in enumerate(nodes)}
        reached: set[int] = set()

        def mark_from(start: int) -> None:
            stack = [start]
            while stack:
                position = stack.pop()
                if position in reached:
                    continue
                reached.add(position)
                stack.extend(position_of[id(child)] for child in nodes[position].children)

        for position, parent in enumerate(parent_of):
            if parent is None:
                mark_from(position)

        promoted: list[int] = []
        for position in range(len(nodes)):
            if position in reached:
                continue

            # Walk up until a position repeats; the repeat closes the cycle.
            chain: list[int] = []
            on_chain: set[int] = set()
            current: int | None = position
            while current is not None and current not in on_chain:
                chain.append(current)
                on_chain.add(current)
                current = parent_of[current]
            if current is None:
                continue
            cycle = chain[chain.index(current) :]
            head = min(cycle)

            parent = parent_of[head]
            if parent is not None:
                nodes[parent].children = [
                    child for child in nodes[parent].children if child is not nodes[head]
                ]
            parent_of[head] = None
            promoted.append(head)
            mark_from(head)

        return promoted

    def _assign_depths(self, forest: Sequence[CommentNode]) -> None:
        for node, depth in self.walk(forest):
            node.depth = depth
