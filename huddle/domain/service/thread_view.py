"""Depth-bounded views of a comment forest.

Turns the forest built by ``CommentTreeBuilder`` into what a reader sees:
reply chains indent up to the policy's maximum depth, deeper replies are
listed flat at the deepest level, and every entry knows which actions the
viewing user may take.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from huddle.domain.model import Attachment
from huddle.domain.value import MessageId, Reaction, RelationshipStatus, UserId

from .comment_tree import CommentNode, DepthPolicy

RelationshipLookup = Callable[[UserId], RelationshipStatus]


@dataclass(frozen=True)
class RenderContext:
    """Who is looking at the thread.

    Passed explicitly into rendering; nothing is read from ambient state.
    """

    current_user_id: UserId | None = None
    relationship_lookup: RelationshipLookup | None = None

    def relationship_to(self, author_id: UserId) -> RelationshipStatus | None:
        if self.current_user_id is not None and author_id == self.current_user_id:
            return RelationshipStatus.SELF
        if self.relationship_lookup is None:
            return None
        return self.relationship_lookup(author_id)


@dataclass(frozen=True)
class ReactionSummary:
    """All reactions with one emoji on a message."""

    emoji: str
    count: int
    user_ids: tuple[UserId, ...]
    reacted_by_me: bool


@dataclass
class CommentView:
    """A message as shown in a thread."""

    message_id: MessageId
    author_id: UserId
    body: str
    reply_to: MessageId | None
    depth: int
    level: int
    is_edited: bool
    created_at: datetime
    updated_at: datetime
    can_reply: bool
    can_edit: bool
    can_delete: bool
    reactions: list[ReactionSummary]
    attachments: list[Attachment]
    author_relationship: RelationshipStatus | None = None
    children: list["CommentView"] = field(default_factory=list)


def group_reactions(
    reactions: Iterable[Reaction], current_user_id: UserId | None = None
) -> list[ReactionSummary]:
    """Group reactions by emoji in first-seen order.

    Counts distinct users per emoji, so a repeated (user, emoji) pair from an
    inconsistent source is counted once.
    """
    users_by_emoji: dict[str, list[UserId]] = {}
    for reaction in reactions:
        users = users_by_emoji.setdefault(reaction.emoji.root, [])
        if reaction.user_id not in users:
            users.append(reaction.user_id)

    return [
        ReactionSummary(
            emoji=emoji,
            count=len(users),
            user_ids=tuple(users),
            reacted_by_me=current_user_id is not None and current_user_id in users,
        )
        for emoji, users in users_by_emoji.items()
    ]


def render_node(
    node: CommentNode, depth: int, policy: DepthPolicy, context: RenderContext
) -> CommentView:
    """Render a single node without its children."""
    message = node.message
    is_author = message.is_authored_by(context.current_user_id)
    signed_in = context.current_user_id is not None
    return CommentView(
        message_id=message.id,
        author_id=message.author_id,
        body=message.body,
        reply_to=message.parent_id if depth > 1 else None,
        depth=depth,
        level=policy.visual_level(depth),
        is_edited=message.is_edited,
        created_at=message.created_at,
        updated_at=message.updated_at,
        can_reply=signed_in and policy.can_reply(depth),
        can_edit=is_author,
        can_delete=is_author,
        reactions=group_reactions(message.reactions, context.current_user_id),
        attachments=list(message.attachments),
        author_relationship=context.relationship_to(message.author_id),
    )


def render_forest(
    forest: Sequence[CommentNode],
    policy: DepthPolicy,
    context: RenderContext | None = None,
) -> list[CommentView]:
    """Render a forest with indentation capped at ``policy.max_depth``.

    Nodes at the maximum depth do not indent their replies. Instead every
    descendant of such a node is appended, in pre-order, to the children of
    the nearest ancestor that still indents, so they line up at the deepest
    level. Nothing is dropped.

    Args:
        forest: Root nodes from ``CommentTreeBuilder.build_forest``
        policy: Nesting policy
        context: Viewer identity and relationship lookup

    Returns:
        Root views with nested children
    """
    context = context or RenderContext()
    roots: list[CommentView] = []
    seen: set[int] = set()

    # Each entry: node, its true depth, and the list its view goes into.
    stack: list[tuple[CommentNode, int, list[CommentView]]] = [
        (root, 1, roots) for root in reversed(forest)
    ]
    while stack:
        node, depth, target = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))

        view = render_node(node, depth, policy, context)
        target.append(view)

        child_target = view.children if policy.should_indent(depth) else target
        for child in reversed(node.children):
            stack.append((child, depth + 1, child_target))

    return roots
