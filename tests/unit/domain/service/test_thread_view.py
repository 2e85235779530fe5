"""Unit tests for depth-limited thread rendering."""

from uuid import uuid4

from huddle.domain.service import (
    CommentTreeBuilder,
    DepthPolicy,
    RenderContext,
    group_reactions,
    render_forest,
)
from huddle.domain.value import Emoji, Reaction, RelationshipStatus, UserId
from tests.conftest import make_message


def flatten(views):
    """Pre-order list of (message_id, level) over rendered views."""
    result = []
    stack = list(reversed(views))
    while stack:
        view = stack.pop()
        result.append((view.message_id, view.level))
        stack.extend(reversed(view.children))
    return result


def chain(length: int):
    return [
        make_message(i, parent_id=i - 1 if i > 1 else None) for i in range(1, length + 1)
    ]


class TestRenderForest:
    """Tests for render_forest."""

    def test_shallow_thread_renders_nested(self):
        """Replies within the maximum depth nest under their parents."""
        forest = CommentTreeBuilder().build_forest(chain(3))

        views = render_forest(forest, DepthPolicy())

        assert len(views) == 1
        assert views[0].children[0].children[0].message_id == 3
        assert flatten(views) == [(1, 1), (2, 2), (3, 3)]

    def test_replies_past_max_depth_are_listed_flat(self):
        """Descendants of a max-depth node line up at the deepest level."""
        # Arrange
        forest = CommentTreeBuilder().build_forest(chain(8))

        # Act
        views = render_forest(forest, DepthPolicy(max_depth=5))

        # Assert
        level4 = views[0].children[0].children[0].children[0]
        assert level4.message_id == 4
        assert [v.message_id for v in level4.children] == [5, 6, 7, 8]
        assert all(v.children == [] for v in level4.children)
        assert [v.level for v in level4.children] == [5, 5, 5, 5]
        assert [v.depth for v in level4.children] == [5, 6, 7, 8]

    def test_no_view_is_dropped(self):
        """Flattening keeps every message, in pre-order."""
        messages = [
            make_message(1),
            make_message(2, parent_id=1),
            make_message(3, parent_id=2),
            make_message(4, parent_id=3),
            make_message(5, parent_id=4),
            make_message(6, parent_id=5),
            make_message(7, parent_id=6),
            make_message(8, parent_id=5),
            make_message(9, parent_id=1),
        ]
        forest = CommentTreeBuilder().build_forest(messages)

        views = render_forest(forest, DepthPolicy(max_depth=3))

        assert [mid for mid, _ in flatten(views)] == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert max(level for _, level in flatten(views)) == 3

    def test_reply_affordance_follows_policy(self):
        """Only nodes strictly below the maximum depth offer a reply."""
        forest = CommentTreeBuilder().build_forest(chain(6))
        context = RenderContext(current_user_id=UserId(uuid4()))

        views = render_forest(forest, DepthPolicy(), context)

        node = views[0]
        replies = []
        while True:
            replies.append((node.depth, node.can_reply))
            if not node.children:
                break
            node = node.children[0]
        assert replies[:4] == [(1, True), (2, True), (3, True), (4, True)]
        flat = views[0].children[0].children[0].children[0].children
        assert [(v.depth, v.can_reply) for v in flat] == [(5, False), (6, False)]

    def test_anonymous_viewer_cannot_reply_or_edit(self):
        forest = CommentTreeBuilder().build_forest(chain(2))

        views = render_forest(forest, DepthPolicy())

        assert not views[0].can_reply
        assert not views[0].can_edit
        assert not views[0].can_delete

    def test_author_can_edit_and_delete_own_message(self):
        """Edit and delete are offered to the author only."""
        author = uuid4()
        messages = [
            make_message(1, author_id=author),
            make_message(2, parent_id=1),
        ]
        forest = CommentTreeBuilder().build_forest(messages)
        context = RenderContext(current_user_id=UserId(author))

        views = render_forest(forest, DepthPolicy(), context)

        assert views[0].can_edit and views[0].can_delete
        assert views[0].author_relationship == RelationshipStatus.SELF
        reply = views[0].children[0]
        assert not reply.can_edit and not reply.can_delete
        assert reply.author_relationship is None

    def test_reply_to_is_set_for_replies_only(self):
        forest = CommentTreeBuilder().build_forest(chain(2))

        views = render_forest(forest, DepthPolicy())

        assert views[0].reply_to is None
        assert views[0].children[0].reply_to == 1

    def test_relationship_lookup_is_used_for_other_authors(self):
        """The caller-provided lookup decides how the viewer relates to authors."""
        friend = uuid4()
        forest = CommentTreeBuilder().build_forest(
            [make_message(1, author_id=friend), make_message(2)]
        )
        context = RenderContext(
            current_user_id=UserId(uuid4()),
            relationship_lookup=lambda user_id: (
                RelationshipStatus.CONNECTED
                if user_id == friend
                else RelationshipStatus.NONE
            ),
        )

        views = render_forest(forest, DepthPolicy(), context)

        assert views[0].author_relationship == RelationshipStatus.CONNECTED
        assert views[1].author_relationship == RelationshipStatus.NONE


class TestGroupReactions:
    """Tests for group_reactions."""

    def test_groups_by_emoji_in_first_seen_order(self):
        me, other = UserId(uuid4()), UserId(uuid4())
        reactions = [
            Reaction(emoji=Emoji("🔥"), user_id=other),
            Reaction(emoji=Emoji("👍"), user_id=me),
            Reaction(emoji=Emoji("🔥"), user_id=me),
        ]

        summary = group_reactions(reactions, current_user_id=me)

        assert [(s.emoji, s.count, s.reacted_by_me) for s in summary] == [
            ("🔥", 2, True),
            ("👍", 1, True),
        ]
        assert summary[0].user_ids == (other, me)

    def test_repeated_pair_is_counted_once(self):
        user = UserId(uuid4())
        reactions = [Reaction(emoji=Emoji("😂"), user_id=user)] * 2

        summary = group_reactions(reactions)

        assert summary[0].count == 1
        assert summary[0].reacted_by_me is False

    def test_reactions_reach_rendered_views(self):
        me = uuid4()
        message = make_message(1, reactions=[("❤️", me), ("❤️", uuid4())])
        forest = CommentTreeBuilder().build_forest([message])

        views = render_forest(
            forest, DepthPolicy(), RenderContext(current_user_id=UserId(me))
        )

        assert views[0].reactions[0].emoji == "❤️"
        assert views[0].reactions[0].count == 2
        assert views[0].reactions[0].reacted_by_me
