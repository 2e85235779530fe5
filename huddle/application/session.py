"""Client-side state of an open thread.

A ``ThreadSession`` holds the last fetched message list, the forest built
from it and the rendered views. Mutations go through the store; the local
state is never patched by hand. After a successful mutation the session
re-fetches and rebuilds, so the views always reflect the store.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from itertools import count
from typing import Literal

import logfire

from huddle.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from huddle.domain.model import Message
from huddle.domain.service import (
    CommentNode,
    CommentTreeBuilder,
    CommentView,
    DepthPolicy,
    RenderContext,
    render_forest,
)
from huddle.domain.service.thread_view import RelationshipLookup
from huddle.domain.value import AttachmentUpload, MessageId, ThreadId, UserId

from .store import MessageStore

Action = Literal["post", "edit", "delete", "react"]
NotificationKind = Literal["validation", "authorization", "not_found", "store"]

# (action, target message); a top-level post targets None
ControlKey = tuple[Action, MessageId | None]


@dataclass
class ControlState:
    """State of one interactive control, such as a reply box."""

    busy: bool = False
    open: bool = False
    draft: str = ""
    error: str | None = None


@dataclass(frozen=True)
class Notification:
    """A dismissable message shown after a failed action."""

    id: int
    kind: NotificationKind
    message: str
    control: ControlKey | None = None


def notification_kind(error: DomainError) -> NotificationKind:
    if isinstance(error, ValidationError):
        return "validation"
    if isinstance(error, NotAuthorizedError):
        return "authorization"
    if isinstance(error, NotFoundError):
        return "not_found"
    return "store"


@dataclass
class ThreadSession:
    """Open thread with optimistic controls reconciled against the store.

    Example:
        session = ThreadSession(store, thread_id, current_user_id=user_id)
        await session.refresh()
        session.open_reply(parent_id=42)
        if not await session.post("Agreed", parent_id=42):
            print(session.notifications[-1].message)
    """

    store: MessageStore
    thread_id: ThreadId
    current_user_id: UserId | None = None
    policy: DepthPolicy = field(default_factory=DepthPolicy)
    relationship_lookup: RelationshipLookup | None = None
    builder: CommentTreeBuilder = field(default_factory=CommentTreeBuilder)

    messages: list[Message] = field(default_factory=list, init=False)
    forest: list[CommentNode] = field(default_factory=list, init=False)
    views: list[CommentView] = field(default_factory=list, init=False)
    notifications: list[Notification] = field(default_factory=list, init=False)
    closed: bool = field(default=False, init=False)

    _controls: dict[ControlKey, ControlState] = field(
        default_factory=dict, init=False, repr=False
    )
    _notification_ids: count = field(default_factory=lambda: count(1), init=False, repr=False)
    _fetch_seq: int = field(default=0, init=False, repr=False)
    _applied_seq: int = field(default=0, init=False, repr=False)

    @property
    def context(self) -> RenderContext:
        return RenderContext(
            current_user_id=self.current_user_id,
            relationship_lookup=self.relationship_lookup,
        )

    def control(self, action: Action, target: MessageId | None = None) -> ControlState:
        """Get (creating if needed) the control for an action on a target."""
        return self._controls.setdefault((action, target), ControlState())

    def open_reply(self, parent_id: MessageId | None = None) -> ControlState:
        control = self.control("post", parent_id)
        control.open = True
        return control

    def open_edit(self, message_id: MessageId) -> ControlState:
        """Open the edit box for a message, seeded with its current body."""
        control = self.control("edit", message_id)
        if not control.open:
            message = self.find_message(message_id)
            control.draft = message.body if message is not None else ""
            control.open = True
        return control

    def cancel(self, action: Action, target: MessageId | None = None) -> None:
        """Close a control and drop its draft."""
        control = self.control(action, target)
        control.open = False
        control.draft = ""
        control.error = None

    def find_message(self, message_id: MessageId) -> Message | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def can_edit(self, message: Message) -> bool:
        """Whether to offer edit and delete controls.

        Advisory only; the store enforces authorship.
        """
        return message.is_authored_by(self.current_user_id)

    def dismiss(self, notification_id: int) -> None:
        self.notifications = [
            n for n in self.notifications if n.id != notification_id
        ]

    def close(self) -> None:
        """Stop applying results; calls already in flight still complete."""
        self.closed = True
        logfire.debug("Thread session closed", thread_id=str(self.thread_id))

    async def refresh(self) -> bool:
        """Fetch the message list and rebuild the forest and views.

        Returns:
            True if the fetched list was applied
        """
        if self.closed:
            return False

        self._fetch_seq += 1
        seq = self._fetch_seq
        try:
            messages = await self.store.list_messages(self.thread_id)
        except DomainError as e:
            if not self.closed:
                self._notify(e)
            return False

        if self.closed or seq < self._applied_seq:
            logfire.debug(
                "Discarding fetched messages",
                thread_id=str(self.thread_id),
                seq=seq,
                applied_seq=self._applied_seq,
                closed=self.closed,
            )
            return False

        self._applied_seq = seq
        self._apply(messages)
        return True

    async def post(
        self,
        body: str,
        parent_id: MessageId | None = None,
        attachments: Sequence[AttachmentUpload] = (),
    ) -> bool:
        """Post a top-level message or a reply.

        Raises:
            ValidationError: If both the body and the attachments are empty
        """
        if not body.strip() and not attachments:
            raise ValidationError("Message must have text or attachments")

        return await self._mutate(
            ("post", parent_id),
            lambda: self.store.post_message(
                self.thread_id, body, parent_id=parent_id, attachments=attachments
            ),
            draft=body,
        )

    async def edit(self, message_id: MessageId, body: str) -> bool:
        """Replace a message body.

        Raises:
            ValidationError: If the body is empty and the message has no
                attachments
        """
        message = self.find_message(message_id)
        has_attachments = message is not None and bool(message.attachments)
        if not body.strip() and not has_attachments:
            raise ValidationError("Message must have text or attachments")

        return await self._mutate(
            ("edit", message_id),
            lambda: self.store.edit_message(message_id, body),
            draft=body,
        )

    async def delete(self, message_id: MessageId) -> bool:
        return await self._mutate(
            ("delete", message_id),
            lambda: self.store.delete_message(message_id),
        )

    async def react(self, message_id: MessageId, emoji: str) -> bool:
        return await self._mutate(
            ("react", message_id),
            lambda: self.store.toggle_reaction(message_id, emoji),
        )

    async def _mutate(
        self,
        key: ControlKey,
        call: Callable[[], Awaitable[object]],
        draft: str | None = None,
    ) -> bool:
        """Run one store mutation behind its control.

        Returns:
            True if the store accepted the mutation and the session is open
        """
        control = self.control(*key)
        if self.closed or control.busy:
            return False

        control.busy = True
        control.error = None
        if draft is not None:
            control.draft = draft

        failure: DomainError | None = None
        with logfire.span(
            "thread_session.mutate",
            thread_id=str(self.thread_id),
            action=key[0],
            target=key[1],
        ):
            try:
                await call()
            except DomainError as e:
                failure = e
            finally:
                control.busy = False

        if self.closed:
            return False

        if failure is not None:
            control.error = str(failure)
            self._notify(failure, key)
            return False

        if draft is not None:
            control.draft = ""
            control.open = False
        await self.refresh()
        return True

    def _apply(self, messages: Sequence[Message]) -> None:
        self.messages = list(messages)
        self.forest = self.builder.build_forest(self.messages)
        self.views = render_forest(self.forest, self.policy, self.context)

    def _notify(self, error: DomainError, key: ControlKey | None = None) -> None:
        kind = notification_kind(error)
        logfire.warn(
            "Thread action failed",
            thread_id=str(self.thread_id),
            kind=kind,
            action=key[0] if key else "refresh",
            error=str(error),
        )
        self.notifications.append(
            Notification(
                id=next(self._notification_ids),
                kind=kind,
                message=str(error),
                control=key,
            )
        )
