"""PostgreSQL implementation of Message repository."""

from collections import defaultdict
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.domain.model import Attachment, Message
from huddle.domain.repository import MessageRepository
from huddle.domain.value import Emoji, MessageId, Reaction, ThreadId, UserId
from huddle.persistence.mappers import (
    attachment_to_dict,
    row_to_attachment,
    row_to_message,
    row_to_reaction,
)
from huddle.persistence.tables import (
    message_attachments_table,
    message_reactions_table,
    messages_table,
)


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load_details(
        self, message_ids: Sequence[MessageId]
    ) -> tuple[dict[MessageId, list[Reaction]], dict[MessageId, list[Attachment]]]:
        """Batch-load reactions and attachments for a set of messages."""
        reactions: dict[MessageId, list[Reaction]] = defaultdict(list)
        attachments: dict[MessageId, list[Attachment]] = defaultdict(list)
        if not message_ids:
            return reactions, attachments

        reaction_stmt = (
            select(message_reactions_table)
            .where(message_reactions_table.c.message_id.in_(message_ids))
            .order_by(message_reactions_table.c.created_at)
        )
        for row in (await self.session.execute(reaction_stmt)).fetchall():
            data = row._asdict()
            reactions[MessageId(data["message_id"])].append(row_to_reaction(data))

        attachment_stmt = (
            select(message_attachments_table)
            .where(message_attachments_table.c.message_id.in_(message_ids))
            .order_by(message_attachments_table.c.created_at)
        )
        for row in (await self.session.execute(attachment_stmt)).fetchall():
            data = row._asdict()
            attachments[MessageId(data["message_id"])].append(row_to_attachment(data))

        return reactions, attachments

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        stmt = select(messages_table).where(messages_table.c.id == message_id)
        row = (await self.session.execute(stmt)).fetchone()
        if row is None:
            return None
        reactions, attachments = await self._load_details([message_id])
        return row_to_message(
            row._asdict(), reactions[message_id], attachments[message_id]
        )

    async def find_by_thread(self, thread_id: ThreadId) -> List[Message]:
        """Find all messages of a thread in creation order."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.thread_id == thread_id)
            .order_by(messages_table.c.id)
        )
        rows = [row._asdict() for row in (await self.session.execute(stmt)).fetchall()]
        reactions, attachments = await self._load_details(
            [MessageId(row["id"]) for row in rows]
        )
        return [
            row_to_message(row, reactions[row["id"]], attachments[row["id"]])
            for row in rows
        ]

    async def create(
        self,
        thread_id: ThreadId,
        author_id: UserId,
        body: str,
        parent_id: Optional[MessageId] = None,
    ) -> Message:
        """Insert a message; the database assigns the id."""
        now = datetime.now()
        stmt = (
            insert(messages_table)
            .values(
                thread_id=thread_id,
                user_id=author_id,
                body=body,
                parent_message_id=parent_id,
                is_edited=False,
                created_at=now,
                updated_at=now,
            )
            .returning(messages_table)
        )
        row = (await self.session.execute(stmt)).fetchone()
        await self.session.flush()
        return row_to_message(row._asdict())

    async def update_body(self, message_id: MessageId, body: str) -> Optional[Message]:
        """Replace the body and set the edited flag."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .values(body=body, is_edited=True, updated_at=datetime.now())
            .returning(messages_table)
        )
        row = (await self.session.execute(stmt)).fetchone()
        if row is None:
            return None
        await self.session.flush()

        reactions, attachments = await self._load_details([message_id])
        return row_to_message(
            row._asdict(), reactions[message_id], attachments[message_id]
        )

    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message; the schema cascades and detaches replies."""
        stmt = (
            delete(messages_table)
            .where(messages_table.c.id == message_id)
            .returning(messages_table.c.id)
        )
        row = (await self.session.execute(stmt)).fetchone()
        await self.session.flush()
        return row is not None

    async def has_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Check whether a reaction exists."""
        stmt = select(message_reactions_table.c.id).where(
            message_reactions_table.c.message_id == message_id,
            message_reactions_table.c.user_id == user_id,
            message_reactions_table.c.reaction_emoji == emoji.root,
        )
        return (await self.session.execute(stmt)).first() is not None

    async def add_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Insert a reaction, ignoring duplicates."""
        stmt = (
            pg_insert(message_reactions_table)
            .values(
                message_id=message_id,
                user_id=user_id,
                reaction_emoji=emoji.root,
                created_at=datetime.now(),
            )
            .on_conflict_do_nothing(constraint="unique_message_reaction")
            .returning(message_reactions_table.c.id)
        )
        row = (await self.session.execute(stmt)).fetchone()
        await self.session.flush()
        return row is not None

    async def remove_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Delete a reaction."""
        stmt = (
            delete(message_reactions_table)
            .where(
                message_reactions_table.c.message_id == message_id,
                message_reactions_table.c.user_id == user_id,
                message_reactions_table.c.reaction_emoji == emoji.root,
            )
            .returning(message_reactions_table.c.id)
        )
        row = (await self.session.execute(stmt)).fetchone()
        await self.session.flush()
        return row is not None

    async def add_attachment(self, attachment: Attachment) -> Attachment:
        """Insert an attachment record."""
        stmt = (
            insert(message_attachments_table)
            .values(**attachment_to_dict(attachment))
            .returning(message_attachments_table)
        )
        row = (await self.session.execute(stmt)).fetchone()
        await self.session.flush()
        return row_to_attachment(row._asdict())
