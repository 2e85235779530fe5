"""initial_schema

Create the schema for Huddle discussion threads:
- Messages (flat records; replies point at their parent)
- Message reactions (one row per user, emoji and message)
- Message attachments (files kept in object storage)

Threads are owned by the host application and referenced by UUID only.

Revision ID: 3c41d7e0b9a2
Revises:
Create Date: 2026-10-19 10:12:04.518232

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c41d7e0b9a2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column("parent_message_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        # Deleting a message keeps its replies; they become top-level
        sa.ForeignKeyConstraint(
            ["parent_message_id"], ["messages.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("char_length(body) <= 10000", name="ck_messages_body_length"),
    )
    op.create_index("idx_messages_thread_id", "messages", ["thread_id", "id"])
    op.create_index(
        "idx_messages_parent_message_id", "messages", ["parent_message_id"]
    )

    # ========================================================================
    # MESSAGE_REACTIONS table
    # ========================================================================
    op.create_table(
        "message_reactions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("message_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("reaction_emoji", sa.String(16), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "message_id", "user_id", "reaction_emoji", name="unique_message_reaction"
        ),
    )

    # ========================================================================
    # MESSAGE_ATTACHMENTS table
    # ========================================================================
    op.create_table(
        "message_attachments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("message_id", sa.BigInteger(), nullable=False),
        sa.Column("uploaded_by", sa.UUID(), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(255), nullable=True),  # MIME type
        sa.Column("file_size_bytes", sa.BigInteger(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_message_attachments_message_id", "message_attachments", ["message_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_index("idx_message_attachments_message_id", table_name="message_attachments")
    op.drop_table("message_attachments")
    op.drop_table("message_reactions")
    op.drop_index("idx_messages_parent_message_id", table_name="messages")
    op.drop_index("idx_messages_thread_id", table_name="messages")
    op.drop_table("messages")
