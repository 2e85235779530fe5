"""SQLAlchemy table definitions for Huddle threads.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column("thread_id", UUID, nullable=False),
    Column(
        "parent_message_id",
        BigInteger,
        # Replies outlive their parent and surface as top-level messages
        ForeignKey("messages.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("user_id", UUID, nullable=False),
    Column("body", Text, nullable=False, server_default=""),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_messages_thread_id", messages_table.c.thread_id, messages_table.c.id)
Index("idx_messages_parent_message_id", messages_table.c.parent_message_id)

# ============================================================================
# MESSAGE REACTIONS TABLE
# ============================================================================
message_reactions_table = Table(
    "message_reactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "message_id",
        BigInteger,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column("reaction_emoji", String(16), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "message_id", "user_id", "reaction_emoji", name="unique_message_reaction"
    ),
)

# ============================================================================
# MESSAGE ATTACHMENTS TABLE
# ============================================================================
message_attachments_table = Table(
    "message_attachments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "message_id",
        BigInteger,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("uploaded_by", UUID, nullable=False),
    Column("file_name", String(255), nullable=False),
    Column("file_url", Text, nullable=False),
    Column("file_type", String(255), nullable=True),
    Column("file_size_bytes", BigInteger, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_message_attachments_message_id", message_attachments_table.c.message_id)
