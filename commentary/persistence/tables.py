"""SQLAlchemy table definitions for the comment engine.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account module, read-only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
)

# ============================================================================
# POSTS TABLE (owned by the content module, read-only here)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("slug", String(300), nullable=False, unique=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("author_username", String(255), nullable=False),  # Denormalized from users
    Column("content", Text, nullable=False),
    # Thread root; replies to replies share their root's id
    Column(
        "root_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "reply_to_id", UUID, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True
    ),
    Column("reply_to_username", String(255), nullable=True),
    Column(
        "status",
        Enum("PENDING", "APPROVED", name="comment_status", create_type=False),
        nullable=False,
        server_default="PENDING",
    ),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("ip_address", String(45), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("likes_count >= 0", name="likes_count_non_negative"),
    CheckConstraint("root_id IS NULL OR NOT is_pinned", name="replies_not_pinned"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_root_id", comments_table.c.root_id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_deleted_at", comments_table.c.deleted_at)

# ============================================================================
# COMMENT LIKES TABLE (like ledger)
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_comment_like"),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)

# ============================================================================
# COMMENT REPORTS TABLE
# ============================================================================
comment_reports_table = Table(
    "comment_reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reporter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "reason",
        Enum(
            "spam", "abuse", "harassment", "other", name="report_reason", create_type=False
        ),
        nullable=False,
    ),
    Column("details", Text, nullable=True),
    Column(
        "status",
        Enum(
            "pending", "resolved", "dismissed", name="report_status", create_type=False
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_comment_reports_comment_id", comment_reports_table.c.comment_id)
Index("idx_comment_reports_status", comment_reports_table.c.status)
