"""comment_engine_schema

Create the schema for the comment engine:
- Users and Posts (minimal reference tables; owned by other modules)
- Comments (two-tier threads: root_id points at the thread's top-level comment)
- Comment Likes (like ledger, one row per comment and user)
- Comment Reports (abuse reports and their resolution)

Revision ID: 3c41d2a9e7b0
Revises:
Create Date: 2026-10-19 09:12:44.318206

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d2a9e7b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM ('PENDING', 'APPROVED');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE report_reason AS ENUM ('spam', 'abuse', 'harassment', 'other');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE report_status AS ENUM ('pending', 'resolved', 'dismissed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table (reference only)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
        ),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        if_not_exists=True,
    )

    # ========================================================================
    # POSTS table (reference only)
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
        ),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(300), nullable=False),
        _timestamp("deleted_at", nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_posts_slug"),
        if_not_exists=True,
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=True),
        sa.Column("author_username", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("root_id", sa.UUID(), nullable=True),
        sa.Column("reply_to_id", sa.UUID(), nullable=True),
        sa.Column("reply_to_username", sa.String(255), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "PENDING", "APPROVED", name="comment_status", create_type=False
            ),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _timestamp("deleted_at", nullable=True),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["root_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reply_to_id"], ["comments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("likes_count >= 0", name="likes_count_non_negative"),
        sa.CheckConstraint(
            "root_id IS NULL OR NOT is_pinned", name="replies_not_pinned"
        ),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id"])
    op.create_index("idx_comments_root_id", "comments", ["root_id"])
    op.create_index("idx_comments_status", "comments", ["status"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])
    op.create_index("idx_comments_deleted_at", "comments", ["deleted_at"])

    # ========================================================================
    # COMMENT_LIKES table
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_like"),
    )
    op.create_index("idx_comment_likes_user_id", "comment_likes", ["user_id"])

    # ========================================================================
    # COMMENT_REPORTS table
    # ========================================================================
    op.create_table(
        "comment_reports",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("reporter_id", sa.UUID(), nullable=False),
        sa.Column(
            "reason",
            postgresql.ENUM(
                "spam",
                "abuse",
                "harassment",
                "other",
                name="report_reason",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "resolved", "dismissed", name="report_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        _timestamp("created_at"),
        _timestamp("resolved_at", nullable=True),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comment_reports_comment_id", "comment_reports", ["comment_id"]
    )
    op.create_index("idx_comment_reports_status", "comment_reports", ["status"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comment_reports")
    op.drop_table("comment_likes")
    op.drop_table("comments")
    op.execute("DROP TYPE IF EXISTS report_status")
    op.execute("DROP TYPE IF EXISTS report_reason")
    op.execute("DROP TYPE IF EXISTS comment_status")
