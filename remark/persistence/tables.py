"""SQLAlchemy table definitions for Remark.

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
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the users module, read for author snapshots)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    Column("photo", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# TUTORIALS / COURSES TABLES (owned by the content modules, existence checks)
# ============================================================================
tutorials_table = Table(
    "tutorials",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_tutorials_is_published", tutorials_table.c.is_published)

courses_table = Table(
    "courses",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("content", Text, nullable=False),
    # Author snapshot, denormalized from users at creation time
    Column("author_user_id", UUID, nullable=False),
    Column("author_name", String(255), nullable=False),
    Column("author_email", String(255), nullable=False),
    Column("author_photo", Text, nullable=True),
    Column(
        "content_type",
        Enum("tutorial", "course", name="content_type", create_type=False),
        nullable=False,
    ),
    Column("content_id", UUID, nullable=False),  # Tutorial or course id
    # Cascade is the backstop for replies created during a subtree delete
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("level", Integer, nullable=False, server_default="0"),
    Column("replies", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("likes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("dislikes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("is_approved", Boolean, nullable=False, server_default="true"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edit_history", JSONB, nullable=False, server_default="[]"),
    Column("is_reported", Boolean, nullable=False, server_default="false"),
    Column("report_count", Integer, nullable=False, server_default="0"),
    Column("reports", JSONB, nullable=False, server_default="[]"),
    Column("is_deleting", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("level >= 0 AND level <= 3", name="level_within_bounds"),
    CheckConstraint(
        "(parent_id IS NULL) = (level = 0)", name="level_matches_parent"
    ),
    CheckConstraint("report_count >= 0", name="report_count_non_negative"),
)

Index(
    "idx_comments_content_level_created",
    comments_table.c.content_id,
    comments_table.c.level,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_user_id", comments_table.c.author_user_id)
Index("idx_comments_is_approved", comments_table.c.is_approved)
Index("idx_comments_created_at", comments_table.c.created_at.desc())
