"""initial_schema

Create the schema for Remark:
- Users, tutorials and courses (minimal views of the platform's records,
  only the columns the comment engine reads)
- Comments (threaded up to level 3, reactions and reply links as arrays,
  reports and edit history as JSONB)

Revision ID: c3f1a9d27b40
Revises:
Create Date: 2026-10-16 10:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "c3f1a9d27b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE content_type AS ENUM ('tutorial', 'course');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("photo", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # TUTORIALS / COURSES tables
    # ========================================================================
    for table_name in ("tutorials", "courses"):
        op.create_table(
            table_name,
            sa.Column(
                "id",
                sa.UUID(),
                server_default=sa.text("uuid_generate_v4()"),
                nullable=False,
            ),
            sa.Column("title", sa.String(300), nullable=False),
            sa.Column(
                "is_published", sa.Boolean(), nullable=False, server_default="false"
            ),
            sa.Column(
                "created_at",
                sa.TIMESTAMP(timezone=True),
                nullable=False,
                server_default=sa.text("NOW()"),
            ),
            sa.PrimaryKeyConstraint("id"),
        )
    op.create_index("idx_tutorials_is_published", "tutorials", ["is_published"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_user_id", sa.UUID(), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=False),
        sa.Column("author_photo", sa.Text(), nullable=True),
        sa.Column(
            "content_type",
            postgresql.ENUM("tutorial", "course", name="content_type", create_type=False),
            nullable=False,
        ),
        sa.Column("content_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "replies",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'::uuid[]"),
        ),
        sa.Column(
            "likes",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'::uuid[]"),
        ),
        sa.Column(
            "dislikes",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'::uuid[]"),
        ),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "edit_history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("is_reported", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("report_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "reports",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("is_deleting", sa.Boolean(), nullable=False, server_default="false"),
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
        # Backstop for replies attached while their subtree is being deleted
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("level >= 0 AND level <= 3", name="level_within_bounds"),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (level = 0)", name="level_matches_parent"
        ),
        sa.CheckConstraint("report_count >= 0", name="report_count_non_negative"),
    )
    op.create_index(
        "idx_comments_content_level_created",
        "comments",
        ["content_id", "level", sa.text("created_at DESC")],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_user_id", "comments", ["author_user_id"])
    op.create_index("idx_comments_is_approved", "comments", ["is_approved"])
    op.create_index(
        "idx_comments_created_at", "comments", [sa.text("created_at DESC")]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comments")
    op.drop_table("courses")
    op.drop_table("tutorials")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS content_type")
