"""Initial schema — users, offers, likes and history.

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── 1. users (profile, written by the account service) ──────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("email", sa.String, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # ── 2. user_sub_skills ──────────────────────────────────────────
    op.create_table(
        "user_sub_skills",
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "sub_skill_id",
            sa.Integer,
            primary_key=True,
            comment="Catalog sub-skill id (external)",
        ),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("value", sa.Float, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    # ── 3. likes ────────────────────────────────────────────────────
    op.create_table(
        "likes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "from_user",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "to_user",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "is_mutual",
            sa.Boolean,
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("from_user", "to_user", name="uq_like_pair"),
        sa.CheckConstraint("from_user <> to_user", name="chk_like_no_self"),
    )
    op.create_index("ix_likes_to_user", "likes", ["to_user"])

    # ── 4. history ──────────────────────────────────────────────────
    op.create_table(
        "history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "first_user",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "second_user",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("first_user", "second_user", name="uq_history_pair"),
    )
    op.create_index("ix_history_first_user", "history", ["first_user"])


def downgrade() -> None:
    # Drop in reverse order (children / dependents first).
    op.drop_index("ix_history_first_user", table_name="history")
    op.drop_table("history")

    op.drop_index("ix_likes_to_user", table_name="likes")
    op.drop_table("likes")

    op.drop_table("user_sub_skills")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
