"""initial schema

Revision ID: 5b2e9c1d7a40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b2e9c1d7a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, proposals, comments, votes and petition tables."""
    op.create_table(
        "dictators",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "time_targets",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("label", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("emoji_combination", sa.Text(), nullable=True),
        sa.Column("selected_dictator_id", sa.String(length=64), nullable=True),
        sa.Column("selected_target_id", sa.String(length=64), nullable=True),
        sa.Column("last_login", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["selected_dictator_id"], ["dictators.id"]),
        sa.ForeignKeyConstraint(["selected_target_id"], ["time_targets.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_emoji_combination", "users", ["emoji_combination"])
    op.create_table(
        "login_attempts",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("emoji_combination", sa.Text(), nullable=False),
        sa.Column("dictator_id", sa.String(length=64), nullable=False),
        sa.Column("target_id", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=False),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "proposals",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("author_id", sa.String(length=64), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("trending", sa.Boolean(), nullable=False),
        sa.Column("meme_url", sa.Text(), nullable=True),
        sa.Column("share_image_url", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_proposals_timestamp", "proposals", ["timestamp"])
    op.create_table(
        "comments",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("proposal_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("comment_text", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["proposal_id"], ["proposals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_proposal_id", "comments", ["proposal_id"])
    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("proposal_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("vote_type", sa.String(length=16), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("is_petition", sa.Boolean(), nullable=False),
        sa.CheckConstraint("vote_type IN ('upvote', 'downvote')", name="ck_votes_vote_type"),
        sa.ForeignKeyConstraint(["proposal_id"], ["proposals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("proposal_id", "user_id", name="uq_votes_proposal_user"),
    )
    op.create_index("ix_votes_proposal_id", "votes", ["proposal_id"])
    op.create_table(
        "comment_votes",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("comment_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("vote_type", sa.String(length=16), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.CheckConstraint(
            "vote_type IN ('upvote', 'downvote')", name="ck_comment_votes_vote_type"
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_votes_comment_user"),
    )
    op.create_index("ix_comment_votes_comment_id", "comment_votes", ["comment_id"])
    op.create_table(
        "petition_details",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("proposal_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("postcode", sa.String(length=16), nullable=False),
        sa.Column("dob", sa.String(length=32), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["proposal_id"], ["proposals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "proposal_id", "user_id", name="uq_petition_details_proposal_user"
        ),
    )
    op.create_index("ix_petition_details_postcode", "petition_details", ["postcode"])


def downgrade() -> None:
    """Drop all tables created by this revision."""
    op.drop_index("ix_petition_details_postcode", table_name="petition_details")
    op.drop_table("petition_details")
    op.drop_index("ix_comment_votes_comment_id", table_name="comment_votes")
    op.drop_table("comment_votes")
    op.drop_index("ix_votes_proposal_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("ix_comments_proposal_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_proposals_timestamp", table_name="proposals")
    op.drop_table("proposals")
    op.drop_table("login_attempts")
    op.drop_index("ix_users_emoji_combination", table_name="users")
    op.drop_table("users")
    op.drop_table("time_targets")
    op.drop_table("dictators")
