# src/radical_api/models/vote.py
"""Models capturing voting interactions on proposals and comments."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from radical_api.db.session import Base
from radical_api.db.time import now_ms
from radical_api.utils.ids import new_id


class Vote(Base):
    """Per-user vote on a proposal.

    The unique constraint on (proposal_id, user_id) is the conflict target for
    the toggle upsert, so a user never holds more than one vote per proposal.
    """

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("vote_type IN ('upvote', 'downvote')", name="ck_votes_vote_type"),
        UniqueConstraint("proposal_id", "user_id", name="uq_votes_proposal_user"),
        Index("ix_votes_proposal_id", "proposal_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    proposal_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("proposals.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    # Only ever true for upvotes.
    is_petition: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class CommentVote(Base):
    """Per-user vote on a comment."""

    __tablename__ = "comment_votes"
    __table_args__ = (
        CheckConstraint(
            "vote_type IN ('upvote', 'downvote')",
            name="ck_comment_votes_vote_type",
        ),
        UniqueConstraint("comment_id", "user_id", name="uq_comment_votes_comment_user"),
        Index("ix_comment_votes_comment_id", "comment_id"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: new_id("comment_vote"),
    )
    comment_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
