"""Data access helpers for comments and comment votes."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from radical_api.models import Comment, CommentVote, User

__all__ = ["CommentRepository"]


def _comment_vote_count(vote_type: str) -> Any:
    return (
        select(func.count(CommentVote.id))
        .where(CommentVote.comment_id == Comment.id, CommentVote.vote_type == vote_type)
        .correlate(Comment)
        .scalar_subquery()
    )


class CommentRepository:
    """Read comments with their vote totals."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_proposal(
        self,
        proposal_id: str,
        user_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return a proposal's comments newest first.

        When ``user_id`` is given each row also carries that user's vote.
        """
        stmt = (
            select(
                Comment.id,
                Comment.user_id,
                Comment.comment_text,
                Comment.timestamp,
                User.name.label("user_name"),
                _comment_vote_count("upvote").label("upvotes"),
                _comment_vote_count("downvote").label("downvotes"),
            )
            .join(User, Comment.user_id == User.id)
            .where(Comment.proposal_id == proposal_id)
            .order_by(Comment.timestamp.desc(), Comment.id.desc())
        )
        comments = [dict(row._mapping) for row in self.session.execute(stmt)]
        if not user_id or not comments:
            return comments

        votes = dict(
            self.session.execute(
                select(CommentVote.comment_id, CommentVote.vote_type).where(
                    CommentVote.user_id == user_id,
                    CommentVote.comment_id.in_([comment["id"] for comment in comments]),
                )
            ).all()
        )
        for comment in comments:
            comment["user_vote"] = votes.get(comment["id"])
        return comments

    def vote_counts(self, comment_id: str, user_id: str | None = None) -> dict[str, Any]:
        """Return upvote and downvote totals for a comment."""
        rows = self.session.execute(
            select(CommentVote.vote_type, func.count(CommentVote.id))
            .where(CommentVote.comment_id == comment_id)
            .group_by(CommentVote.vote_type)
        ).all()
        totals = dict(rows)
        user_vote = None
        if user_id:
            user_vote = self.session.execute(
                select(CommentVote.vote_type).where(
                    CommentVote.comment_id == comment_id,
                    CommentVote.user_id == user_id,
                )
            ).scalar_one_or_none()
        return {
            "comment_id": comment_id,
            "upvotes": totals.get("upvote", 0),
            "downvotes": totals.get("downvote", 0),
            "user_vote": user_vote,
        }
