"""Unit tests for the ORM models defined in radical_api.models.

These tests verify mapping correctness: table names, the uniqueness
constraints the vote upserts rely on, and the database-level checks on
vote types.
"""

import pytest
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from radical_api import models
from radical_api.models import CommentVote, Proposal, User, Vote


def test_table_names() -> None:
    """Model classes expose expected __tablename__ values."""
    assert models.User.__tablename__ == "users"
    assert models.Proposal.__tablename__ == "proposals"
    assert models.Comment.__tablename__ == "comments"
    assert models.Vote.__tablename__ == "votes"
    assert models.CommentVote.__tablename__ == "comment_votes"
    assert models.PetitionDetail.__tablename__ == "petition_details"
    assert models.LoginAttempt.__tablename__ == "login_attempts"


def _unique_columns(table) -> list[set[str]]:
    return [
        {column.name for column in constraint.columns}
        for constraint in table.constraints
        if isinstance(constraint, UniqueConstraint)
    ]


def test_vote_tables_are_unique_per_subject_and_user() -> None:
    """Each vote table allows one row per (subject, user)."""
    assert {"proposal_id", "user_id"} in _unique_columns(models.Vote.__table__)
    assert {"comment_id", "user_id"} in _unique_columns(models.CommentVote.__table__)
    assert {"proposal_id", "user_id"} in _unique_columns(models.PetitionDetail.__table__)


def test_vote_type_check_constraint(db_session: Session, proposal: Proposal, user: User) -> None:
    """The database rejects vote types other than upvote and downvote."""
    db_session.add(Vote(proposal_id=proposal.id, user_id=user.id, vote_type="sideways"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_duplicate_vote_rejected(db_session: Session, proposal: Proposal, user: User) -> None:
    """A second vote row for the same proposal and user violates the unique constraint."""
    db_session.add(Vote(proposal_id=proposal.id, user_id=user.id, vote_type="upvote"))
    db_session.commit()

    db_session.add(Vote(proposal_id=proposal.id, user_id=user.id, vote_type="downvote"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_comment_vote_defaults(db_session: Session, comment: models.Comment, user: User) -> None:
    """Comment votes get a generated id and timestamp."""
    vote = CommentVote(comment_id=comment.id, user_id=user.id, vote_type="upvote")
    db_session.add(vote)
    db_session.commit()

    assert vote.id.startswith("comment_vote_")
    assert vote.timestamp > 0
