"""Tests for the vote toggle engine."""

import pytest
from sqlalchemy import Delete, delete, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from radical_api.core.errors import NotFoundError, StoreError, ValidationError
from radical_api.models import Comment, CommentVote, PetitionDetail, Proposal, User, Vote
from radical_api.schemas.vote import PetitionDetailsIn
from radical_api.services.voting import VoteAction, VoteToggleEngine

PETITION_DETAILS = PetitionDetailsIn(
    full_name="Ada Lovelace",
    address="12 St James's Square",
    postcode="SW1Y 4JH",
    dob="1815-12-10",
    email="ada@example.com",
)


def _votes(db: Session, proposal_id: str) -> list[Vote]:
    return list(db.scalars(select(Vote).where(Vote.proposal_id == proposal_id)))


def test_first_vote_is_created(db_session: Session, proposal: Proposal, user: User) -> None:
    """Test casting a first vote creates one row."""
    outcome = VoteToggleEngine(db_session).toggle_proposal_vote(proposal.id, user.id, "upvote")

    assert outcome.action is VoteAction.CREATED
    assert outcome.vote_type == "upvote"
    votes = _votes(db_session, proposal.id)
    assert [(v.user_id, v.vote_type) for v in votes] == [(user.id, "upvote")]


def test_same_vote_twice_removes_it(db_session: Session, proposal: Proposal, user: User) -> None:
    """Test repeating a vote retracts it."""
    engine = VoteToggleEngine(db_session)
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")
    outcome = engine.toggle_proposal_vote(proposal.id, user.id, "upvote")

    assert outcome.action is VoteAction.REMOVED
    assert outcome.vote_type is None
    assert _votes(db_session, proposal.id) == []


def test_retraction_already_deleted_still_removes(
    db_session: Session, proposal: Proposal, user: User, mocker
) -> None:
    """Test a repeat vote whose row vanished mid-toggle reports removal and stays deleted."""
    engine = VoteToggleEngine(db_session)
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")

    original_execute = db_session.execute

    def execute(statement, *args, **kwargs):
        if isinstance(statement, Delete):
            # Another request retracts the same vote between the read and the delete.
            original_execute(delete(Vote).where(Vote.proposal_id == proposal.id))
        return original_execute(statement, *args, **kwargs)

    mocker.patch.object(db_session, "execute", side_effect=execute)
    outcome = engine.toggle_proposal_vote(proposal.id, user.id, "upvote")

    assert outcome.action is VoteAction.REMOVED
    assert outcome.vote_type is None
    assert _votes(db_session, proposal.id) == []


def test_opposite_vote_switches_in_place(
    db_session: Session, proposal: Proposal, user: User
) -> None:
    """Test switching from upvote to downvote keeps a single row."""
    engine = VoteToggleEngine(db_session)
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")
    outcome = engine.toggle_proposal_vote(proposal.id, user.id, "downvote")

    assert outcome.action is VoteAction.UPDATED
    db_session.expire_all()
    votes = _votes(db_session, proposal.id)
    assert [(v.user_id, v.vote_type) for v in votes] == [(user.id, "downvote")]


def test_votes_are_per_user(
    db_session: Session, proposal: Proposal, user: User, other_user: User
) -> None:
    """Test one user's toggle does not touch another user's vote."""
    engine = VoteToggleEngine(db_session)
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")
    engine.toggle_proposal_vote(proposal.id, other_user.id, "upvote")
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")

    assert [v.user_id for v in _votes(db_session, proposal.id)] == [other_user.id]


def test_invalid_vote_type_rejected(db_session: Session, proposal: Proposal, user: User) -> None:
    """Test vote types outside upvote/downvote are rejected with allowed values."""
    with pytest.raises(ValidationError) as exc_info:
        VoteToggleEngine(db_session).toggle_proposal_vote(proposal.id, user.id, "meh")

    assert exc_info.value.message == "Invalid vote type"
    assert exc_info.value.details["allowedValues"] == ["upvote", "downvote"]


def test_unknown_user_rejected(db_session: Session, proposal: Proposal) -> None:
    """Test voting as a user that does not exist."""
    with pytest.raises(NotFoundError, match="User does not exist"):
        VoteToggleEngine(db_session).toggle_proposal_vote(proposal.id, "ghost", "upvote")


def test_unknown_proposal_rejected(db_session: Session, user: User) -> None:
    """Test voting on a proposal that does not exist."""
    with pytest.raises(NotFoundError, match="Proposal does not exist"):
        VoteToggleEngine(db_session).toggle_proposal_vote("proposal_x", user.id, "upvote")


def test_petition_upvote_records_details(
    db_session: Session, proposal: Proposal, user: User
) -> None:
    """Test a petition upvote stores verified signatory details."""
    outcome = VoteToggleEngine(db_session).toggle_proposal_vote(
        proposal.id,
        user.id,
        "upvote",
        is_petition=True,
        petition_details=PETITION_DETAILS,
    )

    assert outcome.is_petition is True
    assert outcome.petition_recorded is True
    vote = _votes(db_session, proposal.id)[0]
    assert vote.is_petition is True
    detail = db_session.scalars(select(PetitionDetail)).one()
    assert (detail.user_id, detail.postcode, detail.verified) == (user.id, "SW1Y 4JH", True)


def test_petition_details_upserted(db_session: Session, proposal: Proposal, user: User) -> None:
    """Test re-signing after a retraction overwrites the stored details."""
    engine = VoteToggleEngine(db_session)
    engine.toggle_proposal_vote(
        proposal.id, user.id, "upvote", is_petition=True, petition_details=PETITION_DETAILS
    )
    engine.toggle_proposal_vote(proposal.id, user.id, "upvote")
    moved = PETITION_DETAILS.model_copy(update={"postcode": "EH1 1YZ"})
    engine.toggle_proposal_vote(
        proposal.id, user.id, "upvote", is_petition=True, petition_details=moved
    )

    db_session.expire_all()
    details = list(db_session.scalars(select(PetitionDetail)))
    assert [d.postcode for d in details] == ["EH1 1YZ"]


def test_petition_flag_ignored_for_downvotes(
    db_session: Session, proposal: Proposal, user: User
) -> None:
    """Test a downvote never counts as a petition signature."""
    outcome = VoteToggleEngine(db_session).toggle_proposal_vote(
        proposal.id,
        user.id,
        "downvote",
        is_petition=True,
        petition_details=PETITION_DETAILS,
    )

    assert outcome.is_petition is False
    assert outcome.petition_recorded is False
    assert _votes(db_session, proposal.id)[0].is_petition is False
    assert db_session.scalars(select(PetitionDetail)).first() is None


def test_incomplete_petition_details_rejected_before_write(
    db_session: Session, proposal: Proposal, user: User
) -> None:
    """Test missing petition fields are reported and nothing is written."""
    partial = PetitionDetailsIn(full_name="Ada Lovelace", postcode="SW1Y 4JH")

    with pytest.raises(ValidationError) as exc_info:
        VoteToggleEngine(db_session).toggle_proposal_vote(
            proposal.id, user.id, "upvote", is_petition=True, petition_details=partial
        )

    assert exc_info.value.message == "Missing required petition details"
    assert exc_info.value.details["missingFields"] == ["address", "dob", "email"]
    assert _votes(db_session, proposal.id) == []


def test_store_failure_rolls_back(
    mocker, db_session: Session, proposal: Proposal, user: User
) -> None:
    """Test database errors surface as StoreError after a rollback."""
    engine = VoteToggleEngine(db_session)
    mocker.patch.object(
        engine,
        "_toggle",
        side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")),
    )
    rollback = mocker.spy(db_session, "rollback")

    with pytest.raises(StoreError, match="Failed to process vote in database"):
        engine.toggle_proposal_vote(proposal.id, user.id, "upvote")
    rollback.assert_called_once()


def test_comment_vote_toggle_cycle(db_session: Session, comment: Comment, user: User) -> None:
    """Test create, switch and remove on a comment vote."""
    engine = VoteToggleEngine(db_session)

    assert engine.toggle_comment_vote(comment.id, user.id, "downvote").action is VoteAction.CREATED
    assert engine.toggle_comment_vote(comment.id, user.id, "upvote").action is VoteAction.UPDATED
    db_session.expire_all()
    vote = db_session.scalars(select(CommentVote)).one()
    assert vote.vote_type == "upvote"

    outcome = engine.toggle_comment_vote(comment.id, user.id, "upvote")
    assert outcome.action is VoteAction.REMOVED
    assert outcome.vote_type is None
    assert db_session.scalars(select(CommentVote)).first() is None


def test_comment_vote_unknown_comment(db_session: Session, user: User) -> None:
    """Test voting on a comment that does not exist."""
    with pytest.raises(NotFoundError, match="Comment does not exist"):
        VoteToggleEngine(db_session).toggle_comment_vote("comment_x", user.id, "upvote")
