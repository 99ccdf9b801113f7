"""Comment vote endpoints for the Radical API."""

from fastapi import APIRouter, Query

from radical_api.api.dependencies import SessionDep
from radical_api.core.errors import ValidationError
from radical_api.repositories import CommentRepository
from radical_api.schemas.vote import CommentVoteCounts, CommentVoteCreate, CommentVoteResult
from radical_api.services.voting import VoteToggleEngine

router = APIRouter(prefix="/comment-votes", tags=["comments"])


@router.post("", response_model=CommentVoteResult)
async def cast_comment_vote(payload: CommentVoteCreate, db: SessionDep) -> CommentVoteResult:
    """Cast, switch or retract a vote on a comment."""
    outcome = VoteToggleEngine(db).toggle_comment_vote(
        payload.comment_id,
        payload.user_id,
        payload.vote_type,
    )
    return CommentVoteResult(
        comment_id=payload.comment_id,
        user_id=payload.user_id,
        vote_type=outcome.vote_type,
        action=outcome.action.value,
    )


@router.get("", response_model=CommentVoteCounts)
async def get_comment_votes(
    db: SessionDep,
    comment_id: str | None = Query(None, alias="commentId"),
    user_id: str | None = Query(None, alias="userId"),
) -> CommentVoteCounts:
    """Return vote totals for a comment and, optionally, one user's vote."""
    if not comment_id:
        raise ValidationError("Missing commentId parameter")
    counts = CommentRepository(db).vote_counts(comment_id, user_id)
    return CommentVoteCounts(**counts)
