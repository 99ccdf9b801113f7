"""Vote endpoints for the Radical API."""

from fastapi import APIRouter

from radical_api.api.dependencies import SessionDep
from radical_api.schemas.vote import VoteCreate, VoteResult
from radical_api.services.voting import VoteToggleEngine

router = APIRouter(tags=["votes"])


@router.post("/votes", response_model=VoteResult)
async def cast_vote(payload: VoteCreate, db: SessionDep) -> VoteResult:
    """Cast, switch or retract a vote on a proposal.

    A petition upvote may carry signatory details, which are stored and
    marked verified alongside the vote.
    """
    outcome = VoteToggleEngine(db).toggle_proposal_vote(
        payload.proposal_id,
        payload.user_id,
        payload.vote_type,
        is_petition=payload.is_petition,
        petition_details=payload.petition_details,
    )
    return VoteResult(
        proposal_id=payload.proposal_id,
        user_id=payload.user_id,
        vote_type=outcome.vote_type,
        action=outcome.action.value,
        is_petition=outcome.is_petition,
        petition_verified=outcome.petition_recorded,
    )
