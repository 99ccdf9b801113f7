"""Petition statistics and share card endpoints for the Radical API."""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from radical_api.api.dependencies import SessionDep
from radical_api.core.errors import NotFoundError, ValidationError
from radical_api.core.settings import settings
from radical_api.repositories import ProposalRepository
from radical_api.schemas.petition import PetitionStats
from radical_api.services.share_image import SVG_MEDIA_TYPE, ShareCard, render_share_svg

router = APIRouter(tags=["petitions"])

SVG_CACHE_CONTROL = "public, max-age=3600"


@router.get("/petition-stats", response_model=PetitionStats)
async def get_petition_stats(
    db: SessionDep,
    proposal_id: str | None = Query(None, alias="proposalId"),
) -> PetitionStats:
    """Return signature totals and the most common postcodes for a petition."""
    if not proposal_id:
        raise ValidationError("Missing proposalId parameter")
    stats = ProposalRepository(db).petition_stats(proposal_id, settings.top_postcodes_limit)
    if stats is None:
        raise NotFoundError("Proposal not found")
    return PetitionStats(**stats)


@router.get("/petition-svg")
async def get_petition_svg(
    db: SessionDep,
    proposal_id: str | None = Query(None, alias="id"),
) -> Response:
    """Render the share card for a proposal."""
    if not proposal_id:
        raise ValidationError("Missing proposal ID")
    row = ProposalRepository(db).get_summary(proposal_id)
    if row is None:
        raise NotFoundError("Proposal not found")

    card = ShareCard(
        proposal_id=row["id"],
        text=row["text"],
        author_name=row["author_name"],
        timestamp=row["timestamp"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
    )
    return Response(
        content=render_share_svg(card),
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": SVG_CACHE_CONTROL},
    )
