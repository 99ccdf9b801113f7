"""Proposal endpoints for the Radical API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Query

from radical_api.api.dependencies import MemesStoreDep, SessionDep
from radical_api.core.errors import NotFoundError
from radical_api.core.settings import settings
from radical_api.db.time import now_ms
from radical_api.models import Proposal, User
from radical_api.repositories import ProposalRepository
from radical_api.schemas.common import Pagination
from radical_api.schemas.proposal import (
    ProposalCreate,
    ProposalCreated,
    ProposalOut,
    ProposalPage,
    TrendingResult,
    TrendingUpdate,
)
from radical_api.services.share_image import ShareCard, publish_share_image, share_image_url_for
from radical_api.utils.ids import new_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/proposals", tags=["proposals"])

# Keeps (page - 1) * limit well inside a 64-bit offset.
MAX_PAGE = 1_000_000


@router.get("", response_model=ProposalPage)
async def list_proposals(
    db: SessionDep,
    page: int = Query(1, le=MAX_PAGE),
    limit: int | None = Query(None),
    sort_by: str = Query("newest", alias="sortBy"),
    user_id: str | None = Query(None, alias="userId"),
) -> ProposalPage:
    """List proposals with vote aggregates, one page at a time."""
    page = max(page, 1)
    limit = min(max(limit or settings.default_page_size, 1), settings.max_page_size)
    offset = (page - 1) * limit

    repo = ProposalRepository(db)
    rows = repo.list_page(sort_by=sort_by, limit=limit, offset=offset)
    total = repo.count()
    if user_id:
        annotations = repo.user_annotations(user_id, [row["id"] for row in rows])
        for row in rows:
            row.update(annotations[row["id"]])

    logger.debug("Listed %d proposals sorted by %s (page %d)", len(rows), sort_by, page)
    return ProposalPage(
        data=[ProposalOut.model_validate(row) for row in rows],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            has_more=offset + len(rows) < total,
        ),
    )


@router.post("", response_model=ProposalCreated)
async def create_proposal(
    payload: ProposalCreate,
    db: SessionDep,
    background_tasks: BackgroundTasks,
    memes_store: MemesStoreDep,
) -> ProposalCreated:
    """Create a proposal and cache its share card in the background."""
    author = db.get(User, payload.author_id)
    if author is None:
        raise NotFoundError("Author does not exist", details={"authorId": payload.author_id})

    proposal_id = new_id("proposal")
    proposal = Proposal(
        id=proposal_id,
        author_id=author.id,
        text=payload.text,
        timestamp=now_ms(),
        trending=payload.trending,
        share_image_url=share_image_url_for(proposal_id),
    )
    db.add(proposal)
    db.commit()
    logger.info("Created proposal %s by %s", proposal_id, author.id)

    background_tasks.add_task(
        publish_share_image,
        memes_store,
        ShareCard(
            proposal_id=proposal.id,
            text=proposal.text,
            author_name=author.name,
            timestamp=proposal.timestamp,
        ),
    )
    return ProposalCreated(
        id=proposal.id,
        author_id=proposal.author_id,
        text=proposal.text,
        timestamp=proposal.timestamp,
        trending=proposal.trending,
        share_image_url=proposal.share_image_url,
    )


@router.get("/{proposal_id}", response_model=ProposalOut)
async def get_proposal(
    proposal_id: str,
    db: SessionDep,
    user_id: str | None = Query(None, alias="userId"),
) -> ProposalOut:
    """Fetch one proposal, annotated with a user's vote when ``userId`` is given."""
    repo = ProposalRepository(db)
    row = repo.get_summary(proposal_id)
    if row is None:
        raise NotFoundError("Proposal not found")
    if user_id:
        row.update(repo.user_annotations(user_id, [proposal_id])[proposal_id])
    return ProposalOut.model_validate(row)


@router.put("/{proposal_id}", response_model=TrendingResult)
async def update_proposal(
    proposal_id: str,
    payload: TrendingUpdate,
    db: SessionDep,
) -> TrendingResult:
    """Set or clear a proposal's trending flag."""
    proposal = db.get(Proposal, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal does not exist", details={"id": proposal_id})
    proposal.trending = payload.trending
    db.commit()
    logger.info("Set trending=%s on proposal %s", payload.trending, proposal_id)
    return TrendingResult(id=proposal.id, trending=proposal.trending)
