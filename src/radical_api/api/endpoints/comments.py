"""Comment endpoints for the Radical API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, status

from radical_api.api.dependencies import SessionDep
from radical_api.core.errors import NotFoundError, ValidationError
from radical_api.db.time import now_ms
from radical_api.models import Comment, Proposal, User
from radical_api.repositories import CommentRepository
from radical_api.schemas.comment import CommentCreate, CommentCreated, CommentOut
from radical_api.utils.ids import new_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=list[CommentOut])
async def list_comments(
    db: SessionDep,
    proposal_id: str | None = Query(None, alias="proposalId"),
    user_id: str | None = Query(None, alias="userId"),
) -> list[CommentOut]:
    """List a proposal's comments, newest first."""
    if not proposal_id:
        raise ValidationError("Missing proposalId parameter")
    rows = CommentRepository(db).list_for_proposal(proposal_id, user_id)
    return [CommentOut.model_validate(row) for row in rows]


@router.post("", response_model=CommentCreated, status_code=status.HTTP_201_CREATED)
async def create_comment(payload: CommentCreate, db: SessionDep) -> CommentCreated:
    """Add a comment to a proposal."""
    if db.get(Proposal, payload.proposal_id) is None:
        raise NotFoundError(
            "Proposal does not exist",
            details={"proposalId": payload.proposal_id},
        )
    user = db.get(User, payload.user_id)
    if user is None:
        raise NotFoundError("User does not exist", details={"userId": payload.user_id})

    comment = Comment(
        id=new_id("comment"),
        proposal_id=payload.proposal_id,
        user_id=user.id,
        comment_text=payload.comment_text,
        timestamp=now_ms(),
    )
    db.add(comment)
    db.commit()
    logger.info("Created comment %s on proposal %s", comment.id, comment.proposal_id)

    return CommentCreated(
        id=comment.id,
        proposal_id=comment.proposal_id,
        user_id=comment.user_id,
        user_name=user.name,
        comment_text=comment.comment_text,
        timestamp=comment.timestamp,
    )
