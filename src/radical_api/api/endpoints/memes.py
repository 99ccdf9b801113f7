"""Meme upload endpoint for the Radical API."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from radical_api.api.dependencies import MemesStoreDep, SessionDep
from radical_api.core.errors import NotFoundError, StoreError, ValidationError
from radical_api.core.settings import settings
from radical_api.db.time import now_ms
from radical_api.models import Proposal
from radical_api.schemas.petition import MemeUploaded
from radical_api.services.media import EXTENSIONS, BlobStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["memes"])


def _size_label(limit: int) -> str:
    megabytes = limit / (1024 * 1024)
    return f"{megabytes:g}MB"


def _extension(upload: UploadFile) -> str:
    suffix = PurePosixPath(upload.filename or "").suffix.lstrip(".").lower()
    if suffix.isalnum():
        return suffix
    return EXTENSIONS.get(upload.content_type or "", "jpg")


@router.post("/memes", response_model=MemeUploaded)
async def upload_meme(
    db: SessionDep,
    memes_store: MemesStoreDep,
    proposal_id: str | None = Form(None, alias="proposalId"),
    meme: UploadFile | None = File(None),
) -> MemeUploaded:
    """Attach an uploaded image to a proposal."""
    if not proposal_id:
        raise ValidationError("Missing proposalId")
    if meme is None:
        raise ValidationError("No file uploaded or invalid file")
    if meme.content_type not in settings.meme_allowed_types:
        raise ValidationError(
            "Invalid file type. Only JPEG, PNG, GIF, and WebP images are allowed.",
            details={"received": meme.content_type},
        )

    max_bytes = settings.meme_max_bytes
    data = await meme.read(max_bytes + 1)
    if len(data) > max_bytes:
        size = meme.size if meme.size is not None else len(data)
        raise ValidationError(
            f"File too large. Maximum size is {_size_label(max_bytes)}.",
            details={"size": size, "maxSize": max_bytes},
        )

    proposal = db.get(Proposal, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal does not exist", details={"proposalId": proposal_id})

    filename = f"{proposal_id}_{now_ms()}.{_extension(meme)}"
    try:
        await run_in_threadpool(memes_store.put, filename, data, meme.content_type)
    except BlobStoreError as exc:
        logger.exception("Failed to store meme %s", filename)
        raise StoreError("Failed to store meme") from exc

    meme_url = f"{settings.public_base}/memes/{filename}"
    try:
        proposal.meme_url = meme_url
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to attach meme %s to proposal %s", filename, proposal_id)
        try:
            await run_in_threadpool(memes_store.delete, filename)
        except BlobStoreError:
            logger.warning("Failed to delete orphaned meme %s", filename, exc_info=True)
        raise StoreError("Failed to update proposal with meme URL") from exc

    logger.info("Added meme %s to proposal %s", filename, proposal_id)
    return MemeUploaded(proposal_id=proposal_id, meme_url=meme_url)
