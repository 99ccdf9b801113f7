"""Health and diagnostics endpoints for the Radical API."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from radical_api.api.dependencies import SessionDep
from radical_api.core.settings import settings
from radical_api.services.health import check_database
from radical_api.services.meta_tags import ShareMeta
from radical_api.services.share_image import share_image_url_for

router = APIRouter(tags=["system"])

SAMPLE_PROPOSAL_ID = "test_proposal"
SAMPLE_PROPOSAL_TEXT = "This is a test proposal for meta tags"


@router.get("/health")
async def health_check(db: SessionDep) -> JSONResponse:
    """Verify database connectivity and that the core tables exist."""
    report = check_database(db)
    status_code = (
        status.HTTP_500_INTERNAL_SERVER_ERROR
        if report.status == "error"
        else status.HTTP_200_OK
    )
    return JSONResponse(report.to_payload(), status_code=status_code)


@router.get("/debug-meta")
async def debug_meta() -> dict[str, object]:
    """Show the share URL and meta tag values generated for a sample proposal."""
    image_url = share_image_url_for(SAMPLE_PROPOSAL_ID)
    meta = ShareMeta.from_proposal(
        SAMPLE_PROPOSAL_TEXT,
        image_url=image_url,
        page_url=f"{settings.public_base}/?proposal={SAMPLE_PROPOSAL_ID}",
    )
    return {
        "status": "success",
        "message": "Meta tag debug information",
        "shareImageUrl": image_url,
        "metaTagDetails": {
            "og_image": meta.image_url,
            "og_title": meta.title,
            "og_description": meta.description,
            "twitter_image": meta.image_url,
            "twitter_title": meta.title,
            "twitter_description": meta.description,
        },
    }
