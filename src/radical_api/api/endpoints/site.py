"""Front-end pages and media served at the site root."""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from radical_api.api.dependencies import AudioStoreDep, MemesStoreDep, SessionDep, StaticSiteDep
from radical_api.core.errors import NotFoundError, StoreError
from radical_api.core.settings import settings
from radical_api.repositories import ProposalRepository
from radical_api.services.media import BlobStore, BlobStoreError, infer_media_type
from radical_api.services.meta_tags import ShareMeta, inject_meta_tags
from radical_api.services.share_image import share_image_url_for
from radical_api.services.static_site import StaticSiteClient

from .system import SAMPLE_PROPOSAL_ID, SAMPLE_PROPOSAL_TEXT

logger = logging.getLogger(__name__)

router = APIRouter(tags=["site"], include_in_schema=False)

STATIC_CACHE_CONTROL = "public, max-age=86400"
MEDIA_CACHE_CONTROL = "public, max-age=31536000"
INJECTED_CACHE_CONTROL = "no-store, max-age=0"

INDEX_PATH = "/index.html"
LOGIN_PATH = "/radical/login.html"
STYLES_PATH = "/styles.css"


async def _proxy(site: StaticSiteClient, path: str, request: Request) -> Response:
    document = await site.fetch(path, user_agent=request.headers.get("user-agent"))
    return Response(
        content=document.body,
        media_type=document.content_type,
        headers={"Cache-Control": STATIC_CACHE_CONTROL},
    )


async def _serve_with_share_meta(
    request: Request,
    db: Session,
    site: StaticSiteClient,
    proposal_id: str | None,
    test_meta: bool,
) -> Response:
    if test_meta:
        proposal_id, text = SAMPLE_PROPOSAL_ID, SAMPLE_PROPOSAL_TEXT
    else:
        row = ProposalRepository(db).get_summary(proposal_id or "")
        if row is None:
            logger.info("Shared proposal %s not found; serving plain page", proposal_id)
            return await _proxy(site, INDEX_PATH, request)
        text = row["text"]

    document = await site.fetch(INDEX_PATH, user_agent=request.headers.get("user-agent"))
    image_url = share_image_url_for(proposal_id)
    page_url = f"{settings.public_base}/?proposal={quote(proposal_id, safe='')}"
    html = inject_meta_tags(document.text, ShareMeta.from_proposal(text, image_url, page_url))
    return HTMLResponse(
        content=html,
        headers={
            "Cache-Control": INJECTED_CACHE_CONTROL,
            "X-Custom-Meta": "test" if test_meta else "proposal",
            "X-Share-Image-Url": image_url,
        },
    )


@router.get("/")
@router.get("/index.html")
async def index_page(
    request: Request,
    db: SessionDep,
    site: StaticSiteDep,
    proposal: str | None = Query(None),
    test_meta: str | None = Query(None),
) -> Response:
    """Serve the main page, with share meta tags for a linked proposal."""
    is_test = test_meta == "true"
    if proposal or is_test:
        return await _serve_with_share_meta(request, db, site, proposal, is_test)
    return await _proxy(site, INDEX_PATH, request)


@router.get("/login")
@router.get("/login.html")
async def login_page(request: Request, site: StaticSiteDep) -> Response:
    """Serve the login page."""
    return await _proxy(site, LOGIN_PATH, request)


@router.get("/styles.css")
async def stylesheet(request: Request, site: StaticSiteDep) -> Response:
    """Serve the site stylesheet."""
    return await _proxy(site, STYLES_PATH, request)


async def _serve_blob(store: BlobStore, key: str) -> Response:
    try:
        blob = await run_in_threadpool(store.get, key)
    except BlobStoreError as exc:
        logger.exception("Failed to read media %s", key)
        raise StoreError("Failed to read media") from exc
    if blob is None:
        raise NotFoundError("File not found", details={"key": key})
    return Response(
        content=blob.data,
        media_type=blob.content_type or infer_media_type(key),
        headers={"Cache-Control": MEDIA_CACHE_CONTROL},
    )


@router.get("/memes/{key}")
async def get_meme(key: str, store: MemesStoreDep) -> Response:
    """Serve a meme or stored share card."""
    return await _serve_blob(store, key)


@router.get("/audio/{key}")
async def get_audio(key: str, store: AudioStoreDep) -> Response:
    """Serve an audio clip."""
    return await _serve_blob(store, key)
