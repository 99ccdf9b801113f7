"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from radical_api.core.settings import settings
from radical_api.db.session import get_db
from radical_api.services.media import BlobStore, get_blob_store
from radical_api.services.static_site import StaticSiteClient, get_static_site_client

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_memes_store() -> BlobStore:
    """Return the store holding memes and share images."""
    return get_blob_store(settings.memes_bucket)


def get_audio_store() -> BlobStore:
    """Return the store holding audio clips."""
    return get_blob_store(settings.audio_bucket)


def get_static_site() -> StaticSiteClient:
    """Return the shared static origin client."""
    return get_static_site_client()


MemesStoreDep = Annotated[BlobStore, Depends(get_memes_store)]
AudioStoreDep = Annotated[BlobStore, Depends(get_audio_store)]
StaticSiteDep = Annotated[StaticSiteClient, Depends(get_static_site)]
