"""Aggregate routers for the Radical API."""

from fastapi import APIRouter, status

from radical_api.schemas.common import ErrorResponse

from .endpoints.comment_votes import router as comment_votes_router
from .endpoints.comments import router as comments_router
from .endpoints.memes import router as memes_router
from .endpoints.petitions import router as petitions_router
from .endpoints.proposals import router as proposals_router
from .endpoints.site import router as site_router
from .endpoints.system import router as system_router
from .endpoints.users import router as users_router
from .endpoints.votes import router as votes_router

api_router = APIRouter(
    prefix="/api",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
api_router.include_router(system_router)
api_router.include_router(users_router)
api_router.include_router(proposals_router)
api_router.include_router(votes_router)
api_router.include_router(comments_router)
api_router.include_router(comment_votes_router)
api_router.include_router(memes_router)
api_router.include_router(petitions_router)

__all__ = ["api_router", "site_router"]
