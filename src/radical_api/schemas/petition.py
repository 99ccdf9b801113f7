"""Petition statistics and meme upload schemas."""

from pydantic import BaseModel

from .common import CamelModel


class PostcodeCount(BaseModel):
    """Number of verified signatories sharing a postcode."""

    postcode: str
    count: int


class PetitionStats(CamelModel):
    """Aggregate petition figures for one proposal."""

    proposal_id: str
    proposal_text: str
    verified_signatures: int
    total_signatures: int
    top_postcodes: list[PostcodeCount]


class MemeUploaded(CamelModel):
    """Result of a meme upload."""

    success: bool = True
    proposal_id: str
    meme_url: str
