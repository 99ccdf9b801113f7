"""Proposal-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .common import CamelModel, Pagination


class ProposalCreate(CamelModel):
    """Schema for creating a new proposal."""

    text: str = Field(..., min_length=1, description="Proposal text")
    author_id: str = Field(..., min_length=1, description="Author user ID")
    trending: bool = False


class ProposalCreated(CamelModel):
    """Schema returned after a proposal is created."""

    id: str
    author_id: str
    text: str
    timestamp: int
    trending: bool
    share_image_url: str | None


class ProposalOut(BaseModel):
    """Proposal row with vote aggregates.

    Column-derived keys keep their snake_case names; the per-user
    annotations use camelCase and are null when no ``userId`` was given.
    """

    id: str
    text: str
    timestamp: int
    trending: bool
    meme_url: str | None = None
    share_image_url: str | None = None
    author_id: str
    author_name: str
    upvotes: int = 0
    downvotes: int = 0
    petition_signatures: int = 0
    verified_petitioners: int = 0
    user_vote: str | None = Field(default=None, alias="userVote")
    user_petition_signed: bool | None = Field(default=None, alias="userPetitionSigned")
    user_petition_verified: bool | None = Field(default=None, alias="userPetitionVerified")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProposalPage(BaseModel):
    """One page of proposals."""

    data: list[ProposalOut]
    pagination: Pagination


class TrendingUpdate(CamelModel):
    """Schema for updating the trending flag."""

    trending: bool


class TrendingResult(CamelModel):
    """Trending flag after an update."""

    id: str
    trending: bool
