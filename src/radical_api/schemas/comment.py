"""Comment-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .common import CamelModel


class CommentCreate(CamelModel):
    """Schema for creating a comment."""

    proposal_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    comment_text: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    """Comment row with its vote totals."""

    id: str
    user_id: str
    comment_text: str
    timestamp: int
    user_name: str
    upvotes: int = 0
    downvotes: int = 0
    user_vote: str | None = Field(default=None, alias="userVote")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class CommentCreated(CamelModel):
    """Schema returned after a comment is created."""

    id: str
    proposal_id: str
    user_id: str
    user_name: str
    comment_text: str
    timestamp: int
    upvotes: int = 0
    downvotes: int = 0
