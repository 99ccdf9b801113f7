"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from .common import CamelModel

VoteType = Literal["upvote", "downvote"]
VoteAction = Literal["created", "updated", "removed"]


class PetitionDetailsIn(CamelModel):
    """Signatory details sent with a petition upvote.

    Every field is optional at parse time so a partial payload reports
    "Missing required petition details" instead of a generic validation error.
    """

    full_name: str | None = None
    address: str | None = None
    postcode: str | None = None
    dob: str | None = None
    email: str | None = None

    def missing_fields(self) -> list[str]:
        """Return the camelCase names of absent or empty fields."""
        missing = []
        for name, field in type(self).model_fields.items():
            if not getattr(self, name):
                missing.append(field.alias or name)
        return missing


class VoteCreate(CamelModel):
    """Schema for casting or toggling a proposal vote."""

    proposal_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    # Checked against VoteType by the toggle engine to report the allowed values.
    vote_type: str = Field(..., min_length=1)
    is_petition: bool = False
    petition_details: PetitionDetailsIn | None = None


class VoteResult(CamelModel):
    """Outcome of a proposal vote toggle."""

    proposal_id: str
    user_id: str
    vote_type: VoteType | None
    action: VoteAction
    is_petition: bool
    petition_verified: bool


class CommentVoteCreate(CamelModel):
    """Schema for casting or toggling a comment vote."""

    comment_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    vote_type: str = Field(..., min_length=1)


class CommentVoteResult(CamelModel):
    """Outcome of a comment vote toggle."""

    comment_id: str
    user_id: str
    vote_type: VoteType | None
    action: VoteAction


class CommentVoteCounts(CamelModel):
    """Vote totals for one comment."""

    comment_id: str
    upvotes: int
    downvotes: int
    user_vote: VoteType | None = None
