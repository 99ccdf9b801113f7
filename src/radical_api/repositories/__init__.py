"""Repository helpers for aggregate reads."""

from .comment_repo import CommentRepository
from .proposal_repo import ProposalRepository

__all__ = ["CommentRepository", "ProposalRepository"]
