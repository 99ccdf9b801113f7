# src/radical_api/models/__init__.py
"""SQLAlchemy models for the Radical application."""

from .comment import Comment
from .petition import PetitionDetail
from .proposal import Proposal
from .user import Dictator, LoginAttempt, TimeTarget, User
from .vote import CommentVote, Vote

__all__ = [
    "Comment",
    "CommentVote",
    "Dictator",
    "LoginAttempt",
    "PetitionDetail",
    "Proposal",
    "TimeTarget",
    "User",
    "Vote",
]
