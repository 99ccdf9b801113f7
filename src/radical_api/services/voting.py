"""Vote toggle engine for proposal and comment votes.

A vote is keyed on (subject, user). Casting the same vote type twice
retracts it, casting the other type switches it in place. A repeat of the
stored type is a delete; anything else is a single
``INSERT ... ON CONFLICT DO UPDATE`` against the declared unique constraint,
all inside one transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, get_args

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from radical_api.core.errors import NotFoundError, StoreError, ValidationError
from radical_api.db.time import now_ms
from radical_api.db.upsert import dialect_insert
from radical_api.models import Comment, CommentVote, PetitionDetail, Proposal, User, Vote
from radical_api.schemas.vote import PetitionDetailsIn, VoteType

logger = logging.getLogger(__name__)

VOTE_TYPES: tuple[str, ...] = get_args(VoteType)


class VoteAction(str, Enum):
    """What a toggle did to the stored vote."""

    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a single toggle."""

    action: VoteAction
    vote_type: str | None
    is_petition: bool = False
    petition_recorded: bool = False


class VoteToggleEngine:
    """Apply toggle-vote semantics using one transaction per call."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def toggle_proposal_vote(
        self,
        proposal_id: str,
        user_id: str,
        vote_type: str,
        *,
        is_petition: bool = False,
        petition_details: PetitionDetailsIn | None = None,
    ) -> VoteOutcome:
        """Toggle a user's vote on a proposal, capturing petition details.

        Petition details are recorded only for a petition upvote that carries
        them. They are validated before anything is written, so a rejected
        petition never leaves a half-applied vote behind.
        """
        _check_vote_type(vote_type)
        self._require(User, user_id, "User does not exist", "userId")
        self._require(Proposal, proposal_id, "Proposal does not exist", "proposalId")

        petition_flag = vote_type == "upvote" and is_petition
        record_petition = petition_flag and petition_details is not None
        if record_petition:
            missing = petition_details.missing_fields()
            if missing:
                raise ValidationError(
                    "Missing required petition details",
                    details={"missingFields": missing},
                )

        timestamp = now_ms()
        try:
            action = self._toggle(
                Vote,
                Vote.proposal_id,
                proposal_id,
                user_id,
                vote_type,
                {"timestamp": timestamp, "is_petition": petition_flag},
            )
            if action is VoteAction.REMOVED:
                record_petition = False
            elif record_petition:
                self._upsert_petition(proposal_id, user_id, petition_details, timestamp)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(
                "Vote toggle failed for proposal %s user %s", proposal_id, user_id
            )
            raise StoreError("Failed to process vote in database") from exc

        logger.info(
            "Vote %s on proposal %s by %s (%s)", action.value, proposal_id, user_id, vote_type
        )
        if action is VoteAction.REMOVED:
            return VoteOutcome(action=action, vote_type=None)
        return VoteOutcome(
            action=action,
            vote_type=vote_type,
            is_petition=petition_flag,
            petition_recorded=record_petition,
        )

    def toggle_comment_vote(self, comment_id: str, user_id: str, vote_type: str) -> VoteOutcome:
        """Toggle a user's vote on a comment."""
        _check_vote_type(vote_type)
        self._require(User, user_id, "User does not exist", "userId")
        self._require(Comment, comment_id, "Comment does not exist", "commentId")

        try:
            action = self._toggle(
                CommentVote,
                CommentVote.comment_id,
                comment_id,
                user_id,
                vote_type,
                {"timestamp": now_ms()},
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(
                "Comment vote toggle failed for comment %s user %s", comment_id, user_id
            )
            raise StoreError("Failed to process comment vote in database") from exc

        logger.info(
            "Comment vote %s on %s by %s (%s)", action.value, comment_id, user_id, vote_type
        )
        return VoteOutcome(
            action=action,
            vote_type=None if action is VoteAction.REMOVED else vote_type,
        )

    def _require(self, model: type[Any], entity_id: str, message: str, key: str) -> None:
        if self.db.get(model, entity_id) is None:
            raise NotFoundError(message, details={key: entity_id})

    def _toggle(
        self,
        model: type[Any],
        subject_column: Any,
        subject_id: str,
        user_id: str,
        vote_type: str,
        extra: dict[str, Any],
    ) -> VoteAction:
        key = (subject_column == subject_id, model.user_id == user_id)
        existing = self.db.execute(select(model.vote_type).where(*key)).scalar_one_or_none()

        if existing == vote_type:
            # A concurrent retraction may have deleted the row already; either way it is gone.
            self.db.execute(delete(model).where(*key, model.vote_type == vote_type))
            return VoteAction.REMOVED

        values = {
            subject_column.key: subject_id,
            "user_id": user_id,
            "vote_type": vote_type,
            **extra,
        }
        stmt = dialect_insert(self.db, model).values(**values)
        update_columns = ["vote_type", *extra]
        stmt = stmt.on_conflict_do_update(
            index_elements=[subject_column.key, "user_id"],
            set_={column: stmt.excluded[column] for column in update_columns},
        )
        self.db.execute(stmt)
        return VoteAction.CREATED if existing is None else VoteAction.UPDATED

    def _upsert_petition(
        self,
        proposal_id: str,
        user_id: str,
        details: PetitionDetailsIn,
        timestamp: int,
    ) -> None:
        fields = {
            "full_name": details.full_name,
            "address": details.address,
            "postcode": details.postcode,
            "dob": details.dob,
            "email": details.email,
            "timestamp": timestamp,
            # No external verification step exists; submitted details count as verified.
            "verified": True,
        }
        stmt = dialect_insert(self.db, PetitionDetail).values(
            proposal_id=proposal_id,
            user_id=user_id,
            **fields,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["proposal_id", "user_id"],
            set_={column: stmt.excluded[column] for column in fields},
        )
        self.db.execute(stmt)


def _check_vote_type(vote_type: str) -> None:
    if vote_type not in VOTE_TYPES:
        raise ValidationError(
            "Invalid vote type",
            details={"voteType": vote_type, "allowedValues": list(VOTE_TYPES)},
        )
