"""Data access helpers for proposals and their vote aggregates."""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, distinct, func, select
from sqlalchemy.orm import Session

from radical_api.models import PetitionDetail, Proposal, User, Vote

__all__ = ["DEFAULT_SORT", "SORT_ORDERS", "ProposalRepository"]


def _vote_count(*conditions: ColumnElement[bool]) -> Any:
    return (
        select(func.count(Vote.id))
        .where(Vote.proposal_id == Proposal.id, *conditions)
        .correlate(Proposal)
        .scalar_subquery()
    )


def _summary_select() -> Select[Any]:
    verified = (
        select(func.count(distinct(PetitionDetail.user_id)))
        .where(PetitionDetail.proposal_id == Proposal.id, PetitionDetail.verified.is_(True))
        .correlate(Proposal)
        .scalar_subquery()
    )
    return select(
        Proposal.id,
        Proposal.text,
        Proposal.timestamp,
        Proposal.trending,
        Proposal.meme_url,
        Proposal.share_image_url,
        Proposal.author_id,
        User.name.label("author_name"),
        _vote_count(Vote.vote_type == "upvote").label("upvotes"),
        _vote_count(Vote.vote_type == "downvote").label("downvotes"),
        _vote_count(Vote.vote_type == "upvote", Vote.is_petition.is_(True)).label(
            "petition_signatures"
        ),
        verified.label("verified_petitioners"),
    ).join(User, Proposal.author_id == User.id)


SortKey = Callable[[Any], Sequence[Any]]

SORT_ORDERS: dict[str, SortKey] = {
    "newest": lambda c: (c.timestamp.desc(),),
    "oldest": lambda c: (c.timestamp.asc(),),
    "popular": lambda c: ((c.upvotes - c.downvotes).desc(), c.timestamp.desc()),
    "controversial": lambda c: (
        (c.upvotes + c.downvotes).desc(),
        func.abs(c.upvotes - c.downvotes).asc(),
        c.timestamp.desc(),
    ),
    "petitions": lambda c: (c.petition_signatures.desc(), c.timestamp.desc()),
}
DEFAULT_SORT = "newest"


class ProposalRepository:
    """Read proposals together with their vote and petition counts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_summary(self, proposal_id: str) -> dict[str, Any] | None:
        """Return one proposal with its aggregates, or None."""
        row = self.session.execute(
            _summary_select().where(Proposal.id == proposal_id)
        ).first()
        return dict(row._mapping) if row is not None else None

    def list_page(self, *, sort_by: str, limit: int, offset: int) -> list[dict[str, Any]]:
        """Return one page of proposals in the requested order.

        Unknown sort keys fall back to newest first. Ties are broken by id so
        pages never overlap.
        """
        summary = _summary_select().subquery("proposal_summary")
        order = SORT_ORDERS.get(sort_by, SORT_ORDERS[DEFAULT_SORT])(summary.c)
        stmt = (
            select(summary)
            .order_by(*order, summary.c.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [dict(row._mapping) for row in self.session.execute(stmt)]

    def count(self) -> int:
        """Return the number of listable proposals."""
        stmt = select(func.count(Proposal.id)).join(User, Proposal.author_id == User.id)
        return self.session.execute(stmt).scalar_one()

    def user_annotations(
        self,
        user_id: str,
        proposal_ids: Sequence[str],
    ) -> dict[str, dict[str, Any]]:
        """Return each proposal's vote and petition state for one user."""
        annotations = {
            proposal_id: {
                "user_vote": None,
                "user_petition_signed": False,
                "user_petition_verified": False,
            }
            for proposal_id in proposal_ids
        }
        if not annotations:
            return annotations

        votes = self.session.execute(
            select(Vote.proposal_id, Vote.vote_type, Vote.is_petition).where(
                Vote.user_id == user_id,
                Vote.proposal_id.in_(proposal_ids),
            )
        )
        for proposal_id, vote_type, is_petition in votes:
            annotations[proposal_id]["user_vote"] = vote_type
            annotations[proposal_id]["user_petition_signed"] = bool(is_petition)

        petitions = self.session.execute(
            select(PetitionDetail.proposal_id, PetitionDetail.verified).where(
                PetitionDetail.user_id == user_id,
                PetitionDetail.proposal_id.in_(proposal_ids),
            )
        )
        for proposal_id, verified in petitions:
            annotations[proposal_id]["user_petition_verified"] = bool(verified)
        return annotations

    def petition_stats(self, proposal_id: str, top_postcodes: int) -> dict[str, Any] | None:
        """Return signature totals and the most common signatory postcodes."""
        proposal_text = self.session.execute(
            select(Proposal.text).where(Proposal.id == proposal_id)
        ).scalar_one_or_none()
        if proposal_text is None:
            return None

        verified = PetitionDetail.verified.is_(True)
        verified_count = self.session.execute(
            select(func.count(distinct(PetitionDetail.user_id))).where(
                PetitionDetail.proposal_id == proposal_id, verified
            )
        ).scalar_one()
        total_signatures = self.session.execute(
            select(func.count(Vote.id)).where(
                Vote.proposal_id == proposal_id,
                Vote.vote_type == "upvote",
                Vote.is_petition.is_(True),
            )
        ).scalar_one()

        postcode_count = func.count(PetitionDetail.id).label("count")
        postcodes = self.session.execute(
            select(PetitionDetail.postcode, postcode_count)
            .where(PetitionDetail.proposal_id == proposal_id, verified)
            .group_by(PetitionDetail.postcode)
            .order_by(postcode_count.desc(), PetitionDetail.postcode.asc())
            .limit(top_postcodes)
        )
        return {
            "proposal_id": proposal_id,
            "proposal_text": proposal_text,
            "verified_signatures": verified_count,
            "total_signatures": total_signatures,
            "top_postcodes": [
                {"postcode": postcode, "count": count} for postcode, count in postcodes
            ],
        }
