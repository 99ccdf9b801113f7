# src/radical_api/models/petition.py
"""Verification details captured alongside petition upvotes."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from radical_api.db.session import Base
from radical_api.db.time import now_ms


class PetitionDetail(Base):
    """Signatory details for one user's petition on one proposal."""

    __tablename__ = "petition_details"
    __table_args__ = (
        UniqueConstraint(
            "proposal_id",
            "user_id",
            name="uq_petition_details_proposal_user",
        ),
        Index("ix_petition_details_postcode", "postcode"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    proposal_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("proposals.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    postcode: Mapped[str] = mapped_column(String(16), nullable=False)
    dob: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
