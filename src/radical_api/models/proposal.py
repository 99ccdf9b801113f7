# src/radical_api/models/proposal.py
"""SQLAlchemy model for proposals."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from radical_api.db.session import Base
from radical_api.db.time import now_ms


class Proposal(Base):
    """A user-submitted policy idea, the primary votable entity.

    Only the trending flag and the attached image URLs change after creation.
    """

    __tablename__ = "proposals"
    __table_args__ = (Index("ix_proposals_timestamp", "timestamp"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    author_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    trending: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    meme_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    share_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
