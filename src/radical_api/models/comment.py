# src/radical_api/models/comment.py
"""SQLAlchemy model for proposal comments."""

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from radical_api.db.session import Base
from radical_api.db.time import now_ms


class Comment(Base):
    """Immutable free-text comment attached to a proposal."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_proposal_id", "proposal_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    proposal_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("proposals.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    comment_text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
