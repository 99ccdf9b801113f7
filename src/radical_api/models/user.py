# src/radical_api/models/user.py
"""User accounts and the lookup tables behind emoji login."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from radical_api.db.session import Base
from radical_api.db.time import now_ms


class User(Base):
    """A participant who authors proposals, comments and votes.

    Users are created explicitly through the create-or-get endpoint or
    implicitly by a first login with an unseen emoji combination.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_emoji_combination", "emoji_combination"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)

    # Emoji login credentials; null for users created via the users endpoint.
    emoji_combination: Mapped[str | None] = mapped_column(Text, nullable=True)
    selected_dictator_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("dictators.id"),
        nullable=True,
    )
    selected_target_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("time_targets.id"),
        nullable=True,
    )
    last_login: Mapped[int | None] = mapped_column(BigInteger, nullable=True)


class Dictator(Base):
    """Selectable figure used as the second login factor."""

    __tablename__ = "dictators"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)


class TimeTarget(Base):
    """Selectable period used as the third login factor."""

    __tablename__ = "time_targets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    label: Mapped[str] = mapped_column(Text, nullable=False)


class LoginAttempt(Base):
    """One row per login attempt, successful or not."""

    __tablename__ = "login_attempts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    emoji_combination: Mapped[str] = mapped_column(Text, nullable=False)
    dictator_id: Mapped[str] = mapped_column(String(64), nullable=False)
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False, default="unknown")
    success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
