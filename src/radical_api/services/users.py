"""User creation and emoji login."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from radical_api.core.errors import AuthenticationError, ValidationError
from radical_api.db.time import now_ms
from radical_api.db.upsert import dialect_insert
from radical_api.models import Dictator, LoginAttempt, TimeTarget, User
from radical_api.utils.ids import new_citizen_id, new_citizen_name, new_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user_id: str
    username: str
    is_new_user: bool


def create_or_get_user(db: Session, user_id: str, name: str) -> tuple[User, bool]:
    """Insert the user unless the id is taken; return it and whether it was new."""
    stmt = (
        dialect_insert(db, User)
        .values(id=user_id, name=name, created_at=now_ms())
        .on_conflict_do_nothing(index_elements=["id"])
    )
    created = db.execute(stmt).rowcount == 1
    db.commit()
    user = db.get(User, user_id, populate_existing=True)
    if created:
        logger.info("Created user %s", user_id)
    return user, created


def attempt_login(
    db: Session,
    emoji_combination: str,
    dictator_id: str,
    target_id: str,
    ip_address: str | None = None,
) -> LoginResult:
    """Log in with an emoji combination and two selections.

    An unseen emoji combination signs up a new user. A known combination with
    different selections is rejected. Every attempt past selection validation
    is recorded, including rejected ones.
    """
    if db.get(Dictator, dictator_id) is None:
        raise ValidationError("Invalid dictator selection", details={"dictatorId": dictator_id})
    if db.get(TimeTarget, target_id) is None:
        raise ValidationError("Invalid time target selection", details={"targetId": target_id})

    timestamp = now_ms()
    user = db.execute(
        select(User).where(
            User.emoji_combination == emoji_combination,
            User.selected_dictator_id == dictator_id,
            User.selected_target_id == target_id,
        )
    ).scalars().first()

    db.add(
        LoginAttempt(
            id=new_id("login"),
            user_id=user.id if user else None,
            emoji_combination=emoji_combination,
            dictator_id=dictator_id,
            target_id=target_id,
            timestamp=timestamp,
            ip_address=ip_address or "unknown",
            success=user is not None,
        )
    )

    if user is not None:
        user.last_login = timestamp
        db.commit()
        logger.info("Successful login for user %s", user.id)
        return LoginResult(user_id=user.id, username=user.name, is_new_user=False)

    combination_taken = db.execute(
        select(func.count()).select_from(User).where(User.emoji_combination == emoji_combination)
    ).scalar_one()
    if combination_taken:
        db.commit()
        logger.info("Rejected login with mismatched selections")
        raise AuthenticationError(
            "Invalid credentials",
            details="The combination you entered is incorrect",
        )

    user = User(
        id=new_citizen_id(),
        name=new_citizen_name(),
        created_at=timestamp,
        emoji_combination=emoji_combination,
        selected_dictator_id=dictator_id,
        selected_target_id=target_id,
        last_login=timestamp,
    )
    db.add(user)
    db.commit()
    logger.info("Created new user %s with emoji login", user.id)
    return LoginResult(user_id=user.id, username=user.name, is_new_user=True)
