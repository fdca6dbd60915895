from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..constants import DEFAULT_TEXT_SIZE, TEXT_SIZES
from ..models import UserSettings
from .errors import InvalidInput


def get_settings_for_user(db: Session, user_id: int) -> UserSettings:
    """Return the user's settings row, creating the defaults on first access."""
    row = db.query(UserSettings).filter(UserSettings.user_id == user_id).one_or_none()
    if row:
        return row
    row = UserSettings(user_id=user_id, hourly_rate=0.0, text_size=DEFAULT_TEXT_SIZE)
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return db.query(UserSettings).filter(UserSettings.user_id == user_id).one()
    return row


def get_hourly_rate(db: Session, user_id: int) -> float:
    rate = db.query(UserSettings.hourly_rate).filter(UserSettings.user_id == user_id).scalar()
    return float(rate or 0.0)


def update_settings(
    db: Session,
    user_id: int,
    *,
    hourly_rate: float | None = None,
    text_size: str | None = None,
) -> UserSettings:
    if text_size is not None and text_size not in TEXT_SIZES:
        raise InvalidInput("Invalid text size")
    if hourly_rate is not None and hourly_rate < 0:
        raise InvalidInput("Invalid hourly rate")

    row = get_settings_for_user(db, user_id)
    if hourly_rate is not None:
        row.hourly_rate = float(hourly_rate)
    if text_size is not None:
        row.text_size = text_size
    db.commit()
    db.refresh(row)
    return row
