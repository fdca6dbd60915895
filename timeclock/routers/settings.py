from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.settings import SettingsRead, SettingsUpdate
from ..services import user_settings
from .auth import require_user

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
async def read_settings(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    row = user_settings.get_settings_for_user(db, user_id)
    return {"settings": SettingsRead.model_validate(row).model_dump()}


@router.put("")
async def update_settings(payload: SettingsUpdate, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    row = user_settings.update_settings(db, user_id, hourly_rate=payload.hourly_rate, text_size=payload.text_size)
    return {"message": "Settings updated", "settings": SettingsRead.model_validate(row).model_dump()}
