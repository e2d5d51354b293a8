from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.utils.database import get_db
from app.services import configuration_service
from app.schemas.settings_schema import SettingCreate, SettingOut, SettingPatch, SettingValueOut

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=list[SettingOut])
def list_settings(category: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return configuration_service.list_settings(db, category=category)


@router.get("/{key}", response_model=SettingValueOut)
def get_setting_value(key: str, db: Session = Depends(get_db)):
    return {"key": key, "value": configuration_service.get_value(db, key)}


@router.post("", response_model=SettingOut, status_code=status.HTTP_201_CREATED)
def create_setting(
    payload: SettingCreate,
    db: Session = Depends(get_db),
    actor: Optional[str] = Depends(get_actor),
):
    return configuration_service.create_setting(
        db,
        key=payload.key,
        value=payload.value,
        value_type=payload.value_type,
        description=payload.description,
        category=payload.category,
        editable=payload.editable,
        actor=actor,
    )


@router.patch("", response_model=SettingOut)
def update_setting(
    payload: SettingPatch,
    db: Session = Depends(get_db),
    actor: Optional[str] = Depends(get_actor),
):
    return configuration_service.set_value(db, payload.key, payload.value, actor=actor)
