from typing import List

from fastapi import APIRouter, Depends, status

from shared.core.auth import require_permission
from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from shared.core.schemas import MessageOut, SessionUser
from shared.utils.enums import Permission
from ...crud import activities_crud as crud
from ...schemas.activities_schemas import (
    ActivityCreate, ActivityOut, ActivityUpdate, GetYourGuidePriceUpdate)

router = APIRouter(prefix="/api/admin/activities", tags=["admin activities"],
                   dependencies=[Depends(rate_limit("admin"))])

allow_manage_activities = require_permission(Permission.MANAGE_ACTIVITIES)


@router.get("", response_model=List[ActivityOut])
def get_activities(
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_manage_activities),
):
    return crud.get_all_activities(storage)


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_activities),
):
    return crud.create_activity(storage, current_user, payload)


@router.put("/{activity_id}", response_model=ActivityOut)
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_activities),
):
    return crud.update_activity(storage, current_user, activity_id, payload)


@router.delete("/{activity_id}", response_model=MessageOut)
def delete_activity(
    activity_id: str,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_activities),
):
    return crud.delete_activity(storage, current_user, activity_id)


@router.patch("/{activity_id}/getyourguide-price", response_model=ActivityOut)
def update_getyourguide_price(
    activity_id: str,
    payload: GetYourGuidePriceUpdate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(require_permission(Permission.EDIT_COMPETITOR_PRICE)),
):
    return crud.update_getyourguide_price(storage, current_user, activity_id, payload)
