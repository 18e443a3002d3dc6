from typing import List

from fastapi import APIRouter, Depends

from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from ..crud import activities_crud as crud
from ..schemas.activities_schemas import ActivityOut, ActivityRatingOut

router = APIRouter(prefix="/api/activities", tags=["activities"],
                   dependencies=[Depends(rate_limit("general"))])


@router.get("", response_model=List[ActivityOut])
def get_activities(storage=Depends(get_storage)):
    return crud.get_public_activities(storage)


@router.get("/{activity_id}", response_model=ActivityOut)
def get_activity(activity_id: str, storage=Depends(get_storage)):
    return crud.get_public_activity(storage, activity_id)


@router.get("/{activity_id}/rating", response_model=ActivityRatingOut)
def get_activity_rating(activity_id: str, storage=Depends(get_storage)):
    return crud.get_activity_rating(storage, activity_id)
