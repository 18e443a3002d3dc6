from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from ..crud import reviews_crud as crud
from ..schemas.reviews_schemas import ReviewCreate, ReviewOut, ReviewWithActivityOut

router = APIRouter(prefix="/api/reviews", tags=["reviews"],
                   dependencies=[Depends(rate_limit("general"))])


@router.get("", response_model=List[ReviewWithActivityOut])
def get_reviews(
    activity_id: Optional[str] = Query(default=None, alias="activityId"),
    storage=Depends(get_storage),
):
    return crud.get_public_reviews(storage, activity_id)


@router.post("", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(review: ReviewCreate, storage=Depends(get_storage)):
    return crud.create_review(storage, review)
