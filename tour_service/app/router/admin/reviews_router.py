from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from shared.core.auth import require_permission
from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from shared.core.schemas import SessionUser
from shared.utils.enums import Permission
from ...crud import reviews_crud as crud
from ...schemas.reviews_schemas import ReviewApprovalUpdate, ReviewOut, ReviewWithActivityOut

router = APIRouter(prefix="/api/admin/reviews", tags=["admin reviews"],
                   dependencies=[Depends(rate_limit("admin"))])

allow_manage_reviews = require_permission(Permission.MANAGE_REVIEWS)


@router.get("", response_model=List[ReviewWithActivityOut])
def get_reviews(
    approved: Optional[bool] = Query(default=None),
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_manage_reviews),
):
    return crud.get_admin_reviews(storage, approved)


@router.patch("/{review_id}/approval", response_model=ReviewOut)
def update_review_approval(
    review_id: str,
    payload: ReviewApprovalUpdate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_reviews),
):
    return crud.update_review_approval(storage, current_user, review_id, payload)
