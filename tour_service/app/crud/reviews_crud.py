import logging
from typing import Dict, List, Optional

from shared.core.schemas import SessionUser
from shared.helpers.json_response_helper import not_found
from ..schemas.activities_schemas import ActivityOut
from ..schemas.reviews_schemas import (
    ReviewApprovalUpdate, ReviewCreate, ReviewOut, ReviewWithActivityOut)
from ..storage.base import Storage
from .audit_logs_crud import record_audit

logger = logging.getLogger(__name__)


def _with_activity(review: ReviewOut, activities: Dict[str, ActivityOut]) -> ReviewWithActivityOut:
    return ReviewWithActivityOut(**review.model_dump(), activity=activities.get(review.activity_id))


def _activities_by_id(storage: Storage) -> Dict[str, ActivityOut]:
    return {a.id: a for a in storage.list_activities(include_inactive=True)}


def get_public_reviews(storage: Storage, activity_id: Optional[str] = None) -> List[ReviewWithActivityOut]:
    activities = _activities_by_id(storage)
    reviews = storage.list_reviews(activity_id=activity_id, approved=True)
    return [_with_activity(r, activities) for r in reviews]


def create_review(storage: Storage, payload: ReviewCreate) -> ReviewOut:
    if not storage.get_activity(payload.activity_id):
        not_found("Activity")

    data = payload.model_dump()
    # moderation flags are never taken from the public form
    data.update(approved=False, verified=False)
    review = storage.create_review(data)
    logger.info("Review %s submitted for activity %s, awaiting approval",
                review.id, review.activity_id)
    return review


def get_admin_reviews(storage: Storage, approved: Optional[bool] = None) -> List[ReviewWithActivityOut]:
    activities = _activities_by_id(storage)
    return [_with_activity(r, activities) for r in storage.list_reviews(approved=approved)]


def update_review_approval(storage: Storage, user: SessionUser, review_id: str,
                           payload: ReviewApprovalUpdate) -> ReviewOut:
    review = storage.update_review(review_id, {"approved": payload.approved})
    if not review:
        not_found("Review")

    verb = "Approved" if payload.approved else "Unapproved"
    record_audit(storage, user.id, f"{verb} review {review_id}",
                 f"Review {review_id} for activity {review.activity_id}")
    return review
