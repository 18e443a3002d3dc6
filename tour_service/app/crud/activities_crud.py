import json
import logging
from typing import List

from fastapi import status

from shared.core.policy import can
from shared.core.schemas import SessionUser
from shared.helpers.json_response_helper import error_response, not_found
from shared.utils.enums import Permission
from ..schemas.activities_schemas import (
    ActivityCreate, ActivityOut, ActivityRatingOut, ActivityUpdate, GetYourGuidePriceUpdate)
from ..storage.base import Storage
from .audit_logs_crud import record_audit

logger = logging.getLogger(__name__)


def _check_competitor_price_access(user: SessionUser, payload):
    if payload.getyourguide_price is not None and not can(user.role, Permission.EDIT_COMPETITOR_PRICE):
        error_response(
            message="Only superadmins can change competitor prices",
            error="Insufficient Privileges",
            http_status=status.HTTP_403_FORBIDDEN
        )


# ---------------- Public ----------------

def get_public_activities(storage: Storage) -> List[ActivityOut]:
    return storage.list_activities()


def get_public_activity(storage: Storage, activity_id: str) -> ActivityOut:
    activity = storage.get_activity(activity_id)
    if not activity or not activity.is_active:
        not_found("Activity")
    return activity


def get_activity_rating(storage: Storage, activity_id: str) -> ActivityRatingOut:
    reviews = storage.list_reviews(activity_id=activity_id, approved=True)
    if not reviews:
        return ActivityRatingOut(average_rating=0, total_reviews=0)
    average = sum(r.rating for r in reviews) / len(reviews)
    return ActivityRatingOut(average_rating=average, total_reviews=len(reviews))


# ---------------- Admin ----------------

def get_all_activities(storage: Storage) -> List[ActivityOut]:
    return storage.list_activities(include_inactive=True)


def create_activity(storage: Storage, user: SessionUser, payload: ActivityCreate) -> ActivityOut:
    _check_competitor_price_access(user, payload)

    data = payload.model_dump()
    activity = storage.create_activity(data)
    record_audit(storage, user.id, f"Created activity: {activity.name}",
                 json.dumps({"activityId": activity.id}))
    logger.info("Activity %s created by %s", activity.id, user.username)
    return activity


def update_activity(storage: Storage, user: SessionUser, activity_id: str,
                    payload: ActivityUpdate) -> ActivityOut:
    _check_competitor_price_access(user, payload)

    data = payload.model_dump(exclude_unset=True)
    if not can(user.role, Permission.EDIT_COMPETITOR_PRICE):
        # a null competitor price from an admin form leaves the stored one alone
        data.pop("getyourguide_price", None)
    activity = storage.update_activity(activity_id, data)
    if not activity:
        not_found("Activity")

    record_audit(storage, user.id, f"Updated activity: {activity.name}",
                 json.dumps({"activityId": activity_id, "fields": sorted(data.keys())}))
    return activity


def delete_activity(storage: Storage, user: SessionUser, activity_id: str):
    activity = storage.get_activity(activity_id)
    if not activity:
        not_found("Activity")

    storage.delete_activity(activity_id)
    record_audit(storage, user.id, f"Deleted activity: {activity.name}",
                 json.dumps({"activityId": activity_id}))
    return {"message": "Activity deleted successfully"}


def update_getyourguide_price(storage: Storage, user: SessionUser, activity_id: str,
                              payload: GetYourGuidePriceUpdate) -> ActivityOut:
    activity = storage.update_activity(
        activity_id, {"getyourguide_price": payload.getyourguide_price})
    if not activity:
        not_found("Activity")

    record_audit(storage, user.id, "Updated GetYourGuide price for activity",
                 json.dumps({"activityId": activity_id,
                             "getyourguidePrice": payload.getyourguide_price}))
    return activity
