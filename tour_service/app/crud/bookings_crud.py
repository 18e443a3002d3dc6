import logging
from typing import Dict, List

from fastapi import status

from shared.core.schemas import SessionUser
from shared.helpers.json_response_helper import error_response, not_found
from ..enum.booking_enum import BookingStatus, PaymentStatus
from ..schemas.activities_schemas import ActivityOut
from ..schemas.bookings_schemas import (
    BookingCreate, BookingCreatedOut, BookingOut, BookingPaymentOut, BookingPaymentUpdate,
    BookingStatusUpdate, BookingWithActivityOut)
from ..schemas.whatsapp_schemas import BookingLinksOut
from ..storage.base import Storage
from ..util.pricing import compute_payment_update, compute_total_amount, parse_price
from ..util.whatsapp_service import whatsapp_service
from .audit_logs_crud import record_audit

logger = logging.getLogger(__name__)

UNKNOWN_ACTIVITY_NAME = "Activité inconnue"


def _with_activity(booking: BookingOut, activities: Dict[str, ActivityOut]) -> BookingWithActivityOut:
    return BookingWithActivityOut(
        **booking.model_dump(), activity=activities.get(booking.activity_id))


def _activity_name(storage: Storage, activity_id: str) -> str:
    activity = storage.get_activity(activity_id)
    return activity.name if activity else UNKNOWN_ACTIVITY_NAME


def _get_booking_or_404(storage: Storage, booking_id: str) -> BookingOut:
    booking = storage.get_booking(booking_id)
    if not booking:
        not_found("Booking")
    return booking


# ---------------- Public ----------------

def create_booking(storage: Storage, payload: BookingCreate) -> BookingCreatedOut:
    activity = storage.get_activity(payload.activity_id)
    if not activity:
        not_found("Activity")

    try:
        total_amount = compute_total_amount(activity.price, payload.number_of_people)
    except ValueError:
        logger.error("Activity %s has a non numeric price %r", activity.id, activity.price)
        return error_response(
            message="Activity price is invalid",
            http_status=status.HTTP_400_BAD_REQUEST
        )

    booking = storage.create_booking({
        "customer_name": payload.customer_name,
        "customer_phone": payload.customer_phone,
        "customer_email": payload.customer_email,
        "activity_id": activity.id,
        "number_of_people": payload.number_of_people,
        "preferred_date": payload.preferred_date,
        "participant_names": payload.participant_names or [payload.customer_name],
        "notes": payload.notes,
        "status": BookingStatus.pending.value,
        "total_amount": total_amount,
        "payment_status": PaymentStatus.unpaid.value,
        "paid_amount": 0,
    })
    logger.info("Booking %s created for %s (%s x%s = %s MAD)", booking.id, activity.name,
                activity.price, booking.number_of_people, booking.total_amount)

    notification = whatsapp_service.booking_notification(booking, activity.name)
    return BookingCreatedOut(**booking.model_dump(), notification=notification)


# ---------------- Admin ----------------

def get_bookings(storage: Storage) -> List[BookingWithActivityOut]:
    activities = {a.id: a for a in storage.list_activities(include_inactive=True)}
    return [_with_activity(b, activities) for b in storage.list_bookings()]


def get_booking(storage: Storage, booking_id: str) -> BookingWithActivityOut:
    booking = _get_booking_or_404(storage, booking_id)
    activity = storage.get_activity(booking.activity_id)
    return BookingWithActivityOut(**booking.model_dump(), activity=activity)


def update_booking_status(storage: Storage, user: SessionUser, booking_id: str,
                          payload: BookingStatusUpdate) -> BookingOut:
    booking = storage.update_booking(booking_id, {"status": payload.status})
    if not booking:
        not_found("Booking")

    record_audit(storage, user.id, f"Updated booking {booking_id} status to {payload.status}",
                 f"Booking {booking_id} status changed to {payload.status}")
    return booking


def _payment_fields(booking: BookingOut, payload: BookingPaymentUpdate) -> dict:
    if payload.mode is not None:
        return compute_payment_update(
            booking.total_amount, booking.paid_amount, payload.mode, payload.amount)

    return payload.model_dump(
        include={"payment_status", "paid_amount", "payment_method", "deposit_amount"},
        exclude_unset=True)


def _warn_on_overpayment(booking: BookingOut, data: dict):
    total = parse_price(booking.total_amount)
    paid = data.get("paid_amount")
    if paid is not None and total is not None and paid > total:
        logger.warning("Booking %s paid amount %s exceeds total %s",
                       booking.id, paid, booking.total_amount)


def update_booking_payment(storage: Storage, user: SessionUser, booking_id: str,
                           payload: BookingPaymentUpdate) -> BookingPaymentOut:
    booking = _get_booking_or_404(storage, booking_id)

    data = _payment_fields(booking, payload)
    _warn_on_overpayment(booking, data)
    booking = storage.update_booking(booking_id, data)
    if not booking:
        not_found("Booking")

    record_audit(
        storage, user.id,
        f"Updated booking {booking_id} payment status to {booking.payment_status}",
        f"Payment updated for booking {booking_id}: {booking.payment_status}, "
        f"paid: {booking.paid_amount} MAD")

    notification = None
    if booking.payment_status != PaymentStatus.unpaid.value:
        payment_type = "full" if booking.payment_status == PaymentStatus.fully_paid.value else "deposit"
        notification = whatsapp_service.payment_notification(
            booking, _activity_name(storage, booking.activity_id), payment_type)

    return BookingPaymentOut(**booking.model_dump(), notification=notification)


def get_booking_whatsapp_links(storage: Storage, booking_id: str) -> BookingLinksOut:
    booking = _get_booking_or_404(storage, booking_id)
    return whatsapp_service.booking_links(booking, _activity_name(storage, booking.activity_id))
