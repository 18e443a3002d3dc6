from typing import List

from fastapi import APIRouter, Depends

from shared.core.auth import require_permission
from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from shared.core.schemas import SessionUser
from shared.utils.enums import Permission
from ...crud import bookings_crud as crud
from ...schemas.bookings_schemas import (
    BookingOut, BookingPaymentOut, BookingPaymentUpdate, BookingStatusUpdate,
    BookingWithActivityOut)
from ...schemas.whatsapp_schemas import BookingLinksOut

router = APIRouter(prefix="/api/admin/bookings", tags=["admin bookings"],
                   dependencies=[Depends(rate_limit("admin"))])

allow_manage_bookings = require_permission(Permission.MANAGE_BOOKINGS)


@router.get("", response_model=List[BookingWithActivityOut])
def get_bookings(
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_manage_bookings),
):
    return crud.get_bookings(storage)


@router.get("/{booking_id}", response_model=BookingWithActivityOut)
def get_booking(
    booking_id: str,
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_manage_bookings),
):
    return crud.get_booking(storage, booking_id)


@router.patch("/{booking_id}/status", response_model=BookingOut)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_bookings),
):
    return crud.update_booking_status(storage, current_user, booking_id, payload)


@router.patch("/{booking_id}/payment", response_model=BookingPaymentOut)
def update_booking_payment(
    booking_id: str,
    payload: BookingPaymentUpdate,
    storage=Depends(get_storage),
    current_user: SessionUser = Depends(allow_manage_bookings),
):
    return crud.update_booking_payment(storage, current_user, booking_id, payload)


@router.get("/{booking_id}/whatsapp-links", response_model=BookingLinksOut)
def get_booking_whatsapp_links(
    booking_id: str,
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_manage_bookings),
):
    return crud.get_booking_whatsapp_links(storage, booking_id)
