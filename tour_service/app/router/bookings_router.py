from fastapi import APIRouter, Depends, status

from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from ..crud import bookings_crud as crud
from ..schemas.bookings_schemas import BookingCreate, BookingCreatedOut

router = APIRouter(prefix="/api/bookings", tags=["bookings"],
                   dependencies=[Depends(rate_limit("general"))])


@router.post("", response_model=BookingCreatedOut, status_code=status.HTTP_201_CREATED)
def create_booking(booking: BookingCreate, storage=Depends(get_storage)):
    return crud.create_booking(storage, booking)
