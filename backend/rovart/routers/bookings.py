# backend/rovart/routers/bookings.py
# 201 for a new reservation, 200 when a retry finds the one already saved

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.bookings import BookingRequest, BookingResponse
from ..services.reservations import create_reservation

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    result = create_reservation(db, data)
    if not result.created:
        response.status_code = status.HTTP_200_OK

    booking = data.model_dump()
    booking["status"] = result.reservation.status.value

    return BookingResponse(
        booking_reference=result.booking_reference,
        reservation_id=result.reservation_id,
        booking=booking,
    )
