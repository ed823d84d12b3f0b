# backend/rovart/routers/availability.py
"""
GET /availability?date=YYYY-MM-DD

Bookable flag for every slot of the day. Past days come back all False
rather than as an error; a failed reservation lookup is invisible here.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_now
from ..schemas.slots import AvailabilityResponse
from ..services.slots import get_booking_config, get_day_availability, parse_date

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse)
def get_availability(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    target_date = parse_date(date)
    config = get_booking_config()

    slots = get_day_availability(db, target_date, now, config)

    return AvailabilityResponse(
        date=date,
        slots=slots,
        timezone=config.timezone_name,
    )
