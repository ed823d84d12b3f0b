# backend/rovart/services/slots/availability.py
"""
Per-day slot availability.

Combines:
- the fixed slot grid (config)
- past-day / started-slot exclusion relative to "now" in the business timezone
- slots already taken by reservations on that date

resolve_availability() is pure. get_day_availability() adds the
reservation lookup and degrades to "everything not in the past" when the
lookup fails, so the booking flow is never blocked by a read error.
"""

import logging
import re
from datetime import date, datetime
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import ValidationError
from ...models.generated import Reservations, ReservationStatus
from .config import BookingConfig, get_booking_config

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(raw: str) -> date:
    """Strict YYYY-MM-DD calendar date; raises ValueError otherwise."""
    if not _DATE_RE.match(raw):
        raise ValueError("Invalid date format. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValueError("Invalid date") from None


def parse_date(raw: str | None) -> date:
    """Parse the date query parameter."""
    if not raw:
        raise ValidationError("Date parameter is required")
    try:
        return parse_iso_date(raw)
    except ValueError as e:
        raise ValidationError(str(e)) from None


def resolve_availability(
    target_date: date,
    now: datetime,
    reserved_times: Iterable[str],
    config: BookingConfig | None = None,
) -> dict[str, bool]:
    """
    Compute the slot -> bookable mapping for one calendar day.

    Args:
        target_date: Day to resolve, interpreted in the business timezone
        now: Current instant. Naive values are taken as business-local time.
        reserved_times: Labels already occupied on target_date

    Returns:
        All grid labels, in grid order, each mapped to a bool.
    """
    config = config or get_booking_config()
    tz = config.tz

    if now.tzinfo is None:
        local_now = now.replace(tzinfo=tz)
    else:
        local_now = now.astimezone(tz)
    today = local_now.date()

    if target_date < today:
        return {label: False for label in config.slot_labels}

    reserved = set(reserved_times)
    availability = {label: label not in reserved for label in config.slot_labels}

    if target_date == today:
        for label in config.slot_labels:
            slot_start = datetime.combine(target_date, config.slot_start(label), tzinfo=tz)
            # a slot closes the moment it starts
            if slot_start <= local_now:
                availability[label] = False

    return availability


def get_reserved_times(
    db: Session,
    target_date: date,
    config: BookingConfig | None = None,
) -> set[str]:
    """Get labels occupied by reservations on target_date."""
    config = config or get_booking_config()

    query = db.query(Reservations.time).filter(Reservations.date == target_date)
    if config.cancelled_frees_slot:
        query = query.filter(Reservations.status != ReservationStatus.CANCELLED)

    return {row.time for row in query.all() if row.time}


def get_day_availability(
    db: Session,
    target_date: date,
    now: datetime,
    config: BookingConfig | None = None,
) -> dict[str, bool]:
    """Resolve availability for a day, reading reservations from the store."""
    config = config or get_booking_config()

    try:
        reserved = get_reserved_times(db, target_date, config)
    except SQLAlchemyError:
        logger.exception(
            f"Reservation lookup failed for {target_date.isoformat()}, "
            "falling back to time-only availability"
        )
        db.rollback()
        reserved = set()

    return resolve_availability(target_date, now, reserved, config)
