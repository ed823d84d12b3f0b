# backend/rovart/services/slots/__init__.py
"""
Slots module: the fixed daily grid and per-day availability.
"""

from .config import SLOT_LABELS, BookingConfig, business_now, get_booking_config
from .availability import (
    get_day_availability,
    get_reserved_times,
    parse_date,
    parse_iso_date,
    resolve_availability,
)

__all__ = [
    "SLOT_LABELS",
    "BookingConfig",
    "business_now",
    "get_booking_config",
    "get_day_availability",
    "get_reserved_times",
    "parse_date",
    "parse_iso_date",
    "resolve_availability",
]
