# backend/rovart/services/slots/config.py
"""
Booking configuration: the fixed daily slot grid and business timezone.

The grid is the single source of truth for slot labels. Availability,
the reservation writer and the catalog all read it from here.
"""

import re
from dataclasses import dataclass
from datetime import datetime, time
from functools import lru_cache
from zoneinfo import ZoneInfo

from ...config import settings


SLOT_LABELS: tuple[str, ...] = (
    "08:00 - 09:00",
    "09:00 - 10:00",
    "10:00 - 11:00",
    "11:00 - 12:00",
    "12:00 - 13:00",
    "13:00 - 14:00",
    "14:00 - 15:00",
    "15:00 - 16:00",
)

_LABEL_RE = re.compile(r"^\s*(\d{2}):(\d{2})\s*-\s*(\d{2}):(\d{2})\s*$")


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking grid.

    Attributes:
        timezone_name: IANA zone used for "today" and slot start instants
        slot_labels: Canonical slot labels in grid order
        cancelled_frees_slot: Whether a cancelled reservation releases its
            slot in availability results
    """
    timezone_name: str = "Indian/Antananarivo"
    slot_labels: tuple[str, ...] = SLOT_LABELS
    cancelled_frees_slot: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if not self.slot_labels:
            raise ValueError("slot_labels must not be empty")
        for label in self.slot_labels:
            if not _LABEL_RE.match(label):
                raise ValueError(f"Malformed slot label: {label!r}")
        ZoneInfo(self.timezone_name)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def slot_start(self, label: str) -> time:
        """Start time of a slot label, e.g. "10:00 - 11:00" -> 10:00."""
        m = _LABEL_RE.match(label)
        if not m:
            raise ValueError(f"Malformed slot label: {label!r}")
        return time(int(m.group(1)), int(m.group(2)))

    def normalize_label(self, raw: str | None) -> str | None:
        """
        Map a user-supplied label to its canonical form.

        "08:00-09:00" and "08:00 - 09:00" both give "08:00 - 09:00".
        Returns None for anything that is not on the grid.
        """
        if not raw:
            return None
        m = _LABEL_RE.match(raw)
        if not m:
            return None
        label = f"{m.group(1)}:{m.group(2)} - {m.group(3)}:{m.group(4)}"
        return label if label in self.slot_labels else None


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton)."""
    return BookingConfig(
        timezone_name=settings.business_timezone,
        cancelled_frees_slot=settings.cancelled_frees_slot,
    )


def business_now(config: BookingConfig | None = None) -> datetime:
    """Current instant as an aware datetime in the business timezone."""
    config = config or get_booking_config()
    return datetime.now(config.tz)
