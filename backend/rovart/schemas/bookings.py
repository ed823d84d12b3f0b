# backend/rovart/schemas/bookings.py

import re
from datetime import date as date_type
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..services.slots.availability import parse_iso_date
from ..services.slots.config import get_booking_config

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\d{9}$")
_DURATION_RE = re.compile(r"^(?:(\d+)\s*h)?\s*(?:(\d+)\s*m(?:in)?)?$")


def parse_duration_minutes(value: Union[int, str]) -> int:
    """
    Duration as integer minutes.

    Accepts 60, "60", "1h", "90m", "1h30m", "1h 30min".
    """
    if isinstance(value, bool):
        raise ValueError("Duration must be a number of minutes")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str):
        raw = value.strip().lower()
        if raw.isdigit():
            minutes = int(raw)
        else:
            m = _DURATION_RE.match(raw)
            if not raw or not m or not (m.group(1) or m.group(2)):
                raise ValueError(f"Unrecognised duration: {value!r}")
            minutes = int(m.group(1) or 0) * 60 + int(m.group(2) or 0)
    else:
        raise ValueError("Duration must be minutes or a string like '1h'")

    if minutes < 1:
        raise ValueError("Duration must be at least 1 minute")
    return minutes


class ServiceRef(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0)
    duration: int = Field(description="Minutes; '1h' style strings are accepted")

    @field_validator("id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def normalize_duration(cls, v) -> int:
        return parse_duration_minutes(v)


class CustomerInfo(BaseModel):
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Exactly 9 digits, typed without country code."""
        cleaned = re.sub(r"\s", "", v)
        if not _PHONE_RE.match(cleaned):
            raise ValueError("Phone must be 9 digits")
        return cleaned

    @field_validator("address", "notes")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class BookingRequest(BaseModel):
    """Body of POST /bookings."""
    service: ServiceRef
    date: str = Field(description="Date in YYYY-MM-DD format")
    time: str = Field(description="Slot label, e.g. '09:00 - 10:00'")
    customer: CustomerInfo

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        v = v.strip()
        parse_iso_date(v)
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        label = get_booking_config().normalize_label(v)
        if label is None:
            raise ValueError("Time must be one of the booking slots")
        return label

    @property
    def booking_date(self) -> date_type:
        return date_type.fromisoformat(self.date)


class BookingResponse(BaseModel):
    booking_reference: str
    reservation_id: str
    booking: dict

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
