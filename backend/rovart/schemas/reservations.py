# backend/rovart/schemas/reservations.py

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class AdminReservationRead(BaseModel):
    reservation_id: str
    customer_name: str
    customer_email: str
    service_name: str
    date: date
    time: str
    status: str
    price: float

    model_config = _camel


class AdminReservationList(BaseModel):
    reservations: list[AdminReservationRead]


class UserReservationRead(BaseModel):
    reservation_id: str
    service_name: str
    date: date
    time: str
    status: str
    price: float

    model_config = _camel


class UserReservationList(BaseModel):
    reservations: list[UserReservationRead]


class ReservationStatusUpdate(BaseModel):
    # validated against ReservationStatus in the service, not here,
    # so an unknown value is a 400 with a clear message
    status: Optional[str] = None


class ReservationRead(BaseModel):
    reservation_id: str
    date: date
    time: str
    status: str
    customer_id: int
    service_id: int
    notes: Optional[str] = None

    model_config = _camel


class ReservationEnvelope(BaseModel):
    reservation: ReservationRead


class AdminCheckResponse(BaseModel):
    is_admin: bool

    model_config = _camel
