"""
Reservation writer and reservation queries.

Booking steps (each commits on its own, so a retry after a partial
failure is safe):
1. upsert Customer by email
2. upsert Service by external key
3. re-check the slot and insert the Reservation as Confirmed

A repeat of a saved booking (same customer, service and slot) returns the
existing reservation instead of a conflict, so a client that lost the
first response can retry. The partial unique index on (date, time) for
non-cancelled rows backs up step 3 when two writers race past the re-check.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Iterator, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    pydantic_error_details,
)
from ..models.generated import Customers, Reservations, ReservationStatus, Services
from ..schemas.bookings import BookingRequest
from .events import emit_event

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "RVT"
REFERENCE_LENGTH = 7

_CONFLICT_MESSAGES = {
    "customer": "A customer with this email is being created, please retry",
    "service": "This service is being created, please retry",
    "reservation": "This time slot is already booked",
    "status": "Another active reservation already holds this slot",
}


@dataclass
class ReservationResult:
    reservation: Reservations
    reservation_id: str
    booking_reference: str
    created: bool = True


def confirmation_reference(reservation_id: str) -> str:
    """Short customer-facing code derived from the reservation id."""
    compact = reservation_id.replace("-", "")
    if not compact:
        raise ValueError("reservation_id must not be empty")
    return f"{REFERENCE_PREFIX}-{compact[:REFERENCE_LENGTH].upper()}"


@contextmanager
def _storage_step(db: Session, step: str) -> Iterator[None]:
    """Translate storage exceptions for one unit of work."""
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Integrity violation during {step} write: {exc.orig}")
        raise ConflictError(_CONFLICT_MESSAGES.get(step, "Already exists")) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Storage failure during {step} write: {exc}")
        raise StorageError("Could not save booking, please try again") from exc


# ── Upserts ──────────────────────────────────────────────────────────────


def upsert_customer(
    db: Session,
    name: str,
    email: str,
    phone: str,
    address: Optional[str] = None,
) -> Customers:
    """Find customer by email or create one. Name and phone are refreshed."""
    email = email.strip().lower()

    with _storage_step(db, "customer"):
        customer = db.query(Customers).filter(Customers.email == email).first()

        if customer:
            customer.name = name
            customer.phone = phone
            if address:
                customer.address = address
        else:
            customer = Customers(name=name, email=email, phone=phone, address=address)
            db.add(customer)
            logger.info(f"Created customer: email={email}")

        db.commit()
        db.refresh(customer)

    return customer


def upsert_service(
    db: Session,
    service_key: str,
    name: str,
    price: float,
    duration_min: int,
) -> Services:
    """Find service by external key or create one. Display fields are refreshed."""
    with _storage_step(db, "service"):
        service = db.query(Services).filter(Services.service_key == service_key).first()

        if service:
            service.name = name
            service.price = price
            service.duration_min = duration_min
        else:
            service = Services(
                service_key=service_key,
                name=name,
                price=price,
                duration_min=duration_min,
            )
            db.add(service)
            logger.info(f"Created service: key={service_key}")

        db.commit()
        db.refresh(service)

    return service


# ── Writer ───────────────────────────────────────────────────────────────


def _coerce_request(request: Union[BookingRequest, dict]) -> BookingRequest:
    if isinstance(request, BookingRequest):
        return request
    try:
        return BookingRequest.model_validate(request)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Missing or invalid booking fields",
            details=pydantic_error_details(exc.errors()),
        ) from exc


def _active_reservation(
    db: Session,
    target_date: date,
    time_label: str,
) -> Optional[Reservations]:
    # cancelled rows never block the writer, even while availability still
    # reports them as taken (see cancelled_frees_slot)
    return (
        db.query(Reservations)
        .filter(
            Reservations.date == target_date,
            Reservations.time == time_label,
            Reservations.status != ReservationStatus.CANCELLED,
        )
        .first()
    )


def create_reservation(
    db: Session,
    request: Union[BookingRequest, dict],
) -> ReservationResult:
    """
    Record a booking.

    Raises:
        ValidationError: request is incomplete or malformed (nothing written)
        ConflictError: slot held by another booking, or a natural-key race
        StorageError: any other persistence failure
    """
    data = _coerce_request(request)
    target_date = data.booking_date

    customer = upsert_customer(
        db,
        name=data.customer.name,
        email=data.customer.email,
        phone=data.customer.phone,
        address=data.customer.address,
    )
    service = upsert_service(
        db,
        service_key=data.service.id,
        name=data.service.name,
        price=data.service.price,
        duration_min=data.service.duration,
    )

    with _storage_step(db, "reservation"):
        existing = _active_reservation(db, target_date, data.time)
        if existing is not None:
            if existing.customer_id == customer.id and existing.service_id == service.id:
                # retry of a booking that was already saved
                logger.info(
                    f"Repeat booking returns existing reservation: "
                    f"reservation_id={existing.reservation_id}"
                )
                return ReservationResult(
                    reservation=existing,
                    reservation_id=existing.reservation_id,
                    booking_reference=confirmation_reference(existing.reservation_id),
                    created=False,
                )
            logger.info(f"Slot already booked: {data.date} {data.time}")
            raise ConflictError(_CONFLICT_MESSAGES["reservation"])

        reservation = Reservations(
            date=target_date,
            time=data.time,
            status=ReservationStatus.CONFIRMED,
            customer_id=customer.id,
            service_id=service.id,
            notes=data.customer.notes,
        )
        db.add(reservation)
        db.commit()
        db.refresh(reservation)

    reference = confirmation_reference(reservation.reservation_id)

    logger.info(
        f"Reservation created: reservation_id={reservation.reservation_id}, "
        f"ref={reference}, customer_id={customer.id}, "
        f"service={service.service_key}, slot={data.date} {data.time}"
    )

    emit_event("reservation_created", {
        "reservation_id": reservation.reservation_id,
        "booking_reference": reference,
        "customer_email": customer.email,
        "service": service.service_key,
        "date": data.date,
        "time": data.time,
    })

    return ReservationResult(
        reservation=reservation,
        reservation_id=reservation.reservation_id,
        booking_reference=reference,
    )


# ── Queries and admin updates ────────────────────────────────────────────


def list_reservations(db: Session) -> list[Reservations]:
    """All reservations, latest date first."""
    return (
        db.query(Reservations)
        .options(joinedload(Reservations.customer), joinedload(Reservations.service))
        .order_by(Reservations.date.desc(), Reservations.time.desc())
        .all()
    )


def list_customer_reservations(db: Session, email: str) -> list[Reservations]:
    """Reservations of the customer with this email, latest date first."""
    return (
        db.query(Reservations)
        .join(Customers, Reservations.customer_id == Customers.id)
        .options(joinedload(Reservations.service))
        .filter(Customers.email == email.strip().lower())
        .order_by(Reservations.date.desc(), Reservations.time.desc())
        .all()
    )


def update_reservation_status(
    db: Session,
    reservation_id: str,
    status: Optional[str],
) -> Reservations:
    """Set a reservation's status. Any of the three values is reachable from any other."""
    try:
        new_status = ReservationStatus(status)
    except ValueError:
        raise ValidationError("Invalid status") from None

    with _storage_step(db, "status"):
        reservation = db.get(Reservations, reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")

        previous = reservation.status
        reservation.status = new_status
        db.commit()
        db.refresh(reservation)

    logger.info(
        f"Reservation status changed: reservation_id={reservation_id}, "
        f"{previous.value} -> {new_status.value}"
    )

    emit_event("reservation_status_changed", {
        "reservation_id": reservation_id,
        "from": previous.value,
        "to": new_status.value,
    })

    return reservation


# ── Views ────────────────────────────────────────────────────────────────


def admin_view(reservation: Reservations) -> dict:
    return {
        "reservation_id": reservation.reservation_id,
        "customer_name": reservation.customer.name,
        "customer_email": reservation.customer.email,
        "service_name": reservation.service.name,
        "date": reservation.date,
        "time": reservation.time,
        "status": reservation.status.value,
        "price": float(reservation.service.price),
    }


def user_view(reservation: Reservations) -> dict:
    return {
        "reservation_id": reservation.reservation_id,
        "service_name": reservation.service.name,
        "date": reservation.date,
        "time": reservation.time,
        "status": reservation.status.value,
        "price": float(reservation.service.price),
    }


def reservation_view(reservation: Reservations) -> dict:
    return {
        "reservation_id": reservation.reservation_id,
        "date": reservation.date,
        "time": reservation.time,
        "status": reservation.status.value,
        "customer_id": reservation.customer_id,
        "service_id": reservation.service_id,
        "notes": reservation.notes,
    }
