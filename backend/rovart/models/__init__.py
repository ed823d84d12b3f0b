from .generated import Base, Customers, Reservations, ReservationStatus, Services

__all__ = [
    "Base",
    "Customers",
    "Reservations",
    "ReservationStatus",
    "Services",
]
