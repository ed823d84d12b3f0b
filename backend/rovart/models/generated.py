import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Index, Integer, Numeric, Text, func, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class ReservationStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


def _new_reservation_id() -> str:
    return str(uuid.uuid4())


class Services(Base):
    __tablename__ = 'services'

    id = Column(Integer, primary_key=True)
    service_key = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    duration_min = Column(Integer, nullable=False, server_default=text('60'))
    created_at = Column(DateTime, server_default=func.current_timestamp())
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())

    reservations = relationship('Reservations', back_populates='service')


class Customers(Base):
    __tablename__ = 'customers'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    phone = Column(Text, nullable=False)
    address = Column(Text)
    created_at = Column(DateTime, server_default=func.current_timestamp())
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())

    reservations = relationship('Reservations', back_populates='customer')


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        # at most one non-cancelled reservation per (date, time)
        Index(
            'uq_reservations_active_slot', 'date', 'time',
            unique=True,
            sqlite_where=text("status != 'Cancelled'"),
            postgresql_where=text("status != 'Cancelled'"),
        ),
        Index('ix_reservations_date', 'date'),
    )

    reservation_id = Column(Text, primary_key=True, default=_new_reservation_id)
    date = Column(Date, nullable=False)
    time = Column(Text, nullable=False)
    status = Column(
        Enum(
            ReservationStatus,
            name='reservation_status',
            values_callable=lambda e: [m.value for m in e],
            native_enum=False,
            validate_strings=True,
        ),
        nullable=False,
        default=ReservationStatus.CONFIRMED,
    )
    customer_id = Column(ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.current_timestamp())
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())

    customer = relationship('Customers', back_populates='reservations')
    service = relationship('Services', back_populates='reservations')
