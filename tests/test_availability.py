"""Tests for the slot availability resolver."""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from rovart.errors import ValidationError
from rovart.models import Customers, Reservations, ReservationStatus, Services
from rovart.services.slots import (
    SLOT_LABELS,
    BookingConfig,
    get_day_availability,
    get_reserved_times,
    parse_date,
    resolve_availability,
)
from rovart.services.slots import availability as availability_module
from tests.conftest import BUSINESS_TZ, FIXED_NOW

TODAY = FIXED_NOW.date()


def _add_reservation(db, day: date, label: str, status=ReservationStatus.CONFIRMED):
    customer = db.query(Customers).first()
    if customer is None:
        customer = Customers(name="Jane", email="jane@x.com", phone="123456789")
        db.add(customer)
    service = db.query(Services).first()
    if service is None:
        service = Services(service_key="bridal", name="Bridal makeup", price=200, duration_min=120)
        db.add(service)
    db.flush()
    db.add(Reservations(
        date=day, time=label, status=status,
        customer_id=customer.id, service_id=service.id,
    ))
    db.commit()


class TestResolveAvailability:

    def test_past_date_has_no_bookable_slots(self):
        result = resolve_availability(date(2025, 5, 19), FIXED_NOW, set())
        assert list(result) == list(SLOT_LABELS)
        assert not any(result.values())

    def test_future_date_is_fully_bookable(self):
        result = resolve_availability(date(2025, 5, 21), FIXED_NOW, set())
        assert result == {label: True for label in SLOT_LABELS}

    def test_today_closes_started_slots(self):
        result = resolve_availability(TODAY, FIXED_NOW, set())
        assert result["08:00 - 09:00"] is False
        assert result["09:00 - 10:00"] is False
        # started at 10:00, not yet over at 10:30: still closed
        assert result["10:00 - 11:00"] is False
        assert result["11:00 - 12:00"] is True
        assert result["15:00 - 16:00"] is True

    def test_slot_start_equal_to_now_is_closed(self):
        now = datetime(2025, 5, 20, 11, 0, tzinfo=BUSINESS_TZ)
        result = resolve_availability(TODAY, now, set())
        assert result["11:00 - 12:00"] is False
        assert result["12:00 - 13:00"] is True

    def test_one_second_before_start_is_open(self):
        now = datetime(2025, 5, 20, 10, 59, 59, tzinfo=BUSINESS_TZ)
        result = resolve_availability(TODAY, now, set())
        assert result["11:00 - 12:00"] is True

    def test_reserved_slot_only_affects_its_label(self):
        day = date(2025, 6, 1)
        result = resolve_availability(day, FIXED_NOW, {"10:00 - 11:00"})
        assert result["10:00 - 11:00"] is False
        assert sum(result.values()) == len(SLOT_LABELS) - 1

    def test_unknown_reserved_labels_are_ignored(self):
        result = resolve_availability(date(2025, 6, 1), FIXED_NOW, {"07:00 - 08:00", ""})
        assert list(result) == list(SLOT_LABELS)
        assert all(result.values())

    def test_today_combines_time_and_reservations(self):
        result = resolve_availability(TODAY, FIXED_NOW, {"14:00 - 15:00"})
        assert [label for label, ok in result.items() if ok] == [
            "11:00 - 12:00",
            "12:00 - 13:00",
            "13:00 - 14:00",
            "15:00 - 16:00",
        ]

    def test_naive_now_is_business_local(self):
        naive = datetime(2025, 5, 20, 15, 30)
        result = resolve_availability(TODAY, naive, set())
        assert not any(result.values())

    def test_utc_now_is_converted_to_business_day(self):
        # 21:30 UTC on the 20th is already 00:30 on the 21st in UTC+3
        now = datetime(2025, 5, 20, 21, 30, tzinfo=timezone.utc)
        assert not any(resolve_availability(date(2025, 5, 20), now, set()).values())
        assert all(resolve_availability(date(2025, 5, 21), now, set()).values())

    def test_deterministic(self):
        args = (TODAY, FIXED_NOW, {"12:00 - 13:00"})
        assert resolve_availability(*args) == resolve_availability(*args)


class TestDayAvailability:

    def test_reads_reservations_for_that_date_only(self, db):
        _add_reservation(db, date(2025, 6, 1), "10:00 - 11:00")
        _add_reservation(db, date(2025, 6, 2), "11:00 - 12:00")

        result = get_day_availability(db, date(2025, 6, 1), FIXED_NOW)

        assert result["10:00 - 11:00"] is False
        assert result["11:00 - 12:00"] is True

    def test_cancelled_reservation_still_occupies_by_default(self, db):
        _add_reservation(db, date(2025, 6, 1), "10:00 - 11:00", ReservationStatus.CANCELLED)
        assert get_reserved_times(db, date(2025, 6, 1)) == {"10:00 - 11:00"}

    def test_cancelled_reservation_frees_slot_when_configured(self, db):
        _add_reservation(db, date(2025, 6, 1), "10:00 - 11:00", ReservationStatus.CANCELLED)
        config = BookingConfig(cancelled_frees_slot=True)

        assert get_reserved_times(db, date(2025, 6, 1), config) == set()
        assert get_day_availability(db, date(2025, 6, 1), FIXED_NOW, config)["10:00 - 11:00"] is True

    def test_lookup_failure_degrades_to_time_only(self, db, monkeypatch, caplog):
        _add_reservation(db, TODAY, "14:00 - 15:00")

        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(availability_module, "get_reserved_times", broken)

        result = get_day_availability(db, TODAY, FIXED_NOW)

        assert list(result) == list(SLOT_LABELS)
        assert result["10:00 - 11:00"] is False
        # reservation could not be read, so the slot shows as open
        assert result["14:00 - 15:00"] is True
        assert "falling back" in caplog.text


class TestParseDate:

    def test_valid(self):
        assert parse_date("2025-06-01") == date(2025, 6, 1)

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing(self, raw):
        with pytest.raises(ValidationError, match="required"):
            parse_date(raw)

    @pytest.mark.parametrize("raw", ["2025/06/01", "01-06-2025", "2025-6-1", "tomorrow"])
    def test_bad_format(self, raw):
        with pytest.raises(ValidationError, match="format"):
            parse_date(raw)

    def test_impossible_date(self):
        with pytest.raises(ValidationError, match="Invalid date"):
            parse_date("2025-02-30")
