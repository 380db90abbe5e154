"""Unit tests for reservation models."""

import os
from datetime import UTC, date, datetime, timedelta
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from restaurant_site_service.models.reservation_models import (
    DEFAULT_TIME_SLOTS,
    Reservation,
    ReservationCreate,
    ReservationSettings,
    ReservationStatusEnum,
    ReservationStatusUpdate,
)


def error_fields(exc: ValidationError) -> set[str]:
    """Collect the field names a ValidationError points at."""
    return {str(err["loc"][0]) for err in exc.errors()}


@pytest.mark.unit
class TestReservationCreate:
    """Test suite for booking input validation."""

    def test_valid_input(self, reservation_payload: dict) -> None:
        """Test that a well-formed booking validates."""
        reservation = ReservationCreate(**reservation_payload)

        assert reservation.party_size == 4
        assert reservation.reservation_time == "19:00"

    def test_today_is_allowed(self, reservation_payload: dict) -> None:
        """Test that same-day bookings pass the date check."""
        reservation_payload["reservation_date"] = date.today().isoformat()

        assert ReservationCreate(**reservation_payload).reservation_date == date.today()

    def test_past_date_rejected(self, reservation_payload: dict) -> None:
        """Test that yesterday is rejected."""
        reservation_payload["reservation_date"] = (date.today() - timedelta(days=1)).isoformat()

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"reservation_date"}

    @pytest.mark.parametrize("party_size", [0, 21, -3])
    def test_party_size_out_of_range(self, reservation_payload: dict, party_size: int) -> None:
        """Test that party sizes outside 1-20 are rejected."""
        reservation_payload["party_size"] = party_size

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"party_size"}

    @pytest.mark.parametrize("party_size", [1, 20])
    def test_party_size_bounds_accepted(self, reservation_payload: dict, party_size: int) -> None:
        """Test both ends of the party size range."""
        reservation_payload["party_size"] = party_size

        assert ReservationCreate(**reservation_payload).party_size == party_size

    @pytest.mark.parametrize("value", ["24:00", "19:60", "7:30", "19.00", "1900", ""])
    def test_bad_time_rejected(self, reservation_payload: dict, value: str) -> None:
        """Test that anything other than zero-padded HH:MM is rejected."""
        reservation_payload["reservation_time"] = value

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"reservation_time"}

    @pytest.mark.parametrize("value", ["00:00", "23:59", "09:05"])
    def test_edge_times_accepted(self, reservation_payload: dict, value: str) -> None:
        """Test the extremes of the 24-hour clock."""
        reservation_payload["reservation_time"] = value

        assert ReservationCreate(**reservation_payload).reservation_time == value

    def test_bad_email_rejected(self, reservation_payload: dict) -> None:
        """Test that malformed email addresses are rejected."""
        reservation_payload["customer_email"] = "not-an-email"

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"customer_email"}

    def test_short_phone_rejected(self, reservation_payload: dict) -> None:
        """Test that phone numbers under ten characters are rejected."""
        reservation_payload["customer_phone"] = "12345"

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"customer_phone"}

    def test_empty_name_rejected(self, reservation_payload: dict) -> None:
        """Test that the guest name is required."""
        reservation_payload["customer_name"] = ""

        with pytest.raises(ValidationError) as exc_info:
            ReservationCreate(**reservation_payload)

        assert error_fields(exc_info.value) == {"customer_name"}

    def test_special_requests_optional(self, reservation_payload: dict) -> None:
        """Test that special requests may be omitted."""
        del reservation_payload["special_requests"]

        assert ReservationCreate(**reservation_payload).special_requests is None


@pytest.mark.unit
class TestReservation:
    """Test suite for the stored reservation model."""

    def test_dynamodb_item_conversion(self, make_reservation) -> None:
        """Test conversion to and from the DynamoDB item shape."""
        reservation = make_reservation(11, special_requests="Birthday")

        item = reservation.to_dynamodb_item()

        assert item["reservation_date"] == "2024-02-15"
        assert item["status"] == "confirmed"
        assert item["special_requests"] == "Birthday"
        assert Reservation.from_dynamodb_item(item) == reservation

    def test_from_dynamodb_item_converts_numbers(self) -> None:
        """Test that DynamoDB Decimal numbers become ints."""
        from decimal import Decimal

        created = datetime(2024, 2, 1, tzinfo=UTC).isoformat()
        reservation = Reservation.from_dynamodb_item(
            {
                "id": Decimal("3"),
                "customer_name": "Ann",
                "customer_email": "ann@example.com",
                "customer_phone": "5551234567",
                "party_size": Decimal("6"),
                "reservation_date": "2024-02-15",
                "reservation_time": "18:30",
                "status": "pending",
                "created_at": created,
                "updated_at": created,
            }
        )

        assert reservation.id == 3
        assert reservation.party_size == 6
        assert reservation.special_requests is None
        assert reservation.status == ReservationStatusEnum.PENDING

    def test_optional_field_omitted_from_item(self, make_reservation) -> None:
        """Test that absent special requests are not written."""
        assert "special_requests" not in make_reservation().to_dynamodb_item()


@pytest.mark.unit
class TestReservationStatusUpdate:
    """Test suite for status update input."""

    def test_rejects_unknown_status(self) -> None:
        """Test that only the four known statuses are accepted."""
        with pytest.raises(ValidationError):
            ReservationStatusUpdate(status="seated")

    def test_accepts_known_status(self) -> None:
        """Test parsing a status string."""
        assert ReservationStatusUpdate(status="cancelled").status == ReservationStatusEnum.CANCELLED


@pytest.mark.unit
class TestReservationSettings:
    """Test suite for seating configuration."""

    def test_defaults(self) -> None:
        """Test the 80-seat, ten-slot default."""
        settings = ReservationSettings()

        assert settings.total_capacity == 80
        assert settings.time_slots == DEFAULT_TIME_SLOTS
        assert len(settings.time_slots) == 10
        assert settings.time_slots[0] == "17:00"
        assert settings.time_slots[-1] == "21:30"

    def test_rejects_bad_slot(self) -> None:
        """Test that slots must be HH:MM."""
        with pytest.raises(ValidationError):
            ReservationSettings(time_slots=("17:00", "5pm"))

    def test_rejects_duplicate_slots(self) -> None:
        """Test that slots must be unique."""
        with pytest.raises(ValidationError):
            ReservationSettings(time_slots=("17:00", "17:00"))

    def test_rejects_non_positive_capacity(self) -> None:
        """Test that capacity must be positive."""
        with pytest.raises(ValidationError):
            ReservationSettings(total_capacity=0)

    @patch.dict(
        os.environ,
        {"RESTAURANT_CAPACITY": "40", "RESERVATION_TIME_SLOTS": "18:00, 19:00,20:00"},
        clear=True,
    )
    def test_from_env(self) -> None:
        """Test loading settings from the environment."""
        settings = ReservationSettings.from_env()

        assert settings.total_capacity == 40
        assert settings.time_slots == ("18:00", "19:00", "20:00")

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_defaults(self) -> None:
        """Test that unset variables fall back to defaults."""
        assert ReservationSettings.from_env() == ReservationSettings()
