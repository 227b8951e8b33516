"""Unit tests for RegistrationValidator."""

from datetime import datetime, timedelta, timezone

import pytest

from gymreg.registrations import (
    DuplicateActiveRegistration,
    InvalidInput,
    PastDateRejected,
    PlanNotFound,
    RegistrationNotFound,
    RegistrationValidator,
    StudentNotFound,
)
from gymreg.state_store import StateStore


@pytest.fixture
def validator(store: StateStore, now: datetime) -> RegistrationValidator:
    """Validator with a fixed clock."""
    return RegistrationValidator(store, clock=lambda: now)


@pytest.mark.unit
class TestParse:
    """Tests for shape validation."""

    def test_valid_payload(
        self, validator: RegistrationValidator
    ) -> None:
        data = validator.parse({"student_id": 7, "plan_id": 2, "start_date": "2024-01-10"})

        assert data.student_id == 7
        assert data.plan_id == 2
        assert data.start_date == datetime(2024, 1, 10)

    def test_numeric_strings_accepted(
        self, validator: RegistrationValidator
    ) -> None:
        data = validator.parse({"student_id": "7", "plan_id": "2", "start_date": "2024-01-10"})

        assert data.student_id == 7

    def test_aware_datetime_normalized_to_utc(
        self, validator: RegistrationValidator
    ) -> None:
        """Offsets are converted to naive UTC."""
        data = validator.parse(
            {"student_id": 1, "plan_id": 1, "start_date": "2024-01-10T09:00:00-03:00"}
        )

        assert data.start_date == datetime(2024, 1, 10, 12, 0)
        assert data.start_date.tzinfo is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"plan_id": 1, "start_date": "2024-01-10"},
            {"student_id": 1, "start_date": "2024-01-10"},
            {"student_id": 1, "plan_id": 1},
            {"student_id": "abc", "plan_id": 1, "start_date": "2024-01-10"},
            {"student_id": 1, "plan_id": 1, "start_date": "not a date"},
            None,
            ["student_id", 1],
        ],
    )
    def test_invalid_payload_raises(
        self, validator: RegistrationValidator, payload
    ) -> None:
        with pytest.raises(InvalidInput):
            validator.parse(payload)


@pytest.mark.unit
class TestCheckReferences:
    """Tests for referential validation."""

    def test_returns_student_and_plan(
        self, validator: RegistrationValidator, student, plan
    ) -> None:
        found_student, found_plan = validator.check_references(student.id, plan.id)

        assert found_student.id == student.id
        assert found_plan.id == plan.id

    def test_missing_student(
        self, validator: RegistrationValidator, plan
    ) -> None:
        with pytest.raises(StudentNotFound):
            validator.check_references(999, plan.id)

    def test_missing_plan(
        self, validator: RegistrationValidator, student
    ) -> None:
        with pytest.raises(PlanNotFound):
            validator.check_references(student.id, 999)

    def test_student_checked_before_plan(
        self, validator: RegistrationValidator
    ) -> None:
        """Both missing reports the student."""
        with pytest.raises(StudentNotFound):
            validator.check_references(999, 999)


@pytest.mark.unit
class TestCheckEndDate:
    """Tests for the end date range check."""

    def test_end_past_year_9999_rejected(
        self, validator: RegistrationValidator, plan
    ) -> None:
        with pytest.raises(InvalidInput):
            validator.check_end_date(plan, datetime(9999, 12, 1))

    def test_end_on_last_representable_month_accepted(
        self, validator: RegistrationValidator, plan
    ) -> None:
        validator.check_end_date(plan, datetime(9999, 9, 30))


@pytest.mark.unit
class TestCheckStartDate:
    """Tests for the past-date rule."""

    def test_four_hours_ago_rejected(
        self, validator: RegistrationValidator, now: datetime
    ) -> None:
        with pytest.raises(PastDateRejected):
            validator.check_start_date(now - timedelta(hours=4))

    def test_one_hour_ago_accepted(
        self, validator: RegistrationValidator, now: datetime
    ) -> None:
        validator.check_start_date(now - timedelta(hours=1))

    def test_exact_tolerance_accepted(
        self, validator: RegistrationValidator, now: datetime
    ) -> None:
        validator.check_start_date(now - timedelta(hours=3))

    def test_future_accepted(
        self, validator: RegistrationValidator, now: datetime
    ) -> None:
        validator.check_start_date(now + timedelta(days=30))

    def test_custom_tolerance(self, store: StateStore, now: datetime) -> None:
        strict = RegistrationValidator(store, tolerance=timedelta(0), clock=lambda: now)

        with pytest.raises(PastDateRejected):
            strict.check_start_date(now - timedelta(minutes=1))

    def test_default_clock_is_utc(self, store: StateStore) -> None:
        """Without a clock the current UTC time is used."""
        validator = RegistrationValidator(store)
        utc_now = datetime.now(timezone.utc).replace(tzinfo=None)

        validator.check_start_date(utc_now - timedelta(hours=2))
        with pytest.raises(PastDateRejected):
            validator.check_start_date(utc_now - timedelta(hours=4))


@pytest.mark.unit
class TestCheckUnique:
    """Tests for the one-registration-per-student rule."""

    def test_no_registration_passes(
        self, validator: RegistrationValidator, student
    ) -> None:
        validator.check_unique(student.id)

    def test_expired_registration_still_blocks(
        self, validator: RegistrationValidator, store: StateStore, student, plan
    ) -> None:
        """Any prior row blocks, active or not."""
        store.create_registration(
            student_id=student.id,
            plan_id=plan.id,
            start_date=datetime(2000, 1, 1),
            end_date=datetime(2000, 4, 1),
            price=plan.price * plan.duration,
        )

        with pytest.raises(DuplicateActiveRegistration):
            validator.check_unique(student.id)


@pytest.mark.unit
class TestCheckRegistration:
    """Tests for registration existence."""

    def test_missing_registration(
        self, validator: RegistrationValidator
    ) -> None:
        with pytest.raises(RegistrationNotFound) as exc_info:
            validator.check_registration(1)

        assert exc_info.value.message == "this registration does not exist"
