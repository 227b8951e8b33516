"""Unit tests for RegistrationService."""

from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from gymreg.registrations import (
    DuplicateActiveRegistration,
    InvalidInput,
    PastDateRejected,
    PlanNotFound,
    RegistrationNotFound,
    RegistrationService,
    RegistrationValidator,
    StudentNotFound,
    Unauthorized,
)
from gymreg.state_store import StateStore


@pytest.fixture
def service(store: StateStore, job_queue: MagicMock, now: datetime) -> RegistrationService:
    """Service whose clock is fixed at 2024-01-09 12:00 UTC."""
    validator = RegistrationValidator(store, clock=lambda: now)
    return RegistrationService(store, job_queue, validator=validator)


def _payload(student, plan, start="2024-01-10") -> dict:
    return {"student_id": student.id, "plan_id": plan.id, "start_date": start}


@pytest.mark.unit
class TestStore:
    """Tests for RegistrationService.store."""

    def test_reference_scenario(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        """price 300 and end date 2024-04-10."""
        registration = service.store(admin.id, _payload(student, plan))

        assert registration.price == Decimal("300.00")
        assert registration.start_date == datetime(2024, 1, 10)
        assert registration.end_date == datetime(2024, 4, 10)
        assert registration.student.id == student.id
        assert registration.plan.id == plan.id

    def test_second_registration_for_student_rejected(
        self, service: RegistrationService, store: StateStore, admin, student, plan
    ) -> None:
        service.store(admin.id, _payload(student, plan))
        other_plan = store.create_plan(title="Gold", price=Decimal("150.00"), duration=1)

        with pytest.raises(DuplicateActiveRegistration):
            service.store(admin.id, _payload(student, other_plan, start="2025-06-01"))

    def test_start_four_hours_ago_rejected(
        self, service: RegistrationService, admin, student, plan, now: datetime
    ) -> None:
        start = (now - timedelta(hours=4)).isoformat()

        with pytest.raises(PastDateRejected):
            service.store(admin.id, _payload(student, plan, start=start))

    def test_start_one_hour_ago_accepted(
        self, service: RegistrationService, admin, student, plan, now: datetime
    ) -> None:
        start = now - timedelta(hours=1)

        registration = service.store(admin.id, _payload(student, plan, start=start.isoformat()))

        assert registration.start_date == start

    def test_shape_checked_before_gate(
        self, service: RegistrationService
    ) -> None:
        """Malformed input from an unknown caller reports InvalidInput."""
        with pytest.raises(InvalidInput):
            service.store(None, {"student_id": 1})

    def test_unknown_caller_rejected(
        self, service: RegistrationService, student, plan
    ) -> None:
        with pytest.raises(Unauthorized):
            service.store(999, _payload(student, plan))

    def test_missing_student(
        self, service: RegistrationService, admin, plan
    ) -> None:
        with pytest.raises(StudentNotFound):
            service.store(admin.id, {"student_id": 999, "plan_id": plan.id, "start_date": "2024-01-10"})

    def test_missing_plan(
        self, service: RegistrationService, admin, student
    ) -> None:
        with pytest.raises(PlanNotFound):
            service.store(admin.id, {"student_id": student.id, "plan_id": 999, "start_date": "2024-01-10"})

    def test_enqueues_notification(
        self, service: RegistrationService, job_queue: MagicMock, admin, student, plan
    ) -> None:
        service.store(admin.id, _payload(student, plan))

        job_queue.add.assert_called_once()

    def test_failed_validation_writes_nothing(
        self, service: RegistrationService, store: StateStore, job_queue: MagicMock, admin, student, plan
    ) -> None:
        with pytest.raises(PastDateRejected):
            service.store(admin.id, _payload(student, plan, start="2020-01-01"))

        assert store.list_registrations() == []
        job_queue.add.assert_not_called()

    def test_end_date_out_of_range_rejected(
        self, service: RegistrationService, store: StateStore, job_queue: MagicMock, admin, student, plan
    ) -> None:
        """A 3-month plan starting 9999-12-01 would end in year 10000."""
        with pytest.raises(InvalidInput):
            service.store(admin.id, _payload(student, plan, start="9999-12-01"))

        assert store.list_registrations() == []
        job_queue.add.assert_not_called()

    def test_queue_failure_still_returns_registration(
        self, service: RegistrationService, job_queue: MagicMock, store: StateStore, admin, student, plan
    ) -> None:
        job_queue.add.side_effect = RuntimeError("queue unavailable")

        registration = service.store(admin.id, _payload(student, plan))

        assert store.get_registration(registration.id) is not None


@pytest.mark.unit
class TestUpdate:
    """Tests for RegistrationService.update."""

    def test_update_to_past_date_succeeds(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        """No past-date rule on update."""
        created = service.store(admin.id, _payload(student, plan))

        updated = service.update(admin.id, created.id, _payload(student, plan, start="2020-01-31"))

        assert updated.start_date == datetime(2020, 1, 31)
        assert updated.end_date == datetime(2020, 4, 30)

    def test_update_skips_uniqueness(
        self, service: RegistrationService, store: StateStore, admin, student, plan
    ) -> None:
        """Moving a registration to a student who already has one is allowed."""
        first = service.store(admin.id, _payload(student, plan))
        other = store.create_student(name="Bruno", email="bruno@example.com")
        second = service.store(admin.id, _payload(other, plan))

        updated = service.update(admin.id, second.id, _payload(student, plan))

        assert updated.student_id == student.id
        assert store.get_registration(first.id).student_id == student.id

    def test_update_unknown_caller(
        self, service: RegistrationService, student, plan
    ) -> None:
        with pytest.raises(Unauthorized):
            service.update(None, 1, _payload(student, plan))

    def test_update_missing_registration(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        with pytest.raises(RegistrationNotFound):
            service.update(admin.id, 42, _payload(student, plan))

    def test_update_missing_plan_reported_before_registration(
        self, service: RegistrationService, admin, student
    ) -> None:
        with pytest.raises(PlanNotFound):
            service.update(admin.id, 42, {"student_id": student.id, "plan_id": 999, "start_date": "2024-01-10"})

    def test_update_end_date_out_of_range_rejected(
        self, service: RegistrationService, store: StateStore, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))

        with pytest.raises(InvalidInput):
            service.update(admin.id, created.id, _payload(student, plan, start="9999-12-01"))

        assert store.get_registration(created.id).start_date == datetime(2024, 1, 10)

    def test_update_does_not_notify(
        self, service: RegistrationService, job_queue: MagicMock, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))
        job_queue.reset_mock()

        service.update(admin.id, created.id, _payload(student, plan, start="2024-02-01"))

        job_queue.add.assert_not_called()


@pytest.mark.unit
class TestShowIndexDelete:
    """Tests for show, index and delete."""

    def test_show_missing_returns_none(
        self, service: RegistrationService
    ) -> None:
        assert service.show(1) is None

    def test_show_is_not_gated(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))

        assert service.show(created.id).plan.duration == 3

    def test_index_requires_admin(
        self, service: RegistrationService
    ) -> None:
        with pytest.raises(Unauthorized):
            service.index(None)

    def test_index_pages_of_ten(
        self, service: RegistrationService, store: StateStore, admin, plan
    ) -> None:
        for i in range(11):
            s = store.create_student(name=f"Student {i}", email=f"s{i}@example.com")
            service.store(admin.id, _payload(s, plan))

        assert len(service.index(admin.id)) == 10
        assert len(service.index(admin.id, page=2)) == 1
        assert service.index(admin.id, page=3) == []

    def test_delete_then_show_returns_none(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))

        service.delete(admin.id, created.id)

        assert service.show(created.id) is None

    def test_delete_missing(
        self, service: RegistrationService, admin
    ) -> None:
        with pytest.raises(RegistrationNotFound):
            service.delete(admin.id, 42)

    def test_delete_requires_admin(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))

        with pytest.raises(Unauthorized):
            service.delete(admin.id + 100, created.id)
        assert service.show(created.id) is not None

    def test_student_can_register_again_after_delete(
        self, service: RegistrationService, admin, student, plan
    ) -> None:
        created = service.store(admin.id, _payload(student, plan))
        service.delete(admin.id, created.id)

        again = service.store(admin.id, _payload(student, plan))

        assert again.id is not None
