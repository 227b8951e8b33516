"""StateStore - Main API for State Store operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from gymreg.state_store.database import Database
from gymreg.state_store.exceptions import RecordExistsError, RecordNotFoundError
from gymreg.state_store.models import (
    Plan,
    Registration,
    Student,
    User,
)

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

# Registrations always travel with their student and plan so callers can
# render them after the session is closed
_WITH_RELATIONS = (joinedload(Registration.student), joinedload(Registration.plan))


class StateStore:
    """Main API for State Store operations.

    Provides lookups and CRUD for Users, Students, Plans and Registrations.
    Lookups by ID return None for missing rows; deciding what a missing row
    means is left to the caller.
    """

    def __init__(self, db_path: str = "gymreg.db") -> None:
        """Initialize State Store.

        Creates database and tables if they don't exist.

        Args:
            db_path: SQLite file path, ":memory:", or an SQLAlchemy URL
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def _add(self, record: User | Student | Plan) -> User | Student | Plan:
        session = self._db.get_session()
        try:
            session.add(record)
            session.commit()
            session.refresh(record)
            return record
        except IntegrityError as e:
            session.rollback()
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise RecordExistsError(
                    f"{type(record).__name__} with email '{getattr(record, 'email', '')}' "
                    "already exists"
                ) from e
            raise
        finally:
            session.close()

    # --- User Operations ---

    def create_user(self, name: str, email: str) -> User:
        """Create an administrator.

        Raises:
            RecordExistsError: If a user with the same email exists
        """
        return self._add(User(name=name, email=email))  # type: ignore[return-value]

    def get_user(self, user_id: int) -> User | None:
        """Get user by ID, or None."""
        session = self._db.get_session()
        try:
            return session.get(User, user_id)
        finally:
            session.close()

    # --- Student Operations ---

    def create_student(
        self,
        name: str,
        email: str,
        age: int | None = None,
        weight: Decimal | None = None,
        height: Decimal | None = None,
    ) -> Student:
        """Create a student.

        Raises:
            RecordExistsError: If a student with the same email exists
        """
        student = Student(name=name, email=email, age=age, weight=weight, height=height)
        return self._add(student)  # type: ignore[return-value]

    def get_student(self, student_id: int) -> Student | None:
        """Get student by ID, or None."""
        session = self._db.get_session()
        try:
            return session.get(Student, student_id)
        finally:
            session.close()

    # --- Plan Operations ---

    def create_plan(self, title: str, price: Decimal, duration: int) -> Plan:
        """Create a plan.

        Args:
            title: Display name, e.g. "Gold"
            price: Price per month
            duration: Length in months
        """
        plan = Plan(title=title, price=price, duration=duration)
        return self._add(plan)  # type: ignore[return-value]

    def get_plan(self, plan_id: int) -> Plan | None:
        """Get plan by ID, or None."""
        session = self._db.get_session()
        try:
            return session.get(Plan, plan_id)
        finally:
            session.close()

    # --- Registration Operations ---

    def create_registration(
        self,
        student_id: int,
        plan_id: int,
        start_date: datetime,
        end_date: datetime,
        price: Decimal,
    ) -> Registration:
        """Insert a registration with already computed end date and price.

        Returns:
            Created Registration with student and plan loaded
        """
        session = self._db.get_session()
        try:
            registration = Registration(
                student_id=student_id,
                plan_id=plan_id,
                start_date=start_date,
                end_date=end_date,
                price=price,
            )
            session.add(registration)
            session.commit()
            return self._load_registration(session, registration.id)  # type: ignore[return-value]
        finally:
            session.close()

    def get_registration(self, registration_id: int) -> Registration | None:
        """Get registration by ID with student and plan loaded, or None."""
        session = self._db.get_session()
        try:
            return self._load_registration(session, registration_id)
        finally:
            session.close()

    def find_registration_by_student(self, student_id: int) -> Registration | None:
        """Get any registration of a student, regardless of its dates.

        Returns:
            The first matching registration, or None
        """
        session = self._db.get_session()
        try:
            stmt = (
                select(Registration)
                .where(Registration.student_id == student_id)
                .order_by(Registration.id)
                .limit(1)
            )
            return session.execute(stmt).scalar_one_or_none()
        finally:
            session.close()

    def list_registrations(self, limit: int = 10, offset: int = 0) -> list[Registration]:
        """List registrations.

        Args:
            limit: Max results to return
            offset: Offset for pagination

        Returns:
            Registrations ordered by ID, student and plan loaded
        """
        session = self._db.get_session()
        try:
            stmt = (
                select(Registration)
                .options(*_WITH_RELATIONS)
                .order_by(Registration.id)
                .limit(limit)
                .offset(offset)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def update_registration(
        self,
        registration_id: int,
        student_id: int,
        plan_id: int,
        start_date: datetime,
        end_date: datetime,
        price: Decimal,
    ) -> Registration:
        """Replace every writable field of a registration.

        Returns:
            The updated Registration with student and plan loaded

        Raises:
            RecordNotFoundError: If registration doesn't exist
        """
        session = self._db.get_session()
        try:
            registration = session.get(Registration, registration_id)
            if registration is None:
                raise RecordNotFoundError(f"Registration with id '{registration_id}' not found")

            registration.student_id = student_id
            registration.plan_id = plan_id
            registration.start_date = start_date
            registration.end_date = end_date
            registration.price = price

            session.commit()
            return self._load_registration(session, registration_id)  # type: ignore[return-value]
        finally:
            session.close()

    def delete_registration(self, registration_id: int) -> None:
        """Delete a registration.

        Raises:
            RecordNotFoundError: If registration doesn't exist
        """
        session = self._db.get_session()
        try:
            registration = session.get(Registration, registration_id)
            if registration is None:
                raise RecordNotFoundError(f"Registration with id '{registration_id}' not found")

            session.delete(registration)
            session.commit()
        finally:
            session.close()

    @staticmethod
    def _load_registration(session: Session, registration_id: int) -> Registration | None:
        stmt = (
            select(Registration)
            .options(*_WITH_RELATIONS)
            .where(Registration.id == registration_id)
            .execution_options(populate_existing=True)
        )
        return session.execute(stmt).scalar_one_or_none()
