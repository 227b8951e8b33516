"""SQLAlchemy models for State Store."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """User model - an administrator allowed to manage registrations."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r})>"


class Student(Base):
    """Student model - a gym member who can be enrolled in a plan."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    height: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    registrations: Mapped[list[Registration]] = relationship(
        "Registration", back_populates="student"
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, name={self.name!r}, email={self.email!r})>"


class Plan(Base):
    """Plan model - monthly price and duration template for registrations."""

    __tablename__ = "plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    registrations: Mapped[list[Registration]] = relationship(
        "Registration", back_populates="plan"
    )

    def __repr__(self) -> str:
        return f"<Plan(id={self.id!r}, title={self.title!r}, duration={self.duration!r})>"


class Registration(Base):
    """Registration model - a student's enrollment in a plan.

    end_date and price are derived from the plan when the row is written and
    are never recomputed afterwards. student_id is deliberately not unique.
    """

    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id"), nullable=False)
    plan_id: Mapped[int] = mapped_column(Integer, ForeignKey("plans.id"), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    student: Mapped[Student] = relationship("Student", back_populates="registrations")
    plan: Mapped[Plan] = relationship("Plan", back_populates="registrations")

    def __init__(
        self,
        student_id: int,
        plan_id: int,
        start_date: datetime,
        end_date: datetime,
        price: Decimal,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.student_id = student_id
        self.plan_id = plan_id
        self.start_date = start_date
        self.end_date = end_date
        self.price = price

    def is_active(self, now: datetime | None = None) -> bool:
        """Whether the validity window covers the given moment (naive UTC)."""
        if now is None:
            now = utcnow()
        return self.start_date <= now < self.end_date

    @property
    def active(self) -> bool:
        """Display flag: the registration covers the current time."""
        return self.is_active()

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id!r}, student_id={self.student_id!r}, "
            f"plan_id={self.plan_id!r}, end_date={self.end_date!r})>"
        )
