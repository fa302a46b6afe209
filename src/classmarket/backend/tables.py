"""SQLAlchemy tables for the local SQL backend.

Column names mirror the hosted backend's schema so rows from either backend
parse into the same records.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from classmarket.backend.models import Table


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all tables."""

    pass


class UserRow(Base):
    """User profile, keyed by the auth identity."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="student")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id!r}, email={self.email!r}, role={self.role!r})>"


class ClassRow(Base):
    """A class offering."""

    __tablename__ = "class"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    thumbnail_img: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    detail_img: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    detail_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    lecturer: Mapped[str] = mapped_column(String(255), nullable=False)
    students_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    students_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    manager_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("user.id"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<ClassRow(id={self.id!r}, title={self.title!r}, status={self.status!r})>"


class EnrollmentRow(Base):
    """Link between a student and a class they joined."""

    __tablename__ = "enrollment"
    __table_args__ = (
        UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    student_id: Mapped[str] = mapped_column(String(36), ForeignKey("user.id"), nullable=False)
    class_id: Mapped[str] = mapped_column(String(36), ForeignKey("class.id"), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    is_attended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<EnrollmentRow(id={self.id!r}, student_id={self.student_id!r}, "
            f"class_id={self.class_id!r})>"
        )


class AuthSessionRow(Base):
    """Access token issued to a user by the local backend."""

    __tablename__ = "auth_session"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("user.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


TABLES: dict[Table, type[Base]] = {
    Table.CLASS: ClassRow,
    Table.USER: UserRow,
    Table.ENROLLMENT: EnrollmentRow,
}
