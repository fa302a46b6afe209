"""Typed records for class, user and enrollment rows."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict


class Role(StrEnum):
    """User roles."""

    ADMIN = "admin"
    STUDENT = "student"


class ClassStatus(StrEnum):
    """Whether a class accepts enrollments, independent of its capacity."""

    OPEN = "open"
    CLOSED = "closed"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def _zero_if_null(value: Any) -> Any:
    return 0 if value is None else value


# Hosted rows may carry null counters; they read as zero
Count = Annotated[int, BeforeValidator(_zero_if_null)]
Score = Annotated[float, BeforeValidator(_zero_if_null)]


def _open_if_null(value: Any) -> Any:
    return ClassStatus.OPEN if value is None else value


class Record(BaseModel):
    """Base for rows read from the backend. Unknown columns are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class User(Record):
    """A user profile."""

    id: str
    email: str
    name: str
    phone_number: str | None = None
    role: str = Role.STUDENT.value
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class ClassRecord(Record):
    """A class offering."""

    id: str
    title: str
    price: Count = 0
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    rating: Score = 0.0
    likes: Count = 0
    thumbnail_img: str | None = None
    detail_img: str | None = None
    detail_text: str | None = None
    lecturer: str
    students_total: Count = 0
    students_max: int | None = None
    manager_id: str | None = None
    status: Annotated[ClassStatus, BeforeValidator(_open_if_null)] = ClassStatus.OPEN
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None

    @property
    def is_free(self) -> bool:
        return self.price == 0

    @property
    def is_closed(self) -> bool:
        """True when closed by status, or by the older zero-capacity marker."""
        return self.status == ClassStatus.CLOSED or self.students_max == 0

    @property
    def effective_status(self) -> ClassStatus:
        return ClassStatus.CLOSED if self.is_closed else self.status

    @property
    def is_full(self) -> bool:
        """True when a capacity is set and already reached."""
        return self.students_max is not None and self.students_total >= self.students_max


class Enrollment(Record):
    """A student's enrollment in a class."""

    id: str
    student_id: str
    class_id: str
    enrolled_at: UtcDatetime | None = None
    is_attended: bool = False
