"""Pydantic models for REST API."""

from datetime import datetime, tzinfo
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from classmarket.catalog import format_price
from classmarket.detail import ClassDetailState, DetailPhase, build_detail_view

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Class models


class ClassSummaryResponse(BaseModel):
    """A class as shown on a card."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    lecturer: str
    price: int
    price_label: str
    thumbnail_img: str | None
    rating: float
    students_total: int
    start_date: datetime | None
    end_date: datetime | None
    status: str


def class_to_summary(record: Any) -> ClassSummaryResponse:
    """Convert a ClassRecord to ClassSummaryResponse."""
    return ClassSummaryResponse(
        id=record.id,
        title=record.title,
        lecturer=record.lecturer,
        price=record.price,
        price_label=format_price(record.price),
        thumbnail_img=record.thumbnail_img,
        rating=record.rating,
        students_total=record.students_total,
        start_date=record.start_date,
        end_date=record.end_date,
        status=record.effective_status.value,
    )


class HomeResponse(BaseModel):
    """Classes grouped into home page sections."""

    featured: ClassSummaryResponse | None
    upcoming_free: list[ClassSummaryResponse]
    premium: list[ClassSummaryResponse]
    ended: list[ClassSummaryResponse]


class ClassResponse(BaseModel):
    """Response model for a full class record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    price: int
    start_date: datetime | None
    end_date: datetime | None
    rating: float
    likes: int
    thumbnail_img: str | None
    detail_img: str | None
    detail_text: str | None
    lecturer: str
    students_total: int
    students_max: int | None
    manager_id: str | None
    status: str
    is_closed: bool


def class_to_response(record: Any) -> ClassResponse:
    """Convert a ClassRecord to ClassResponse."""
    response = ClassResponse.model_validate(record)
    return response.model_copy(update={"status": record.effective_status.value})


class RelatedClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    thumbnail_img: str | None
    period: str


class ClassDetailResponse(BaseModel):
    """Response model for the class detail page."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    lecturer: str
    price: int
    price_label: str
    thumbnail_img: str | None
    detail_img: str | None
    detail_text: str | None
    formatted_start: str
    formatted_end: str
    broadcast_date: str
    capacity_label: str
    students_total: int
    students_max: int | None
    is_closed: bool
    is_admin: bool
    is_enrolled: bool
    actions: list[str]
    related: list[RelatedClassResponse]


def detail_to_response(view: Any) -> ClassDetailResponse:
    """Convert a ClassDetailView to ClassDetailResponse."""
    return ClassDetailResponse.model_validate(view)


def state_to_detail_response(
    state: ClassDetailState, tz: tzinfo
) -> ClassDetailResponse | None:
    """Convert a ClassDetailState to ClassDetailResponse, or None unless READY."""
    if state.phase != DetailPhase.READY:
        return None
    return detail_to_response(build_detail_view(state, tz))


# Enrollment models


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    class_id: str
    enrolled_at: datetime | None
    is_attended: bool


class EnrollResultResponse(BaseModel):
    """Response model for an enroll action."""

    model_config = ConfigDict(from_attributes=True)

    enrollment: EnrollmentResponse
    created: bool
    students_total: int
    counter_updated: bool
    detail: ClassDetailResponse | None = None


def enroll_result_to_response(
    result: Any, detail: ClassDetailResponse | None = None
) -> EnrollResultResponse:
    """Convert an EnrollmentResult to EnrollResultResponse."""
    response = EnrollResultResponse.model_validate(result)
    return response.model_copy(update={"detail": detail})


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)


# Admin models


class AdminClassRowResponse(BaseModel):
    """Response model for a row of the admin class table."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    lecturer: str
    capacity: str
    period: str
    status: str


def admin_row_to_response(row: Any) -> AdminClassRowResponse:
    """Convert an AdminClassRow to AdminClassRowResponse."""
    return AdminClassRowResponse.model_validate(row)


class CloseClassResponse(BaseModel):
    """Response model for closing a class."""

    message: str
    data: ClassResponse
    detail: ClassDetailResponse | None = None
