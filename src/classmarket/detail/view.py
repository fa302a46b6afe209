"""Derive display fields for the class detail page."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from classmarket.catalog import (
    format_capacity,
    format_date,
    format_datetime,
    format_period,
    format_price,
)
from classmarket.detail.state import ClassDetailState, DetailPhase

if TYPE_CHECKING:
    from datetime import tzinfo


class DetailAction(StrEnum):
    """Buttons the viewer can use on the page."""

    ENROLL = "enroll"
    ENTER_CLASSROOM = "enter_classroom"
    CLOSE_CLASS = "close_class"
    LIKE = "like"


@dataclass
class RelatedClassView:
    id: str
    title: str
    thumbnail_img: str | None
    period: str


@dataclass
class ClassDetailView:
    """Serializable view of a loaded class detail page."""

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
    actions: list[DetailAction] = field(default_factory=list)
    related: list[RelatedClassView] = field(default_factory=list)


def available_actions(state: ClassDetailState) -> list[DetailAction]:
    """Which buttons to show: admins close, others enroll or enter."""
    record = state.record
    if record is None:
        return []
    if state.is_admin:
        return [] if record.is_closed else [DetailAction.CLOSE_CLASS]
    actions = [DetailAction.LIKE]
    if state.is_enrolled:
        actions.insert(0, DetailAction.ENTER_CLASSROOM)
    elif not record.is_closed and not record.is_full:
        actions.insert(0, DetailAction.ENROLL)
    return actions


def build_detail_view(state: ClassDetailState, tz: tzinfo) -> ClassDetailView:
    """Derive the page's display fields from a READY state.

    Raises:
        ValueError: If the class hasn't loaded
    """
    record = state.record
    if state.phase != DetailPhase.READY or record is None:
        raise ValueError(f"Class {state.class_id} is not loaded (phase={state.phase})")

    return ClassDetailView(
        id=record.id,
        title=record.title,
        lecturer=record.lecturer,
        price=record.price,
        price_label=format_price(record.price),
        thumbnail_img=record.thumbnail_img,
        detail_img=record.detail_img,
        detail_text=record.detail_text,
        formatted_start=format_datetime(record.start_date, tz),
        formatted_end=format_datetime(record.end_date, tz),
        broadcast_date=format_date(record.start_date, tz),
        capacity_label=format_capacity(record.students_total, record.students_max),
        students_total=record.students_total,
        students_max=record.students_max,
        is_closed=record.is_closed,
        is_admin=state.is_admin,
        is_enrolled=state.is_enrolled,
        actions=available_actions(state),
        related=[
            RelatedClassView(
                id=r.id,
                title=r.title,
                thumbnail_img=r.thumbnail_img,
                period=format_period(r.start_date, r.end_date, tz),
            )
            for r in state.related
        ],
    )
