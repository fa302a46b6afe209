"""Class detail page state and the reducer that advances it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from classmarket.store import ClassRecord, ClassStatus, User


class DetailPhase(StrEnum):
    """Loading phase of the class detail page."""

    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ClassDetailState:
    """Everything the class detail page shows.

    Attributes:
        class_id: The class the page is about.
        phase: Where loading stands.
        principal: The viewer, or None when anonymous.
        record: The class, once loaded.
        related: Other classes by the same lecturer.
        is_enrolled: Whether the viewer has an enrollment row for the class.
        error: Message for NOT_FOUND / FAILED.
    """

    class_id: str
    phase: DetailPhase = DetailPhase.LOADING
    principal: User | None = None
    record: ClassRecord | None = None
    related: tuple[ClassRecord, ...] = ()
    is_enrolled: bool = False
    error: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.principal is not None and self.principal.is_admin


# --- Events ---


@dataclass(frozen=True)
class DetailEvent:
    """Base for events applied to a ClassDetailState."""

    class_id: str


@dataclass(frozen=True)
class PrincipalResolved(DetailEvent):
    principal: User | None


@dataclass(frozen=True)
class ClassLoaded(DetailEvent):
    record: ClassRecord


@dataclass(frozen=True)
class ClassLoadFailed(DetailEvent):
    not_found: bool
    message: str


@dataclass(frozen=True)
class RelatedLoaded(DetailEvent):
    related: tuple[ClassRecord, ...]


@dataclass(frozen=True)
class EnrollmentChecked(DetailEvent):
    is_enrolled: bool


@dataclass(frozen=True)
class Enrolled(DetailEvent):
    students_total: int


@dataclass(frozen=True)
class ClassClosed(DetailEvent):
    record: ClassRecord | None = None


def initial_state(class_id: str) -> ClassDetailState:
    return ClassDetailState(class_id=class_id)


def reduce(state: ClassDetailState, event: DetailEvent) -> ClassDetailState:  # noqa: PLR0911
    """Return the state after applying an event.

    Pure: never mutates its arguments. Events addressed to another class are
    stale responses and leave the state unchanged.
    """
    if event.class_id != state.class_id:
        return state

    if isinstance(event, PrincipalResolved):
        return replace(state, principal=event.principal)

    if isinstance(event, ClassLoaded):
        return replace(state, record=event.record, phase=DetailPhase.READY, error=None)

    if isinstance(event, ClassLoadFailed):
        phase = DetailPhase.NOT_FOUND if event.not_found else DetailPhase.FAILED
        return replace(state, phase=phase, error=event.message)

    if isinstance(event, RelatedLoaded):
        return replace(state, related=event.related)

    if isinstance(event, EnrollmentChecked):
        return replace(state, is_enrolled=event.is_enrolled)

    if isinstance(event, Enrolled):
        record = state.record
        if record is not None:
            record = record.model_copy(update={"students_total": event.students_total})
        return replace(state, is_enrolled=True, record=record)

    if isinstance(event, ClassClosed):
        record = event.record
        if record is None and state.record is not None:
            record = state.record.model_copy(update={"status": ClassStatus.CLOSED})
        return replace(state, record=record)

    raise TypeError(f"Unknown detail event: {type(event).__name__}")
