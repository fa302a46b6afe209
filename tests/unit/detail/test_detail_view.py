"""Unit tests for the class detail view."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from classmarket.detail import (
    ClassDetailState,
    DetailAction,
    DetailPhase,
    available_actions,
    build_detail_view,
)
from classmarket.store import ClassRecord, User

SEOUL = ZoneInfo("Asia/Seoul")


def _record(**fields: object) -> ClassRecord:
    data: dict[str, object] = {
        "id": "c1",
        "title": "Python 101",
        "lecturer": "Kim",
        "price": 50000,
        "start_date": datetime(2025, 3, 1, 5, 0, tzinfo=UTC),
        "end_date": datetime(2025, 4, 1, 5, 0, tzinfo=UTC),
        "students_total": 12,
        "students_max": 30,
    }
    data.update(fields)
    return ClassRecord.model_validate(data)


def _state(
    record: ClassRecord | None = None, role: str | None = None, **fields: object
) -> ClassDetailState:
    principal = User(id="u1", email="u@example.com", name="U", role=role) if role else None
    return ClassDetailState(
        class_id="c1",
        phase=DetailPhase.READY,
        principal=principal,
        record=record if record is not None else _record(),
        **fields,  # type: ignore[arg-type]
    )


@pytest.mark.unit
class TestAvailableActions:
    """Tests for which buttons a viewer gets."""

    def test_anonymous_can_enroll(self) -> None:
        assert available_actions(_state()) == [DetailAction.ENROLL, DetailAction.LIKE]

    def test_enrolled_student_enters_classroom(self) -> None:
        actions = available_actions(_state(role="student", is_enrolled=True))

        assert actions == [DetailAction.ENTER_CLASSROOM, DetailAction.LIKE]

    def test_full_class_hides_enroll(self) -> None:
        actions = available_actions(_state(_record(students_total=30), role="student"))

        assert actions == [DetailAction.LIKE]

    def test_closed_class_hides_enroll(self) -> None:
        actions = available_actions(_state(_record(status="closed"), role="student"))

        assert actions == [DetailAction.LIKE]

    def test_admin_gets_close(self) -> None:
        assert available_actions(_state(role="admin")) == [DetailAction.CLOSE_CLASS]

    def test_admin_on_closed_class(self) -> None:
        assert available_actions(_state(_record(status="closed"), role="admin")) == []

    def test_zero_capacity_row_is_closed_for_admin(self) -> None:
        view = build_detail_view(
            _state(_record(students_total=3, students_max=0), role="admin"), SEOUL
        )

        assert view.is_closed
        assert view.actions == []
        assert view.capacity_label == "3 / 0"


@pytest.mark.unit
class TestBuildDetailView:
    """Tests for display fields."""

    def test_display_fields(self) -> None:
        view = build_detail_view(_state(), SEOUL)

        assert view.price_label == "50,000원"
        assert view.formatted_start == "2025. 03. 01. 오후 02:00"
        assert view.formatted_end == "2025. 04. 01. 오후 02:00"
        assert view.broadcast_date == "2025. 3. 1."
        assert view.capacity_label == "12 / 30"
        assert not view.is_closed

    def test_unlimited_capacity(self) -> None:
        view = build_detail_view(_state(_record(students_max=None)), SEOUL)

        assert view.capacity_label == "12 / 무제한"

    def test_missing_dates(self) -> None:
        view = build_detail_view(_state(_record(start_date=None, end_date=None)), SEOUL)

        assert view.formatted_start == "-"
        assert view.broadcast_date == "-"

    def test_related_periods(self) -> None:
        related = (_record(id="c2", title="Python 102"),)

        view = build_detail_view(_state(related=related), SEOUL)

        assert len(view.related) == 1
        assert view.related[0].id == "c2"
        assert view.related[0].period == "2025. 3. 1. ~ 2025. 4. 1."

    def test_not_ready_raises(self) -> None:
        with pytest.raises(ValueError):
            build_detail_view(ClassDetailState(class_id="c1"), SEOUL)
