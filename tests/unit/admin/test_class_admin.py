"""Unit tests for ClassAdmin."""

from collections.abc import Callable
from datetime import UTC, datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from classmarket.admin import ClassAdmin, CloseMode, PermissionDeniedError, require_admin
from classmarket.backend import BackendUnavailableError, RecordNotFoundError
from classmarket.store import ClassRecord, ClassStatus, MarketStore, User

SEOUL = ZoneInfo("Asia/Seoul")


@pytest.fixture
def admin_service(store: MarketStore) -> ClassAdmin:
    return ClassAdmin(store, tz=SEOUL)


@pytest.mark.unit
class TestRequireAdmin:
    def test_admin_passes(self) -> None:
        user = User(id="a1", email="a@example.com", name="A", role="admin")

        assert require_admin(user, "do things") is user

    @pytest.mark.parametrize("role", ["student", "lecturer"])
    def test_other_roles_denied(self, role: str) -> None:
        user = User(id="u1", email="u@example.com", name="U", role=role)

        with pytest.raises(PermissionDeniedError):
            require_admin(user, "do things")

    def test_anonymous_denied(self) -> None:
        with pytest.raises(PermissionDeniedError):
            require_admin(None, "do things")


@pytest.mark.unit
class TestCloseClass:
    """Tests for closing a class."""

    def test_admin_closes_class(
        self,
        admin_service: ClassAdmin,
        store: MarketStore,
        make_user: Callable[..., User],
        make_class: Callable[..., ClassRecord],
    ) -> None:
        record = make_class(students_total=4, students_max=30)

        closed = admin_service.close_class(make_user(role="admin"), record.id)

        assert closed.status == ClassStatus.CLOSED
        assert closed.students_max == 30
        assert closed.students_total == 4
        assert store.get_class(record.id).is_closed

    def test_student_cannot_close(
        self,
        admin_service: ClassAdmin,
        store: MarketStore,
        make_user: Callable[..., User],
        make_class: Callable[..., ClassRecord],
    ) -> None:
        record = make_class(students_max=30)

        with pytest.raises(PermissionDeniedError):
            admin_service.close_class(make_user(), record.id)

        stored = store.get_class(record.id)
        assert stored.status == ClassStatus.OPEN
        assert stored.students_max == 30

    def test_anonymous_writes_nothing(self) -> None:
        store = MagicMock()

        with pytest.raises(PermissionDeniedError):
            ClassAdmin(store, tz=SEOUL).close_class(None, "c1")

        store.set_class_status.assert_not_called()

    def test_missing_class(
        self, admin_service: ClassAdmin, make_user: Callable[..., User]
    ) -> None:
        with pytest.raises(RecordNotFoundError):
            admin_service.close_class(make_user(role="admin"), "missing")

    def test_backend_failure_propagates(self) -> None:
        store = MagicMock()
        store.set_class_status.side_effect = BackendUnavailableError("down")
        admin = User(id="a1", email="a@example.com", name="A", role="admin")

        with pytest.raises(BackendUnavailableError):
            ClassAdmin(store, tz=SEOUL).close_class(admin, "c1")


@pytest.mark.unit
class TestSentinelCloseMode:
    """Tests for closing by zeroing capacity."""

    def test_zeroes_capacity_without_status(
        self,
        store: MarketStore,
        make_user: Callable[..., User],
        make_class: Callable[..., ClassRecord],
    ) -> None:
        record = make_class(students_total=4, students_max=30)
        admin = ClassAdmin(store, tz=SEOUL, close_mode=CloseMode.SENTINEL)

        closed = admin.close_class(make_user(role="admin"), record.id)

        assert closed.students_max == 0
        assert closed.students_total == 4
        assert closed.status == ClassStatus.OPEN
        assert closed.is_closed

    def test_never_writes_status(self) -> None:
        store = MagicMock()
        admin = User(id="a1", email="a@example.com", name="A", role="admin")

        ClassAdmin(store, tz=SEOUL, close_mode=CloseMode.SENTINEL).close_class(admin, "c1")

        store.set_students_max.assert_called_once_with("c1", 0)
        store.set_class_status.assert_not_called()

    def test_status_mode_leaves_capacity(self) -> None:
        store = MagicMock()
        admin = User(id="a1", email="a@example.com", name="A", role="admin")

        ClassAdmin(store, tz=SEOUL).close_class(admin, "c1")

        store.set_class_status.assert_called_once_with("c1", ClassStatus.CLOSED)
        store.set_students_max.assert_not_called()

    def test_zero_capacity_row_listed_as_closed(
        self,
        admin_service: ClassAdmin,
        make_user: Callable[..., User],
        make_class: Callable[..., ClassRecord],
    ) -> None:
        make_class(students_total=2, students_max=0)

        rows = admin_service.list_classes(make_user(role="admin"))

        assert rows[0].status == "closed"


@pytest.mark.unit
class TestListClasses:
    def test_rows(
        self,
        admin_service: ClassAdmin,
        make_user: Callable[..., User],
        make_class: Callable[..., ClassRecord],
    ) -> None:
        make_class(
            title="Python 101",
            students_total=12,
            students_max=None,
            start_date=datetime(2025, 3, 1, 5, 0, tzinfo=UTC),
            end_date=datetime(2025, 4, 1, 5, 0, tzinfo=UTC),
        )

        rows = admin_service.list_classes(make_user(role="admin"))

        assert len(rows) == 1
        assert rows[0].title == "Python 101"
        assert rows[0].capacity == "12 / 무제한"
        assert rows[0].period == "2025. 3. 1. ~ 2025. 4. 1."
        assert rows[0].status == "open"

    def test_student_denied(
        self, admin_service: ClassAdmin, make_user: Callable[..., User]
    ) -> None:
        with pytest.raises(PermissionDeniedError):
            admin_service.list_classes(make_user())
