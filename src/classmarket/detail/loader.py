"""ClassDetailLoader - Runs the class detail page's fetches."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from classmarket.backend import BackendError, RecordNotFoundError
from classmarket.detail.state import (
    ClassDetailState,
    ClassLoaded,
    ClassLoadFailed,
    DetailEvent,
    EnrollmentChecked,
    PrincipalResolved,
    RelatedLoaded,
    initial_state,
    reduce,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from classmarket.store import ClassRecord, MarketStore, User

logger = logging.getLogger(__name__)


class CancelToken:
    """Signals that the view a load belongs to has gone away."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class LoadCancelled(Exception):
    """Raised internally to stop the fetch graph once cancelled."""


class ClassDetailLoader:
    """Builds a ClassDetailState from four backend reads.

    The reads form a small graph:

    - A: the viewer (principal)
    - B: the class record
    - C: related classes, after B
    - D: the viewer's enrollment, after A and B

    They run in that order. Each result is applied through ``reduce`` so the
    loader and interactive updates share one state transition function.
    """

    def __init__(self, store: MarketStore) -> None:
        """Initialize the loader.

        Args:
            store: Data access facade.
        """
        self.store = store

    def load(
        self,
        class_id: str,
        access_token: str | None = None,
        cancel: CancelToken | None = None,
    ) -> ClassDetailState:
        """Load the detail page state for a class.

        Args:
            class_id: The class to show.
            access_token: The viewer's access token, if signed in.
            cancel: Token checked before each result is applied; once
                cancelled the remaining steps are skipped.

        Returns:
            The state reached. Phase is READY, NOT_FOUND or FAILED, or
            LOADING if cancelled before the class arrived.
        """
        state = initial_state(class_id)

        def apply(event: DetailEvent) -> None:
            nonlocal state
            if cancel is not None and cancel.cancelled:
                raise LoadCancelled
            state = reduce(state, event)

        try:
            principal = self._fetch_principal(access_token)
            apply(PrincipalResolved(class_id, principal))

            record = self._fetch_class(class_id, apply)
            if record is None:
                return state

            apply(RelatedLoaded(class_id, self._fetch_related(record)))

            if principal is not None:
                apply(EnrollmentChecked(class_id, self._check_enrollment(principal, class_id)))
        except LoadCancelled:
            logger.debug("Load of class %s cancelled at phase %s", class_id, state.phase)

        return state

    def refresh(
        self,
        class_id: str,
        access_token: str | None = None,
        events: Sequence[DetailEvent] = (),
    ) -> ClassDetailState:
        """Reload the page after a mutation and apply the mutation's events.

        The events carry what the mutation itself reported (the counter
        returned by an enroll, the record returned by a close) and are
        applied on top of the reloaded state.
        """
        state = self.load(class_id, access_token)
        for event in events:
            state = reduce(state, event)
        return state

    def _fetch_principal(self, access_token: str | None) -> User | None:
        try:
            return self.store.get_principal(access_token)
        except BackendError as e:
            logger.warning("Could not resolve viewer, treating as anonymous: %s", e)
            return None

    def _fetch_class(
        self, class_id: str, apply: Callable[[DetailEvent], None]
    ) -> ClassRecord | None:
        try:
            record = self.store.get_class(class_id)
        except RecordNotFoundError as e:
            apply(ClassLoadFailed(class_id, not_found=True, message=str(e)))
            return None
        except BackendError as e:
            logger.error("Failed to load class %s: %s", class_id, e)
            apply(ClassLoadFailed(class_id, not_found=False, message=str(e)))
            return None
        apply(ClassLoaded(class_id, record))
        return record

    def _fetch_related(self, record: ClassRecord) -> tuple[ClassRecord, ...]:
        try:
            return tuple(self.store.list_related_classes(record))
        except BackendError as e:
            logger.warning("Failed to load related classes for %s: %s", record.id, e)
            return ()

    def _check_enrollment(self, principal: User, class_id: str) -> bool:
        try:
            return self.store.find_enrollment(principal.id, class_id) is not None
        except BackendError as e:
            logger.warning(
                "Enrollment lookup failed for user %s, class %s: %s", principal.id, class_id, e
            )
            return False

