"""Class detail - Page state, reducer, loader and derived view."""

from classmarket.detail.loader import CancelToken, ClassDetailLoader
from classmarket.detail.state import (
    ClassClosed,
    ClassDetailState,
    ClassLoaded,
    ClassLoadFailed,
    DetailEvent,
    DetailPhase,
    Enrolled,
    EnrollmentChecked,
    PrincipalResolved,
    RelatedLoaded,
    initial_state,
    reduce,
)
from classmarket.detail.view import (
    ClassDetailView,
    DetailAction,
    RelatedClassView,
    available_actions,
    build_detail_view,
)

__all__ = [
    "CancelToken",
    "ClassClosed",
    "ClassDetailLoader",
    "ClassDetailState",
    "ClassDetailView",
    "ClassLoadFailed",
    "ClassLoaded",
    "DetailAction",
    "DetailEvent",
    "DetailPhase",
    "Enrolled",
    "EnrollmentChecked",
    "PrincipalResolved",
    "RelatedClassView",
    "RelatedLoaded",
    "available_actions",
    "build_detail_view",
    "initial_state",
    "reduce",
]
