"""Class listing and class detail endpoints."""

from fastapi import APIRouter

from classmarket.api.dependencies import (
    AccessTokenDep,
    ClockDep,
    DetailLoaderDep,
    SettingsDep,
    StoreDep,
)
from classmarket.api.models import (
    APIResponse,
    ClassDetailResponse,
    HomeResponse,
    class_to_summary,
    detail_to_response,
)
from classmarket.backend import BackendError, RecordNotFoundError
from classmarket.catalog import featured_class, section_classes
from classmarket.detail import DetailPhase, build_detail_view

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=APIResponse[HomeResponse])
def list_sectioned_classes(store: StoreDep, clock: ClockDep) -> APIResponse[HomeResponse]:
    """List classes grouped into upcoming free, premium and ended sections."""
    classes = store.list_classes()
    sections = section_classes(classes, clock())
    featured = featured_class(classes, sections)
    return APIResponse(
        data=HomeResponse(
            featured=class_to_summary(featured) if featured is not None else None,
            upcoming_free=[class_to_summary(c) for c in sections.upcoming_free],
            premium=[class_to_summary(c) for c in sections.premium],
            ended=[class_to_summary(c) for c in sections.ended],
        )
    )


@router.get("/{class_id}", response_model=APIResponse[ClassDetailResponse])
def get_class_detail(
    class_id: str,
    loader: DetailLoaderDep,
    settings: SettingsDep,
    access_token: AccessTokenDep,
) -> APIResponse[ClassDetailResponse]:
    """Get the class detail page for the caller."""
    state = loader.load(class_id, access_token)
    if state.phase == DetailPhase.NOT_FOUND:
        raise RecordNotFoundError(state.error or f"Class with id '{class_id}' not found")
    if state.phase == DetailPhase.FAILED:
        raise BackendError(state.error or f"Class '{class_id}' could not be loaded")
    view = build_detail_view(state, settings.tzinfo)
    return APIResponse(data=detail_to_response(view))
