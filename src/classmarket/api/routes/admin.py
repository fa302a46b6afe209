"""Admin endpoints."""

from fastapi import APIRouter

from classmarket.api.dependencies import (
    AccessTokenDep,
    ClassAdminDep,
    DetailLoaderDep,
    PrincipalDep,
    SettingsDep,
)
from classmarket.api.models import (
    AdminClassRowResponse,
    APIResponse,
    CloseClassResponse,
    admin_row_to_response,
    class_to_response,
    state_to_detail_response,
)
from classmarket.detail import ClassClosed

router = APIRouter(tags=["admin"])


@router.get("/admin/classes", response_model=APIResponse[list[AdminClassRowResponse]])
def list_admin_classes(
    principal: PrincipalDep, admin: ClassAdminDep
) -> APIResponse[list[AdminClassRowResponse]]:
    """List all classes for the admin class table."""
    rows = admin.list_classes(principal)
    return APIResponse(data=[admin_row_to_response(r) for r in rows])


@router.post("/classes/{class_id}/close", response_model=APIResponse[CloseClassResponse])
def close_class(
    class_id: str,
    principal: PrincipalDep,
    admin: ClassAdminDep,
    loader: DetailLoaderDep,
    settings: SettingsDep,
    access_token: AccessTokenDep,
) -> APIResponse[CloseClassResponse]:
    """Close a class to new enrollments (admin only).

    Returns the closed record and the class detail page reloaded after closing.
    """
    record = admin.close_class(principal, class_id)
    state = loader.refresh(class_id, access_token, [ClassClosed(class_id, record)])
    return APIResponse(
        data=CloseClassResponse(
            message="Class closed",
            data=class_to_response(record),
            detail=state_to_detail_response(state, settings.tzinfo),
        )
    )
