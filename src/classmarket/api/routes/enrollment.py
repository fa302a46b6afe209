"""Enrollment endpoints."""

from fastapi import APIRouter, Response, status

from classmarket.api.dependencies import (
    AccessTokenDep,
    DetailLoaderDep,
    EnrollmentServiceDep,
    PrincipalDep,
    SettingsDep,
    StoreDep,
)
from classmarket.api.models import (
    APIResponse,
    EnrollmentResponse,
    EnrollResultResponse,
    enroll_result_to_response,
    enrollment_to_response,
    state_to_detail_response,
)
from classmarket.detail import Enrolled
from classmarket.enrollment import AuthenticationRequiredError

router = APIRouter(tags=["enrollment"])


@router.post(
    "/classes/{class_id}/enroll",
    response_model=APIResponse[EnrollResultResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    class_id: str,
    response: Response,
    principal: PrincipalDep,
    service: EnrollmentServiceDep,
    loader: DetailLoaderDep,
    settings: SettingsDep,
    access_token: AccessTokenDep,
) -> APIResponse[EnrollResultResponse]:
    """Enroll the caller in a class. Returns 200 if already enrolled.

    The response carries the class detail page as it stands after enrolling.
    """
    result = service.enroll(principal, class_id)
    if not result.created:
        response.status_code = status.HTTP_200_OK
    state = loader.refresh(
        class_id, access_token, [Enrolled(class_id, students_total=result.students_total)]
    )
    detail = state_to_detail_response(state, settings.tzinfo)
    return APIResponse(data=enroll_result_to_response(result, detail))


@router.get("/me/enrollments", response_model=APIResponse[list[EnrollmentResponse]])
def list_my_enrollments(
    principal: PrincipalDep, store: StoreDep
) -> APIResponse[list[EnrollmentResponse]]:
    """List the caller's enrollments."""
    if principal is None:
        raise AuthenticationRequiredError("Sign in to see your enrollments")
    enrollments = store.list_enrollments_for_student(principal.id)
    return APIResponse(data=[enrollment_to_response(e) for e in enrollments])
