from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_admin
from backend.database import get_db
from backend.routes.schemas import ERROR_RESPONSES, ApiModel, EnrollmentResponse, PageResponse
from backend.services import enrollments
from backend.services.pagination import parse_paging
from backend.services.validation import parse_id

router = APIRouter(tags=['enrollments'], dependencies=[Depends(require_admin)], responses=ERROR_RESPONSES)


class CreateEnrollmentRequest(ApiModel):
    student_id: Any = None
    course_id: Any = None


@router.get('', response_model=PageResponse[EnrollmentResponse])
def list_enrollments(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias='pageSize'),
    db: Session = Depends(get_db),
):
    result = enrollments.list_enrollments(db, parse_paging(page, page_size))
    return PageResponse[EnrollmentResponse](
        items=[EnrollmentResponse.model_validate(enrollment) for enrollment in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.get('/{enrollment_id}', response_model=EnrollmentResponse)
def get_enrollment(enrollment_id: str, db: Session = Depends(get_db)):
    enrollment = enrollments.get_enrollment(db, parse_id(enrollment_id, not_found='Enrollment not found'))
    return EnrollmentResponse.model_validate(enrollment)


@router.post('', response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def create_enrollment(data: CreateEnrollmentRequest, db: Session = Depends(get_db)):
    student_id = parse_id(data.student_id, 'studentId is required', 'Student not found')
    course_id = parse_id(data.course_id, 'courseId is required', 'Course not found')
    return EnrollmentResponse.model_validate(enrollments.create_enrollment(db, student_id, course_id))


@router.delete('/{enrollment_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_enrollment(enrollment_id: str, db: Session = Depends(get_db)):
    enrollments.delete_enrollment(db, parse_id(enrollment_id, not_found='Enrollment not found'))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
