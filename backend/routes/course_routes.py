from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_admin
from backend.database import get_db
from backend.routes.schemas import ERROR_RESPONSES, ApiModel, CourseResponse, PageResponse, StudentSummary
from backend.services import courses
from backend.services.pagination import parse_paging
from backend.services.validation import parse_id

router = APIRouter(tags=['courses'], dependencies=[Depends(require_admin)], responses=ERROR_RESPONSES)


class CoursePayload(ApiModel):
    name: Any = None


class CourseEnrollmentResponse(ApiModel):
    id: int
    student_id: int
    created_at: datetime
    student: StudentSummary


class CourseDetailResponse(CourseResponse):
    enrollments: list[CourseEnrollmentResponse]


@router.get('', response_model=PageResponse[CourseResponse])
def list_courses(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias='pageSize'),
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    result = courses.list_courses(db, parse_paging(page, page_size), search=q)
    return PageResponse[CourseResponse](
        items=[CourseResponse.model_validate(course) for course in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.get('/{course_id}', response_model=CourseDetailResponse)
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = courses.get_course(db, parse_id(course_id, not_found='Course not found'))
    return CourseDetailResponse.model_validate(course)


@router.post('', response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(data: CoursePayload, db: Session = Depends(get_db)):
    return CourseResponse.model_validate(courses.create_course(db, courses.parse_course_name(data.name)))


@router.put('/{course_id}', response_model=CourseResponse)
def update_course(course_id: str, data: CoursePayload, db: Session = Depends(get_db)):
    parsed_id = parse_id(course_id, not_found='Course not found')
    course = courses.update_course(db, parsed_id, courses.parse_course_name(data.name))
    return CourseResponse.model_validate(course)


@router.delete('/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: str, db: Session = Depends(get_db)):
    courses.delete_course(db, parse_id(course_id, not_found='Course not found'))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
