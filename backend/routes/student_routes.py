from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_admin
from backend.database import get_db
from backend.routes.schemas import ERROR_RESPONSES, ApiModel, CourseResponse, PageResponse, StudentResponse
from backend.services import students
from backend.services.pagination import parse_paging
from backend.services.validation import parse_id

router = APIRouter(tags=['students'], dependencies=[Depends(require_admin)], responses=ERROR_RESPONSES)


class StudentPayload(ApiModel):
    first_name: Any = None
    last_name: Any = None
    birth_date: Any = None


class StudentEnrollmentResponse(ApiModel):
    id: int
    course_id: int
    created_at: datetime
    course: CourseResponse


class StudentDetailResponse(StudentResponse):
    enrollments: list[StudentEnrollmentResponse]


def _fields(data: StudentPayload) -> students.StudentFields:
    return students.parse_student_fields(data.first_name, data.last_name, data.birth_date)


@router.get('', response_model=PageResponse[StudentResponse])
def list_students(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias='pageSize'),
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    result = students.list_students(db, parse_paging(page, page_size), search=q)
    return PageResponse[StudentResponse](
        items=[StudentResponse.model_validate(student) for student in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.get('/{student_id}', response_model=StudentDetailResponse)
def get_student(student_id: str, db: Session = Depends(get_db)):
    student = students.get_student(db, parse_id(student_id, not_found='Student not found'))
    return StudentDetailResponse.model_validate(student)


@router.post('', response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(data: StudentPayload, db: Session = Depends(get_db)):
    return StudentResponse.model_validate(students.create_student(db, _fields(data)))


@router.put('/{student_id}', response_model=StudentResponse)
def update_student(student_id: str, data: StudentPayload, db: Session = Depends(get_db)):
    parsed_id = parse_id(student_id, not_found='Student not found')
    return StudentResponse.model_validate(students.update_student(db, parsed_id, _fields(data)))


@router.delete('/{student_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, db: Session = Depends(get_db)):
    students.delete_student(db, parse_id(student_id, not_found='Student not found'))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
