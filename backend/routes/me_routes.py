from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from backend.auth.dependencies import Principal, require_student
from backend.database import get_db
from backend.models.student import Student
from backend.models.user import User
from backend.routes.schemas import ERROR_RESPONSES, ApiModel, CourseResponse, EnrollmentResponse
from backend.services import self_service, students
from backend.services.validation import parse_id

router = APIRouter(tags=['me'], responses=ERROR_RESPONSES)


class ProfilePayload(ApiModel):
    first_name: Any = None
    last_name: Any = None
    birth_date: Any = None


class ProfileResponse(ApiModel):
    id: int
    email: str
    role: str
    first_name: str
    last_name: str
    birth_date: date


class MyCoursesResponse(ApiModel):
    items: list[CourseResponse]


class SelfEnrollRequest(ApiModel):
    course_id: Any = None


def _profile_response(user: User, student: Student) -> ProfileResponse:
    return ProfileResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        first_name=student.first_name,
        last_name=student.last_name,
        birth_date=student.birth_date,
    )


@router.get('', response_model=ProfileResponse)
def get_my_profile(principal: Principal = Depends(require_student), db: Session = Depends(get_db)):
    return _profile_response(*self_service.get_profile(db, principal.id))


@router.put('', response_model=ProfileResponse)
def update_my_profile(
    data: ProfilePayload,
    principal: Principal = Depends(require_student),
    db: Session = Depends(get_db),
):
    fields = students.parse_student_fields(data.first_name, data.last_name, data.birth_date)
    return _profile_response(*self_service.update_profile(db, principal.id, fields))


@router.get('/courses', response_model=MyCoursesResponse)
def list_my_courses(principal: Principal = Depends(require_student), db: Session = Depends(get_db)):
    courses = self_service.list_own_courses(db, principal.id)
    return MyCoursesResponse(items=[CourseResponse.model_validate(course) for course in courses])


@router.post('/enroll', response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def enroll_myself(
    data: SelfEnrollRequest,
    principal: Principal = Depends(require_student),
    db: Session = Depends(get_db),
):
    course_id = parse_id(data.course_id, 'courseId is required', 'Course not found')
    return EnrollmentResponse.model_validate(self_service.enroll_self(db, principal.id, course_id))


@router.delete('/enroll/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def drop_my_course(
    course_id: str,
    principal: Principal = Depends(require_student),
    db: Session = Depends(get_db),
):
    self_service.drop_self(db, principal.id, parse_id(course_id, not_found='Enrollment not found'))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
