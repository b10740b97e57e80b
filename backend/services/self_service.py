"""Operations a student performs on their own profile and enrollments."""

import logging

from sqlalchemy.orm import Session

from backend.core.errors import ConflictError, NotFoundError
from backend.models.course import Course
from backend.models.enrollment import Enrollment
from backend.models.student import Student
from backend.models.user import User
from backend.services import enrollments
from backend.services.students import StudentFields

logger = logging.getLogger(__name__)

SELF_ALREADY_ENROLLED_MESSAGE = 'You are already enrolled in this course.'
PROFILE_NOT_FOUND_MESSAGE = 'Student profile not found'


def get_own_student(db: Session, account_id: int) -> Student:
    student = db.query(Student).filter(Student.user_id == account_id).first()
    if student is None:
        raise NotFoundError(PROFILE_NOT_FOUND_MESSAGE)
    return student


def get_profile(db: Session, account_id: int) -> tuple[User, Student]:
    user = db.get(User, account_id)
    if user is None or user.student is None:
        raise NotFoundError(PROFILE_NOT_FOUND_MESSAGE)
    return user, user.student


def update_profile(db: Session, account_id: int, fields: StudentFields) -> tuple[User, Student]:
    user, student = get_profile(db, account_id)
    student.first_name = fields.first_name
    student.last_name = fields.last_name
    student.birth_date = fields.birth_date
    db.commit()
    db.refresh(student)
    return user, student


def list_own_courses(db: Session, account_id: int) -> list[Course]:
    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .join(Student, Student.id == Enrollment.student_id)
        .filter(Student.user_id == account_id)
        .order_by(Enrollment.created_at.desc(), Enrollment.id.desc())
        .all()
    )


def enroll_self(db: Session, account_id: int, course_id: int) -> Enrollment:
    student = get_own_student(db, account_id)
    if db.get(Course, course_id) is None:
        raise NotFoundError('Course not found')

    if enrollments.find_enrollment(db, student.id, course_id) is not None:
        raise ConflictError(SELF_ALREADY_ENROLLED_MESSAGE)

    enrollment = enrollments.insert_enrollment(db, student.id, course_id, SELF_ALREADY_ENROLLED_MESSAGE)
    logger.info('Student %s enrolled in course %s', student.id, course_id)
    return enrollment


def drop_self(db: Session, account_id: int, course_id: int) -> None:
    student = get_own_student(db, account_id)
    enrollment = enrollments.find_enrollment(db, student.id, course_id)
    if enrollment is None:
        raise NotFoundError('Enrollment not found')

    db.delete(enrollment)
    db.commit()
    logger.info('Student %s dropped course %s', student.id, course_id)
