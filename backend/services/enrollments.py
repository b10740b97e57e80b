"""Enrollment management for administrators."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from backend.core.errors import ConflictError, NotFoundError, is_unique_violation, storage_error
from backend.models.course import Course
from backend.models.enrollment import Enrollment
from backend.models.student import Student
from backend.services.pagination import Page, Paging, paginate

logger = logging.getLogger(__name__)

ALREADY_ENROLLED_MESSAGE = 'This student is already enrolled in the selected course.'


def _with_summaries(db: Session):
    return db.query(Enrollment).options(
        joinedload(Enrollment.student),
        joinedload(Enrollment.course),
    )


def list_enrollments(db: Session, paging: Paging) -> Page:
    return paginate(_with_summaries(db).order_by(Enrollment.id.desc()), paging)


def get_enrollment(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = _with_summaries(db).filter(Enrollment.id == enrollment_id).first()
    if enrollment is None:
        raise NotFoundError('Enrollment not found')
    return enrollment


def find_enrollment(db: Session, student_id: int, course_id: int) -> Enrollment | None:
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id, Enrollment.course_id == course_id)
        .first()
    )


def insert_enrollment(db: Session, student_id: int, course_id: int, conflict_message: str) -> Enrollment:
    """Insert the pair, reporting a unique violation as ``conflict_message``.

    Existence checks made before calling this are advisory; the storage
    constraint decides when two writers race for the same pair.
    """
    enrollment = Enrollment(student_id=student_id, course_id=course_id)
    db.add(enrollment)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise ConflictError(conflict_message) from exc
        raise storage_error(exc) from exc
    db.refresh(enrollment)
    return enrollment


def create_enrollment(db: Session, student_id: int, course_id: int) -> Enrollment:
    if db.get(Student, student_id) is None:
        raise NotFoundError('Student not found')
    if db.get(Course, course_id) is None:
        raise NotFoundError('Course not found')

    enrollment = insert_enrollment(db, student_id, course_id, ALREADY_ENROLLED_MESSAGE)
    logger.info('Enrolled student %s in course %s', student_id, course_id)
    return get_enrollment(db, enrollment.id)


def delete_enrollment(db: Session, enrollment_id: int) -> None:
    enrollment = db.get(Enrollment, enrollment_id)
    if enrollment is None:
        raise NotFoundError('Enrollment not found')

    db.delete(enrollment)
    db.commit()
    logger.info('Deleted enrollment %s', enrollment_id)
