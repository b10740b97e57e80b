"""Administrative CRUD over courses."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from backend.core.errors import (
    ConflictError,
    NotFoundError,
    is_foreign_key_violation,
    is_unique_violation,
    storage_error,
)
from backend.models.course import Course
from backend.models.enrollment import Enrollment
from backend.services.pagination import Page, Paging, paginate
from backend.services.validation import require_text

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = 'A course with this name already exists.'
REFERENCED_MESSAGE = 'Course has enrollments and cannot be deleted.'


def parse_course_name(name: Any) -> str:
    return require_text(name, 'Course name is required')


def list_courses(db: Session, paging: Paging, search: str | None = None) -> Page:
    query = db.query(Course)
    term = (search or '').strip()
    if term:
        query = query.filter(Course.name.icontains(term, autoescape=True))
    return paginate(query.order_by(Course.id.desc()), paging)


def get_course(db: Session, course_id: int) -> Course:
    course = (
        db.query(Course)
        .options(selectinload(Course.enrollments).selectinload(Enrollment.student))
        .filter(Course.id == course_id)
        .first()
    )
    if course is None:
        raise NotFoundError('Course not found')
    return course


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
        if is_foreign_key_violation(exc):
            raise ConflictError(REFERENCED_MESSAGE) from exc
        raise storage_error(exc) from exc


def create_course(db: Session, name: str) -> Course:
    course = Course(name=name)
    db.add(course)
    _commit(db)
    db.refresh(course)
    logger.info('Created course %s', course.id)
    return course


def update_course(db: Session, course_id: int, name: str) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFoundError('Course not found')

    course.name = name
    _commit(db)
    db.refresh(course)
    return course


def delete_course(db: Session, course_id: int) -> None:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFoundError('Course not found')

    referenced = db.query(Enrollment.id).filter(Enrollment.course_id == course_id).first()
    if referenced is not None:
        raise ConflictError(REFERENCED_MESSAGE)

    db.delete(course)
    _commit(db)
    logger.info('Deleted course %s', course_id)
