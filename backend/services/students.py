"""Administrative CRUD over student profiles."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from backend.core.errors import NotFoundError, storage_error
from backend.models.enrollment import Enrollment
from backend.models.student import Student
from backend.services.pagination import Page, Paging, paginate
from backend.services.validation import parse_birth_date, require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentFields:
    first_name: str
    last_name: str
    birth_date: date


def parse_student_fields(first_name: Any, last_name: Any, birth_date: Any) -> StudentFields:
    return StudentFields(
        first_name=require_text(first_name, 'First name is required'),
        last_name=require_text(last_name, 'Last name is required'),
        birth_date=parse_birth_date(birth_date),
    )


def list_students(db: Session, paging: Paging, search: str | None = None) -> Page:
    query = db.query(Student)
    term = (search or '').strip()
    if term:
        query = query.filter(
            or_(
                Student.first_name.icontains(term, autoescape=True),
                Student.last_name.icontains(term, autoescape=True),
            )
        )
    return paginate(query.order_by(Student.id.desc()), paging)


def get_student(db: Session, student_id: int) -> Student:
    student = (
        db.query(Student)
        .options(selectinload(Student.enrollments).selectinload(Enrollment.course))
        .filter(Student.id == student_id)
        .first()
    )
    if student is None:
        raise NotFoundError('Student not found')
    return student


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise storage_error(exc) from exc


def create_student(db: Session, fields: StudentFields) -> Student:
    student = Student(
        first_name=fields.first_name,
        last_name=fields.last_name,
        birth_date=fields.birth_date,
    )
    db.add(student)
    _commit(db)
    db.refresh(student)
    logger.info('Created roster student %s', student.id)
    return student


def update_student(db: Session, student_id: int, fields: StudentFields) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFoundError('Student not found')

    student.first_name = fields.first_name
    student.last_name = fields.last_name
    student.birth_date = fields.birth_date
    _commit(db)
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: int) -> None:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFoundError('Student not found')

    db.delete(student)
    _commit(db)
    logger.info('Deleted student %s', student_id)
