"""Registration and login."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from backend.auth import jwt_handler
from backend.auth.passwords import hash_password, verify_password
from backend.core.errors import (
    BadRequestError,
    ConflictError,
    UnauthenticatedError,
    is_unique_violation,
    storage_error,
)
from backend.models.student import Student
from backend.models.user import Role, User
from backend.services.students import parse_student_fields
from backend.services.validation import normalize_email

logger = logging.getLogger(__name__)

EMAIL_IN_USE_MESSAGE = 'Email is already in use.'
INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'


@dataclass
class AuthResult:
    token: str
    user: User


def _require_password(password: Any) -> str:
    if not isinstance(password, str) or not password:
        raise BadRequestError('Password is required')
    return password


def issue_token(user: User) -> str:
    return jwt_handler.create_access_token(user_id=user.id, role=user.role, email=user.email)


def find_user_by_email(db: Session, email: str) -> User | None:
    return (
        db.query(User)
        .options(selectinload(User.student))
        .filter(User.email == email)
        .first()
    )


def register_student(
    db: Session,
    email: Any,
    password: Any,
    first_name: Any,
    last_name: Any,
    birth_date: Any,
) -> AuthResult:
    normalized_email = normalize_email(email)
    if find_user_by_email(db, normalized_email) is not None:
        raise ConflictError(EMAIL_IN_USE_MESSAGE)

    raw_password = _require_password(password)
    fields = parse_student_fields(first_name, last_name, birth_date)

    user = User(
        email=normalized_email,
        hashed_password=hash_password(raw_password),
        role=Role.STUDENT.value,
    )
    user.student = Student(
        first_name=fields.first_name,
        last_name=fields.last_name,
        birth_date=fields.birth_date,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise ConflictError(EMAIL_IN_USE_MESSAGE) from exc
        raise storage_error(exc) from exc

    db.refresh(user)
    logger.info('Registered student account %s', user.id)
    return AuthResult(token=issue_token(user), user=user)


def login(db: Session, email: Any, password: Any) -> AuthResult:
    normalized_email = normalize_email(email)
    raw_password = _require_password(password)

    user = find_user_by_email(db, normalized_email)
    if user is None or not verify_password(raw_password, user.hashed_password):
        logger.warning('Failed login attempt')
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)

    return AuthResult(token=issue_token(user), user=user)
