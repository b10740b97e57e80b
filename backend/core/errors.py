"""Application error types and storage error mapping.

Every failure that reaches a client is one of the ``AppError`` variants
below. Services raise them directly; storage failures that escape a service
are translated by :func:`storage_error` at the HTTP boundary.
"""

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

UNIQUE_VIOLATION_SQLSTATE = "23505"
FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"


class AppError(Exception):
    """Base class for errors rendered as ``{"message": ...}`` responses."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad request"


class UnauthenticatedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Record not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Unique constraint violated"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


def _sqlstate(exc: IntegrityError) -> str | None:
    original = exc.orig
    return getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)


def is_unique_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(exc.orig).lower()
    return "unique constraint" in text or "duplicate key" in text


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc) == FOREIGN_KEY_VIOLATION_SQLSTATE:
        return True
    return "foreign key constraint" in str(exc.orig).lower()


def storage_error(exc: SQLAlchemyError) -> AppError:
    """Map a storage failure onto the error taxonomy.

    Anything that is not a recognised constraint violation or a missing
    row collapses to a generic 500 so driver details never reach clients.
    """
    if isinstance(exc, IntegrityError):
        if is_unique_violation(exc):
            return ConflictError()
        if is_foreign_key_violation(exc):
            return ConflictError("Record is still referenced by other records")
    if isinstance(exc, NoResultFound):
        return NotFoundError()
    return InternalError()
