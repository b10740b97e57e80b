"""Input parsing helpers shared by the resource services."""

import math
from datetime import date, datetime
from typing import Any

from backend.core.errors import BadRequestError, NotFoundError

# Primary keys are signed 64-bit integers in every supported database.
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def require_text(value: Any, message: str) -> str:
    """Return ``value`` as a trimmed string, or fail with ``message``."""
    if value is None or isinstance(value, (dict, list)):
        raise BadRequestError(message)
    text = str(value).strip()
    if not text:
        raise BadRequestError(message)
    return text


def parse_id(value: Any, message: str = 'Invalid id', not_found: str = 'Record not found') -> int:
    """Parse a numeric identifier from a path segment or JSON value.

    Non-integral input fails with ``message`` (400). An integral id that no
    row can have because it does not fit a 64-bit key fails with
    ``not_found`` (404).
    """
    if value is None or isinstance(value, bool):
        raise BadRequestError(message)
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                parsed = float(text)
            except ValueError:
                raise BadRequestError(message) from None
            if not math.isfinite(parsed) or not parsed.is_integer():
                raise BadRequestError(message)
            number = int(parsed)
    if not MIN_ID <= number <= MAX_ID:
        raise NotFoundError(not_found)
    return number


def parse_birth_date(value: Any, today: date | None = None) -> date:
    """Parse a birth date given as ``YYYY-MM-DD`` or an ISO timestamp.

    Dates after ``today`` are rejected; today itself is accepted.
    """
    raw = require_text(value, 'Birth date is required')

    try:
        parsed = date.fromisoformat(raw)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(raw.replace('Z', '+00:00')).date()
        except ValueError:
            raise BadRequestError('Birth date is invalid') from None

    if parsed > (today or date.today()):
        raise BadRequestError('Birth date cannot be in the future')
    return parsed


def normalize_email(value: Any) -> str:
    return require_text(value, 'Email is required').lower()
