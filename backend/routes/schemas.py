"""Response and request models shared across routers."""

from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar('T')


class ApiModel(BaseModel):
    """Reads ORM attributes and speaks camelCase on the wire."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PageResponse(ApiModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int


class MessageResponse(ApiModel):
    message: str


class CourseSummary(ApiModel):
    id: int
    name: str


class StudentSummary(ApiModel):
    id: int
    first_name: str
    last_name: str


class CourseResponse(ApiModel):
    id: int
    name: str
    created_at: datetime


class StudentResponse(ApiModel):
    id: int
    user_id: int | None = None
    first_name: str
    last_name: str
    birth_date: date
    created_at: datetime


class EnrollmentResponse(ApiModel):
    id: int
    student_id: int
    course_id: int
    created_at: datetime
    student: StudentSummary
    course: CourseSummary


ERROR_RESPONSES = {
    400: {'model': MessageResponse},
    401: {'model': MessageResponse},
    403: {'model': MessageResponse},
    404: {'model': MessageResponse},
    409: {'model': MessageResponse},
}
