import pytest

from backend.models.course import Course
from backend.services.pagination import MAX_PAGE, Paging, paginate, parse_paging


@pytest.mark.parametrize(
    ('page', 'page_size', 'expected'),
    [
        (None, None, Paging(page=1, page_size=10)),
        ('', '', Paging(page=1, page_size=10)),
        ('3', '25', Paging(page=3, page_size=25)),
        ('0', '0', Paging(page=1, page_size=1)),
        ('-4', '-4', Paging(page=1, page_size=1)),
        ('2', '101', Paging(page=2, page_size=100)),
        ('abc', 'xyz', Paging(page=1, page_size=10)),
        ('99999999999999999999', '100', Paging(page=MAX_PAGE, page_size=100)),
    ],
)
def test_parse_paging_coerces_values(page, page_size, expected: Paging) -> None:
    assert parse_paging(page, page_size) == expected


def test_offset_skips_previous_pages() -> None:
    assert Paging(page=3, page_size=20).offset == 40


def test_paginate_counts_all_rows_and_limits_items(db_session) -> None:
    db_session.add_all([Course(name=f'Course {index}') for index in range(7)])
    db_session.commit()

    result = paginate(db_session.query(Course).order_by(Course.id), Paging(page=2, page_size=3))

    assert result.total == 7
    assert [course.name for course in result.items] == ['Course 3', 'Course 4', 'Course 5']


def test_paginate_past_the_end_is_empty(db_session) -> None:
    db_session.add(Course(name='Only'))
    db_session.commit()

    result = paginate(db_session.query(Course), Paging(page=5, page_size=10))

    assert result.total == 1
    assert result.items == []


def test_paginate_on_the_last_allowed_page_is_empty(db_session) -> None:
    db_session.add(Course(name='Only'))
    db_session.commit()

    result = paginate(db_session.query(Course), parse_paging('99999999999999999999', '100'))

    assert result.total == 1
    assert result.items == []
    assert result.page == MAX_PAGE
