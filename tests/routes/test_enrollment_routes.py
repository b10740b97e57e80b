import pytest


def _enroll(client, headers, student_id, course_id):
    return client.post('/api/enrollments', json={'studentId': student_id, 'courseId': course_id}, headers=headers)


def test_create_enrollment(client, admin_headers, make_student, make_course) -> None:
    student_id = make_student()
    course_id = make_course('Physics')

    response = _enroll(client, admin_headers, student_id, course_id)

    assert response.status_code == 201
    body = response.json()
    assert body['studentId'] == student_id
    assert body['courseId'] == course_id
    assert body['course'] == {'id': course_id, 'name': 'Physics'}
    assert body['student']['firstName'] == 'Grace'


def test_create_enrollment_accepts_numeric_strings(client, admin_headers, make_student, make_course) -> None:
    student_id = make_student()
    course_id = make_course('Physics')

    response = _enroll(client, admin_headers, str(student_id), str(course_id))

    assert response.status_code == 201


def test_duplicate_enrollment_conflicts(client, admin_headers, make_student, make_course) -> None:
    student_id = make_student()
    course_id = make_course('Physics')
    assert _enroll(client, admin_headers, student_id, course_id).status_code == 201

    response = _enroll(client, admin_headers, student_id, course_id)

    assert response.status_code == 409
    assert response.json() == {'message': 'This student is already enrolled in the selected course.'}


def test_enrollment_with_unknown_course_returns_404(client, admin_headers, make_student) -> None:
    student_id = make_student()

    response = _enroll(client, admin_headers, student_id, 999)

    assert response.status_code == 404
    assert response.json() == {'message': 'Course not found'}


def test_enrollment_with_unknown_student_returns_404(client, admin_headers, make_course) -> None:
    course_id = make_course('Physics')

    response = _enroll(client, admin_headers, 999, course_id)

    assert response.status_code == 404
    assert response.json() == {'message': 'Student not found'}


@pytest.mark.parametrize(
    ('payload', 'message'),
    [
        ({'courseId': 1}, 'studentId is required'),
        ({'studentId': 'abc', 'courseId': 1}, 'studentId is required'),
        ({'studentId': 1}, 'courseId is required'),
        ({'studentId': 1, 'courseId': True}, 'courseId is required'),
    ],
)
def test_create_enrollment_validates_ids(client, admin_headers, payload: dict, message: str) -> None:
    response = client.post('/api/enrollments', json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'message': message}


def test_list_and_get_enrollments(client, admin_headers, make_student, make_course) -> None:
    student_id = make_student()
    first = _enroll(client, admin_headers, student_id, make_course('Physics')).json()
    second = _enroll(client, admin_headers, student_id, make_course('Mathematics')).json()

    listing = client.get('/api/enrollments', params={'pageSize': 1}, headers=admin_headers).json()
    assert listing['total'] == 2
    assert [item['id'] for item in listing['items']] == [second['id']]

    detail = client.get(f"/api/enrollments/{first['id']}", headers=admin_headers)
    assert detail.status_code == 200
    assert detail.json()['course']['name'] == 'Physics'


def test_get_missing_enrollment_returns_404(client, admin_headers) -> None:
    response = client.get('/api/enrollments/5', headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {'message': 'Enrollment not found'}


def test_delete_enrollment(client, admin_headers, make_student, make_course) -> None:
    created = _enroll(client, admin_headers, make_student(), make_course('Physics')).json()

    response = client.delete(f"/api/enrollments/{created['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert client.delete(f"/api/enrollments/{created['id']}", headers=admin_headers).status_code == 404


def test_enrollment_routes_forbidden_for_students(client, student_headers) -> None:
    response = client.post('/api/enrollments', json={'studentId': 1, 'courseId': 1}, headers=student_headers)

    assert response.status_code == 403
    assert response.json() == {'message': 'Forbidden'}


def test_enrollment_with_oversized_course_id_returns_404(client, admin_headers, make_student) -> None:
    student_id = make_student()

    response = _enroll(client, admin_headers, student_id, 10 ** 20)

    assert response.status_code == 404
    assert response.json() == {'message': 'Course not found'}


def test_enrollment_with_oversized_student_id_returns_404(client, admin_headers, make_course) -> None:
    course_id = make_course('Physics')

    response = _enroll(client, admin_headers, '99999999999999999999', course_id)

    assert response.status_code == 404
    assert response.json() == {'message': 'Student not found'}


def test_get_enrollment_with_oversized_id_returns_404(client, admin_headers) -> None:
    response = client.get('/api/enrollments/99999999999999999999', headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {'message': 'Enrollment not found'}
