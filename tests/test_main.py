import logging

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from backend.main import create_app
from backend.routes import course_routes


def test_root_reports_status(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'status': 'Enrollment API Running'}


def test_unknown_route_uses_message_body(client) -> None:
    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert response.json() == {'message': 'Not Found'}


def test_unmapped_storage_failure_is_a_generic_500(database, admin_headers, monkeypatch) -> None:
    def broken(*_args, **_kwargs):
        raise OperationalError('SELECT', {}, Exception('connection refused at 10.0.0.5'))

    monkeypatch.setattr(course_routes.courses, 'list_courses', broken)

    with TestClient(create_app(database), raise_server_exceptions=False) as client:
        response = client.get('/api/courses', headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {'message': 'Internal server error'}


def test_unexpected_exception_does_not_leak_details(database, admin_headers, monkeypatch) -> None:
    def broken(*_args, **_kwargs):
        raise RuntimeError('secret internals')

    monkeypatch.setattr(course_routes.courses, 'list_courses', broken)

    with TestClient(create_app(database), raise_server_exceptions=False) as client:
        response = client.get('/api/courses', headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {'message': 'Internal server error'}


def test_request_log_line_written_for_successful_requests(client, caplog) -> None:
    caplog.set_level(logging.INFO, logger='backend.main')

    client.get('/')

    assert any('GET / - Status: 200' in record.getMessage() for record in caplog.records)


def test_request_log_line_written_when_handler_raises(database, admin_headers, monkeypatch, caplog) -> None:
    def broken(*_args, **_kwargs):
        raise RuntimeError('secret internals')

    monkeypatch.setattr(course_routes.courses, 'list_courses', broken)
    caplog.set_level(logging.INFO, logger='backend.main')

    with TestClient(create_app(database), raise_server_exceptions=False) as client:
        client.get('/api/courses', headers=admin_headers)

    assert any('GET /api/courses - Status: 500' in record.getMessage() for record in caplog.records)
