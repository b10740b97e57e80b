"""
Course enrollment administration API.

Administrators manage students, courses and enrollments; students manage
their own profile and enrollments.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.core.errors import AppError, storage_error
from backend.database import Database
from backend.routes import auth_routes, course_routes, enrollment_routes, me_routes, student_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'message': message})


def create_app(database: Database | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config.validate_runtime_config()
        db = database or Database(config.DATABASE_URL, echo=config.SQL_ECHO)
        try:
            db.create_schema()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
            db.dispose()
            raise
        app.state.database = db
        logger.info('Enrollment API started')

        yield

        logger.info('Shutting down enrollment API...')
        db.dispose()

    app = FastAPI(title='Course Enrollment API', version='1.0.0', lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.middleware('http')
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        # Exceptions raised downstream are rendered as 500 further out.
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                '%s %s - Status: %s - Duration: %.2fms',
                request.method,
                request.url.path,
                status_code,
                duration_ms,
            )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _message(status.HTTP_400_BAD_REQUEST, 'Invalid request body')

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={'message': str(exc.detail)},
            headers=getattr(exc, 'headers', None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        mapped = storage_error(exc)
        if mapped.status_code >= 500:
            logger.error('Unhandled storage error on %s %s', request.method, request.url.path, exc_info=exc)
        return _message(mapped.status_code, mapped.message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error('Unhandled exception: %s', exc, exc_info=exc)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')

    @app.get('/')
    def root():
        return {'status': 'Enrollment API Running'}

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(student_routes.router, prefix='/api/students')
    app.include_router(course_routes.router, prefix='/api/courses')
    app.include_router(enrollment_routes.router, prefix='/api/enrollments')
    app.include_router(me_routes.router, prefix='/api/me')

    return app


app = create_app()


if __name__ == '__main__':
    import uvicorn

    uvicorn.run('backend.main:app', host='0.0.0.0', port=8000, log_level=config.LOG_LEVEL.lower())
