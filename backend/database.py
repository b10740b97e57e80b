import logging
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str, **engine_options) -> None:
        self.url = url
        self.is_sqlite = url.startswith('sqlite')

        if self.is_sqlite:
            connect_args = engine_options.pop('connect_args', {})
            connect_args.setdefault('check_same_thread', False)
            engine_options['connect_args'] = connect_args

        self.engine = create_engine(url, **engine_options)

        if self.is_sqlite:
            event.listen(self.engine, 'connect', _enable_sqlite_foreign_keys)

        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_schema(self) -> None:
        # Import models so they are registered on Base.metadata.
        from backend.models import course, enrollment, student, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        logger.info('Disposing database engine for %s', self.engine.url.render_as_string(hide_password=True))
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
